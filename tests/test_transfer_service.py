from decimal import Decimal

import pytest

from bank_ledger.modules.accounts import AccountNotFoundError, InsufficientFundsError
from bank_ledger.modules.common import ConcurrentUpdateError, StoreFailureError
from bank_ledger.modules.transfers import InvalidAmountError, SameAccountError, TransferRequest, TransferStatus

from .conftest import ACCOUNT_A, ACCOUNT_B, ACCOUNT_C


async def test_rent_scenario_moves_money(service, account_repo, transfer_repo):
    response = await service.perform_transfer(
        TransferRequest(ACCOUNT_A, ACCOUNT_B, Decimal("150.00"), "rent")
    )

    assert response.status is TransferStatus.COMPLETED
    assert response.succeeded
    assert response.error is None
    assert response.amount == Decimal("150.00")
    assert response.description == "rent"
    assert response.message == "Transfer completed successfully"
    assert account_repo.balance_of(ACCOUNT_A) == Decimal("850.00")
    assert account_repo.balance_of(ACCOUNT_B) == Decimal("2650.50")

    stored = await transfer_repo.find_by_id(response.id)
    assert stored.status is TransferStatus.COMPLETED
    assert stored.source_account_id == 1
    assert stored.destination_account_id == 2


@pytest.mark.parametrize("amount", ["0.01", "499.99", "500.00"])
async def test_total_balance_is_conserved(service, account_repo, amount):
    before = account_repo.balance_of(ACCOUNT_C) + account_repo.balance_of(ACCOUNT_B)

    response = await service.perform_transfer(TransferRequest(ACCOUNT_C, ACCOUNT_B, Decimal(amount)))

    assert response.status is TransferStatus.COMPLETED
    assert account_repo.balance_of(ACCOUNT_C) == Decimal("500.00") - Decimal(amount)
    assert account_repo.balance_of(ACCOUNT_C) + account_repo.balance_of(ACCOUNT_B) == before


async def test_overdraw_scenario_leaves_failed_audit_record(service, account_repo, transfer_repo):
    response = await service.perform_transfer(TransferRequest(ACCOUNT_C, ACCOUNT_B, Decimal("600.00"), "x"))

    assert response.status is TransferStatus.FAILED
    assert isinstance(response.error, InsufficientFundsError)
    assert "insufficient funds" in response.message.lower()
    assert account_repo.balance_of(ACCOUNT_C) == Decimal("500.00")
    assert account_repo.balance_of(ACCOUNT_B) == Decimal("2500.50")

    record = await transfer_repo.find_by_id(response.id)
    assert record.status is TransferStatus.FAILED
    assert record.amount == Decimal("600.00")
    assert record.source_account_id == 3
    assert record.destination_account_id == 2
    assert record.description.startswith("x - FAILED: Insufficient funds")


async def test_same_account_fails_before_any_mutation(service, account_repo, ledger_repo):
    response = await service.perform_transfer(TransferRequest(ACCOUNT_A, ACCOUNT_A, Decimal("10.00"), "self"))

    assert response.status is TransferStatus.FAILED
    assert isinstance(response.error, SameAccountError)
    assert ledger_repo.calls == 0
    assert account_repo.balance_of(ACCOUNT_A) == Decimal("1000.00")


async def test_unknown_destination_references_resolved_source(service, transfer_repo):
    response = await service.perform_transfer(TransferRequest(ACCOUNT_A, "9999999999", Decimal("5.00"), "gift"))

    assert isinstance(response.error, AccountNotFoundError)
    assert response.error.account_number == "9999999999"
    assert "Destination account not found" in response.message
    record = await transfer_repo.find_by_id(response.id)
    assert record.source_account_id == 1
    assert record.destination_account_id is None
    assert record.description == "FAILED: Destination account not found: 9999999999"


async def test_unknown_source_references_resolved_destination(service, transfer_repo):
    response = await service.perform_transfer(TransferRequest("9999999999", ACCOUNT_B, Decimal("5.00")))

    assert isinstance(response.error, AccountNotFoundError)
    assert "Source account not found" in response.message
    record = await transfer_repo.find_by_id(response.id)
    assert record.source_account_id is None
    assert record.destination_account_id == 2


async def test_both_unknown_yields_unreferenced_record(service, transfer_repo):
    response = await service.perform_transfer(TransferRequest("1", "2", Decimal("5.00"), "ghost"))

    record = await transfer_repo.find_by_id(response.id)
    assert record.source_account_id is None
    assert record.destination_account_id is None
    assert record.description.startswith("FAILED: ")
    assert response.source_account_number == "1"
    assert response.destination_account_number == "2"


async def test_conflict_is_retried_then_succeeds(service, account_repo, ledger_repo):
    ledger_repo.conflicts_to_raise = 2

    response = await service.perform_transfer(TransferRequest(ACCOUNT_A, ACCOUNT_B, Decimal("100.00")))

    assert response.status is TransferStatus.COMPLETED
    assert ledger_repo.calls == 3
    assert account_repo.balance_of(ACCOUNT_A) == Decimal("900.00")


async def test_conflict_retries_are_bounded(service, account_repo, ledger_repo, transfer_repo):
    service.max_conflict_retries = 1
    ledger_repo.conflicts_to_raise = 5

    response = await service.perform_transfer(TransferRequest(ACCOUNT_A, ACCOUNT_B, Decimal("100.00")))

    assert response.status is TransferStatus.FAILED
    assert isinstance(response.error, ConcurrentUpdateError)
    assert ledger_repo.calls == 2
    assert account_repo.balance_of(ACCOUNT_A) == Decimal("1000.00")
    assert (await transfer_repo.find_by_id(response.id)).status is TransferStatus.FAILED


async def test_store_failure_during_apply_leaves_no_partial_write(service, account_repo, transfer_repo):
    transfer_repo.fail_saves = True

    with pytest.raises(StoreFailureError):
        await service.perform_transfer(TransferRequest(ACCOUNT_A, ACCOUNT_B, Decimal("100.00")))

    # Both the ledger write and the audit write hit the broken store
    assert account_repo.balance_of(ACCOUNT_A) == Decimal("1000.00")
    assert account_repo.balance_of(ACCOUNT_B) == Decimal("2500.50")
    assert transfer_repo.rows == {}


async def test_audit_write_failure_raises_the_rejection(service, transfer_repo):
    transfer_repo.fail_saves = True

    with pytest.raises(InsufficientFundsError):
        await service.perform_transfer(TransferRequest(ACCOUNT_C, ACCOUNT_B, Decimal("600.00")))

    assert transfer_repo.rows == {}


async def test_perform_transfer_never_produces_pending(service, transfer_repo):
    # PENDING exists in the state machine but no transfer path creates it
    await service.perform_transfer(TransferRequest(ACCOUNT_A, ACCOUNT_B, Decimal("1.00")))
    await service.perform_transfer(TransferRequest(ACCOUNT_C, ACCOUNT_B, Decimal("900.00")))

    statuses = {t.status for t in await transfer_repo.find_all()}
    assert statuses == {TransferStatus.COMPLETED, TransferStatus.FAILED}
    assert await transfer_repo.find_by_status(TransferStatus.PENDING) == []


@pytest.mark.parametrize("amount", ["0.004", "0", "-5.00"])
async def test_invalid_amount_rejected_without_touching_the_ledger(
    service, account_repo, transfer_repo, ledger_repo, amount
):
    response = await service.perform_transfer(TransferRequest(ACCOUNT_A, ACCOUNT_B, Decimal(amount), "dust"))

    assert response.status is TransferStatus.FAILED
    assert isinstance(response.error, InvalidAmountError)
    assert response.id is None
    assert response.message.startswith("Error: Invalid transfer amount")
    assert ledger_repo.calls == 0
    assert transfer_repo.rows == {}
    assert account_repo.balance_of(ACCOUNT_A) == Decimal("1000.00")
    assert account_repo.balance_of(ACCOUNT_B) == Decimal("2500.50")
