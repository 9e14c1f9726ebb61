"""Transfer orchestration service.

Owns every operation that mutates balances or writes transfer records:
moving money between two accounts, the transfer status state machine
(cancel/delete) and the guarded account update/delete paths.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from bank_ledger.core.config import LedgerSettings
from bank_ledger.modules.accounts.exceptions import AccountNotFoundError
from bank_ledger.modules.accounts.models import UNSET, Account, AccountUpdateInput
from bank_ledger.modules.accounts.repository import AccountRepository
from bank_ledger.modules.common.exceptions import ConcurrentUpdateError, LedgerError, StoreFailureError

from . import rules
from .audit import failed_transfer
from .exceptions import InvalidAmountError, TransferNotFoundError
from .models import Transfer, TransferRequest, TransferResponse, TransferStatus
from .repository import LedgerRepository, TransferRepository

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Transfer completed successfully"
CANCELLED_SUFFIX = "CANCELADA POR USUARIO"


@dataclass(slots=True)
class TransferService:
    accounts: AccountRepository
    transfers: TransferRepository
    ledger: LedgerRepository
    max_conflict_retries: int = 3
    check_incoming_pending_on_delete: bool = False

    @classmethod
    def with_session(cls, session: AsyncSession, settings: LedgerSettings | None = None) -> "TransferService":
        # Deferred import: infrastructure repositories import the domain modules.
        from bank_ledger.infrastructure.database.repositories import (
            SqlAccountRepository,
            SqlLedgerRepository,
            SqlTransferRepository,
        )

        settings = settings or LedgerSettings()
        accounts = SqlAccountRepository(session)
        transfers = SqlTransferRepository(session)
        return cls(
            accounts=accounts,
            transfers=transfers,
            ledger=SqlLedgerRepository(session, accounts, transfers),
            max_conflict_retries=settings.max_conflict_retries,
            check_incoming_pending_on_delete=settings.check_incoming_pending_on_delete,
        )

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------
    async def perform_transfer(self, request: TransferRequest) -> TransferResponse:
        """Move ``request.amount`` from source to destination.

        Always returns a :class:`TransferResponse`. A rejected attempt is
        recorded as a FAILED transfer and reported with ``status=FAILED`` and
        the underlying error in ``response.error``. The error is raised only
        when even the audit record cannot be written. Amounts that are not
        positive or carry sub-cent digits are rejected before any lookup and
        leave no record.
        """
        logger.info(
            "Starting transfer from=%s to=%s amount=%s",
            request.source_account_number,
            request.destination_account_number,
            request.amount,
        )
        try:
            rules.check_amount(request.amount)
        except InvalidAmountError as exc:
            # The amount columns cannot hold it, so no audit record either
            logger.error("Transfer rejected: %s", exc)
            return self._failure_response(request, exc, transfer_id=None, created_at=None)

        try:
            transfer, source, destination = await self._transfer_with_retries(request)
        except LedgerError as exc:
            logger.error(
                "Transfer failed from=%s to=%s amount=%s: %s",
                request.source_account_number,
                request.destination_account_number,
                request.amount,
                exc,
            )
            return await self._record_failure(request, exc)

        logger.info("Transfer completed: id=%s", transfer.id)
        return TransferResponse(
            id=transfer.id,
            source_account_number=source.account_number,
            destination_account_number=destination.account_number,
            amount=transfer.amount,
            description=transfer.description,
            status=transfer.status,
            created_at=transfer.created_at,
            message=SUCCESS_MESSAGE,
        )

    async def _transfer_with_retries(self, request: TransferRequest) -> tuple[Transfer, Account, Account]:
        attempt = 0
        while True:
            try:
                return await self._execute_transfer(request)
            except ConcurrentUpdateError as exc:
                attempt += 1
                if attempt > self.max_conflict_retries:
                    raise
                logger.warning(
                    "Concurrent update during transfer from=%s to=%s, retry %s/%s: %s",
                    request.source_account_number,
                    request.destination_account_number,
                    attempt,
                    self.max_conflict_retries,
                    exc,
                )

    async def _execute_transfer(self, request: TransferRequest) -> tuple[Transfer, Account, Account]:
        source = await self._require_account(request.source_account_number, "Source")
        destination = await self._require_account(request.destination_account_number, "Destination")

        rules.check_transfer(source, destination, request.amount)

        source.withdraw(request.amount)
        destination.deposit(request.amount)

        transfer = Transfer(
            id=None,
            source_account_id=source.id,
            destination_account_id=destination.id,
            amount=request.amount,
            description=request.description,
            status=TransferStatus.COMPLETED,
            created_at=_now(),
        )
        saved = await self.ledger.apply_transfer(source, destination, transfer)
        return saved, source, destination

    async def _record_failure(self, request: TransferRequest, error: LedgerError) -> TransferResponse:
        reason = str(error)
        try:
            source = await self.accounts.find_by_number(request.source_account_number)
            destination = await self.accounts.find_by_number(request.destination_account_number)
            audit = await self.transfers.save(failed_transfer(request, source, destination, reason, _now()))
        except StoreFailureError as audit_exc:
            logger.error("Could not write audit record for failed transfer: %s", audit_exc)
            raise error

        logger.info("Recorded failed transfer: id=%s", audit.id)
        return self._failure_response(request, error, transfer_id=audit.id, created_at=audit.created_at)

    @staticmethod
    def _failure_response(
        request: TransferRequest,
        error: LedgerError,
        transfer_id: int | None,
        created_at: datetime | None,
    ) -> TransferResponse:
        return TransferResponse(
            id=transfer_id,
            source_account_number=request.source_account_number,
            destination_account_number=request.destination_account_number,
            amount=request.amount,
            description=request.description,
            status=TransferStatus.FAILED,
            created_at=created_at,
            message=f"Error: {error}",
            error=error,
        )

    async def cancel_transfer(self, transfer_id: int) -> Transfer:
        """Move a PENDING transfer to FAILED. Balances are never reversed."""
        logger.info("Cancelling transfer: id=%s", transfer_id)
        transfer = await self._require_transfer(transfer_id)
        rules.check_cancellable(transfer)

        transfer.status = TransferStatus.FAILED
        if transfer.description:
            transfer.description = f"{transfer.description} - {CANCELLED_SUFFIX}"
        else:
            transfer.description = CANCELLED_SUFFIX
        saved = await self.transfers.save(transfer)
        logger.info("Transfer cancelled: id=%s", saved.id)
        return saved

    async def delete_transfer(self, transfer_id: int) -> None:
        logger.info("Deleting transfer: id=%s", transfer_id)
        transfer = await self._require_transfer(transfer_id)
        rules.check_deletable(transfer)
        await self.transfers.delete_by_id(transfer_id)
        logger.info("Transfer deleted: id=%s", transfer_id)

    async def get_all_transfers(self) -> Sequence[Transfer]:
        return await self.transfers.find_all()

    async def get_transfer_by_id(self, transfer_id: int) -> Transfer | None:
        return await self.transfers.find_by_id(transfer_id)

    async def get_transfers_by_status(self, status: TransferStatus) -> Sequence[Transfer]:
        return await self.transfers.find_by_status(status)

    async def get_transfer_history(self, account_number: str) -> list[Transfer]:
        """Outgoing transfers first, then incoming; empty for unknown accounts."""
        account = await self.accounts.find_by_number(account_number)
        if account is None:
            return []
        outgoing = await self.transfers.find_by_source_id(account.id)
        incoming = await self.transfers.find_by_destination_id(account.id)
        return [*outgoing, *incoming]

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    async def get_all_accounts(self) -> Sequence[Account]:
        return await self.accounts.list_accounts()

    async def get_account_by_number(self, account_number: str) -> Account | None:
        return await self.accounts.find_by_number(account_number)

    async def update_account(self, account_number: str, payload: AccountUpdateInput) -> Account:
        logger.info("Updating account: %s", account_number)
        account = await self._require_account(account_number)

        updated = False
        if payload.owner_name is not UNSET and payload.owner_name is not None and payload.owner_name.strip():
            account.owner_name = payload.owner_name
            updated = True
        if payload.balance is not UNSET and payload.balance is not None:
            rules.check_non_negative_balance(payload.balance)
            account.balance = payload.balance
            updated = True

        if not updated:
            return account

        account.updated_at = _now()
        saved = await self.accounts.save(account)
        logger.info("Account updated: %s", saved.account_number)
        return saved

    async def delete_account(self, account_number: str) -> None:
        logger.info("Deleting account: %s", account_number)
        account = await self._require_account(account_number)

        related = list(await self.transfers.find_by_source_id(account.id))
        if self.check_incoming_pending_on_delete:
            related.extend(await self.transfers.find_by_destination_id(account.id))
        rules.check_account_deletable(account, related)

        await self.accounts.delete_by_id(account.id)
        logger.info("Account deleted: %s", account_number)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _require_account(self, account_number: str, role: str | None = None) -> Account:
        account = await self.accounts.find_by_number(account_number)
        if account is None:
            raise AccountNotFoundError(account_number, role)
        return account

    async def _require_transfer(self, transfer_id: int) -> Transfer:
        transfer = await self.transfers.find_by_id(transfer_id)
        if transfer is None:
            raise TransferNotFoundError(transfer_id)
        return transfer


def _now() -> datetime:
    return datetime.now(timezone.utc)
