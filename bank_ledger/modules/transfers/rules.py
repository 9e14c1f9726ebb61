"""Ledger invariant checks.

Pure functions: each inspects domain values and raises the matching
:class:`~bank_ledger.modules.common.BusinessRuleError` subclass, or returns
``None`` when the operation is allowed. None of them touch a store.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable

from bank_ledger.modules.accounts.exceptions import (
    HasPendingTransfersError,
    InsufficientFundsError,
    InvalidBalanceError,
    NonZeroBalanceError,
)
from bank_ledger.modules.accounts.models import Account

from .exceptions import InvalidAmountError, InvalidStateTransitionError, SameAccountError
from .models import Transfer, TransferStatus

ZERO = Decimal("0")
CENT = Decimal("0.01")


def has_cent_scale(value: Decimal) -> bool:
    """True when ``value`` fits the two-decimal columns without rounding."""
    try:
        return value == value.quantize(CENT)
    except InvalidOperation:
        # Too many digits to quantize, so it cannot fit the columns either
        return False


def check_amount_scale(amount: Decimal) -> None:
    if not has_cent_scale(amount):
        raise InvalidAmountError(amount)


def check_positive_amount(amount: Decimal) -> None:
    if amount <= ZERO:
        raise InvalidAmountError(amount)


def check_amount(amount: Decimal) -> None:
    check_positive_amount(amount)
    check_amount_scale(amount)


def check_sufficient_funds(source: Account, amount: Decimal) -> None:
    if source.balance < amount:
        raise InsufficientFundsError(source.balance, amount)


def check_distinct_accounts(source: Account, destination: Account) -> None:
    if source.id == destination.id:
        raise SameAccountError(source.account_number)


def check_transfer(source: Account, destination: Account, amount: Decimal) -> None:
    """Run every check a transfer must pass before balances are touched."""
    check_amount(amount)
    check_sufficient_funds(source, amount)
    check_distinct_accounts(source, destination)


def check_non_negative_balance(balance: Decimal) -> None:
    if balance < ZERO:
        raise InvalidBalanceError(f"Balance cannot be negative: {balance}")
    if not has_cent_scale(balance):
        raise InvalidBalanceError(f"Balance must have at most two decimal places: {balance}")


def check_cancellable(transfer: Transfer) -> None:
    if transfer.status is not TransferStatus.PENDING:
        raise InvalidStateTransitionError(
            transfer.id, "cancel", transfer.status.value, TransferStatus.PENDING.value
        )


def check_deletable(transfer: Transfer) -> None:
    # COMPLETED and PENDING records stay: they are the trail of money that moved.
    if transfer.status is not TransferStatus.FAILED:
        raise InvalidStateTransitionError(
            transfer.id, "delete", transfer.status.value, TransferStatus.FAILED.value
        )


def check_account_deletable(account: Account, transfers: Iterable[Transfer]) -> None:
    if account.balance != ZERO:
        raise NonZeroBalanceError(account.account_number, account.balance)
    pending = [t.id for t in transfers if t.status is TransferStatus.PENDING]
    if pending:
        raise HasPendingTransfersError(account.account_number, pending)
