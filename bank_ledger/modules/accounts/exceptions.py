"""Account domain specific exceptions."""

from __future__ import annotations

from decimal import Decimal

from bank_ledger.modules.common.exceptions import BusinessRuleError, NotFoundError


class AccountNotFoundError(NotFoundError):
    """Raised when the requested account cannot be found."""

    def __init__(self, account_number: str, role: str | None = None) -> None:
        self.account_number = account_number
        self.role = role
        label = f"{role} account" if role else "Account"
        super().__init__(f"{label} not found: {account_number}")


class InsufficientFundsError(BusinessRuleError):
    """Raised when a withdrawal would drop the balance below zero."""

    def __init__(self, available: Decimal, requested: Decimal) -> None:
        self.available = available
        self.requested = requested
        super().__init__(f"Insufficient funds. Available: {available}, requested: {requested}")


class InvalidBalanceError(BusinessRuleError):
    """Raised when a balance adjustment would leave a negative balance."""


class NonZeroBalanceError(BusinessRuleError):
    """Raised when deleting an account that still holds funds."""

    def __init__(self, account_number: str, balance: Decimal) -> None:
        self.account_number = account_number
        self.balance = balance
        super().__init__(f"Cannot delete account {account_number} with a balance of {balance}")


class HasPendingTransfersError(BusinessRuleError):
    """Raised when deleting an account that is party to pending transfers."""

    def __init__(self, account_number: str, pending_ids: list[int]) -> None:
        self.account_number = account_number
        self.pending_ids = pending_ids
        super().__init__(f"Cannot delete account {account_number} with pending transfers: {pending_ids}")
