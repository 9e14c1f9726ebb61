"""Transfer domain specific exceptions."""

from __future__ import annotations

from decimal import Decimal

from bank_ledger.modules.common.exceptions import BusinessRuleError, NotFoundError


class TransferNotFoundError(NotFoundError):
    """Raised when the requested transfer cannot be found."""

    def __init__(self, transfer_id: int) -> None:
        self.transfer_id = transfer_id
        super().__init__(f"Transfer not found with id: {transfer_id}")


class SameAccountError(BusinessRuleError):
    """Raised when source and destination resolve to the same account."""

    def __init__(self, account_number: str) -> None:
        self.account_number = account_number
        super().__init__(f"Cannot transfer to the same account: {account_number}")


class InvalidStateTransitionError(BusinessRuleError):
    """Raised when a transfer's status does not allow the requested action."""

    def __init__(self, transfer_id: int | None, action: str, status: str, allowed: str) -> None:
        self.transfer_id = transfer_id
        self.action = action
        self.status = status
        super().__init__(
            f"Cannot {action} transfer {transfer_id}: only {allowed} transfers allowed, current status is {status}"
        )


class InvalidAmountError(BusinessRuleError):
    """Raised when a transfer amount is not positive or has sub-cent precision."""

    def __init__(self, amount: Decimal) -> None:
        self.amount = amount
        super().__init__(f"Invalid transfer amount: {amount}. Must be positive with at most two decimal places")
