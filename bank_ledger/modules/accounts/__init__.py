"""Account domain exports"""

from .exceptions import (
    AccountNotFoundError,
    HasPendingTransfersError,
    InsufficientFundsError,
    InvalidBalanceError,
    NonZeroBalanceError,
)
from .models import UNSET, Account, AccountUpdateInput
from .repository import AccountRepository

__all__ = [
    "Account",
    "AccountUpdateInput",
    "AccountRepository",
    "AccountNotFoundError",
    "HasPendingTransfersError",
    "InsufficientFundsError",
    "InvalidBalanceError",
    "NonZeroBalanceError",
    "UNSET",
]
