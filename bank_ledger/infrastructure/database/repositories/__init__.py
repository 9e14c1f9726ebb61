"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .ledger_repository import SqlLedgerRepository
from .transfer_repository import SqlTransferRepository

__all__ = [
    "SqlAccountRepository",
    "SqlLedgerRepository",
    "SqlTransferRepository",
]
