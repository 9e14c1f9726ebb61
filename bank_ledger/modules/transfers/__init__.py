"""Transfer domain exports"""

from .exceptions import InvalidAmountError, InvalidStateTransitionError, SameAccountError, TransferNotFoundError
from .models import Transfer, TransferRequest, TransferResponse, TransferStatus
from .repository import LedgerRepository, TransferRepository
from .service import TransferService

__all__ = [
    "InvalidAmountError",
    "InvalidStateTransitionError",
    "LedgerRepository",
    "SameAccountError",
    "Transfer",
    "TransferNotFoundError",
    "TransferRepository",
    "TransferRequest",
    "TransferResponse",
    "TransferService",
    "TransferStatus",
]
