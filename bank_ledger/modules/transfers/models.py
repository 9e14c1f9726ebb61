"""Domain models for transfers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from bank_ledger.modules.common.exceptions import LedgerError


class TransferStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(slots=True)
class Transfer:
    id: Optional[int]
    source_account_id: Optional[int]
    destination_account_id: Optional[int]
    amount: Decimal
    description: Optional[str]
    status: TransferStatus
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class TransferRequest:
    source_account_number: str
    destination_account_number: str
    amount: Decimal
    description: Optional[str] = None


@dataclass(slots=True)
class TransferResponse:
    """Outcome of one transfer attempt.

    Failed attempts carry the audit record's id and the typed error that
    caused them in ``error``.
    """

    id: Optional[int]
    source_account_number: str
    destination_account_number: str
    amount: Decimal
    description: Optional[str]
    status: TransferStatus
    created_at: Optional[datetime]
    message: str
    error: Optional[LedgerError] = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return self.status is TransferStatus.COMPLETED
