"""Pydantic schemas used by the HTTP layer."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bank_ledger.modules.transfers.models import TransferStatus


class TransferCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    source_account_number: str = Field(..., min_length=1, max_length=20)
    destination_account_number: str = Field(..., min_length=1, max_length=20)
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)
    description: Optional[str] = Field(default=None, max_length=255)


class TransferResultResponse(BaseModel):
    id: Optional[int] = None
    source_account_number: str
    destination_account_number: str
    amount: Decimal
    description: Optional[str] = None
    status: TransferStatus
    created_at: Optional[datetime] = None
    message: str
    error_type: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TransferRecordResponse(BaseModel):
    id: int
    source_account_id: Optional[int] = None
    destination_account_id: Optional[int] = None
    amount: Decimal
    description: Optional[str] = None
    status: TransferStatus
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AccountResponse(BaseModel):
    id: int
    account_number: str
    owner_name: str
    balance: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AccountUpdateRequest(BaseModel):
    """Every field optional; only the fields sent are applied."""

    owner_name: Optional[str] = Field(default=None, max_length=100)
    balance: Optional[Decimal] = Field(default=None, ge=0, max_digits=15, decimal_places=2)


class ErrorResponse(BaseModel):
    detail: str
    error_type: str
