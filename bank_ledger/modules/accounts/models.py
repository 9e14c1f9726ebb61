"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from .exceptions import InsufficientFundsError


@dataclass(slots=True)
class Account:
    id: Optional[int]
    account_number: str
    owner_name: str
    balance: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    def withdraw(self, amount: Decimal) -> None:
        if self.balance < amount:
            raise InsufficientFundsError(self.balance, amount)
        self.balance = self.balance - amount
        self.updated_at = datetime.now(timezone.utc)

    def deposit(self, amount: Decimal) -> None:
        self.balance = self.balance + amount
        self.updated_at = datetime.now(timezone.utc)


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    owner_name: Optional[str] | object = UNSET
    balance: Optional[Decimal] | object = UNSET
