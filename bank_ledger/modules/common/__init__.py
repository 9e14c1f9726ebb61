"""Shared abstractions used across ledger modules."""

from .exceptions import (
    BusinessRuleError,
    ConcurrentUpdateError,
    LedgerError,
    NotFoundError,
    StoreFailureError,
)

__all__ = [
    "BusinessRuleError",
    "ConcurrentUpdateError",
    "LedgerError",
    "NotFoundError",
    "StoreFailureError",
]
