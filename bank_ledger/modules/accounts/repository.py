"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence.

    Implementations apply no business rules. ``save`` inserts when the account
    has no id and otherwise updates it, failing with
    :class:`~bank_ledger.modules.common.ConcurrentUpdateError` when the stored
    version no longer matches ``account.version``.
    """

    async def find_by_number(self, account_number: str) -> Account | None:
        ...

    async def find_by_id(self, account_id: int) -> Account | None:
        ...

    async def list_accounts(self) -> Sequence[Account]:
        ...

    async def exists_by_number(self, account_number: str) -> bool:
        ...

    async def save(self, account: Account) -> Account:
        ...

    async def delete_by_id(self, account_id: int) -> None:
        ...
