"""Repository protocols for transfers and the atomic ledger write."""

from __future__ import annotations

from typing import Protocol, Sequence

from bank_ledger.modules.accounts.models import Account

from .models import Transfer, TransferStatus


class TransferRepository(Protocol):
    """Point lookups and saves of transfer records.

    Sequences are returned in insertion order.
    """

    async def find_by_id(self, transfer_id: int) -> Transfer | None:
        ...

    async def find_all(self) -> Sequence[Transfer]:
        ...

    async def find_by_source_id(self, account_id: int) -> Sequence[Transfer]:
        ...

    async def find_by_destination_id(self, account_id: int) -> Sequence[Transfer]:
        ...

    async def find_by_status(self, status: TransferStatus) -> Sequence[Transfer]:
        ...

    async def save(self, transfer: Transfer) -> Transfer:
        ...

    async def delete_by_id(self, transfer_id: int) -> None:
        ...


class LedgerRepository(Protocol):
    """Applies both balance updates and the transfer record as one unit.

    Either all three writes are kept or none are; a failure surfaces as a
    :class:`~bank_ledger.modules.common.StoreFailureError`.
    """

    async def apply_transfer(self, source: Account, destination: Account, transfer: Transfer) -> Transfer:
        ...
