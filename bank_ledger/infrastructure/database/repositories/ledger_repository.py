"""Atomic ledger write: both balances and the transfer record as one unit."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from bank_ledger.modules.accounts.models import Account
from bank_ledger.modules.common.exceptions import StoreFailureError
from bank_ledger.modules.transfers.models import Transfer
from bank_ledger.modules.transfers.repository import LedgerRepository

from .account_repository import SqlAccountRepository
from .base import AsyncRepository
from .transfer_repository import SqlTransferRepository

logger = logging.getLogger(__name__)


class SqlLedgerRepository(AsyncRepository, LedgerRepository):
    """Writes source, destination and transfer inside the session's transaction.

    On any store failure the transaction is rolled back so none of the three
    writes survive, then the error is re-raised.
    """

    def __init__(
        self,
        session: AsyncSession,
        accounts: SqlAccountRepository | None = None,
        transfers: SqlTransferRepository | None = None,
    ) -> None:
        super().__init__(session)
        self._accounts = accounts or SqlAccountRepository(session)
        self._transfers = transfers or SqlTransferRepository(session)

    async def apply_transfer(self, source: Account, destination: Account, transfer: Transfer) -> Transfer:
        try:
            await self._accounts.save(source)
            await self._accounts.save(destination)
            return await self._transfers.save(transfer)
        except StoreFailureError as exc:
            logger.warning(
                "Rolling back ledger write %s -> %s: %s",
                source.account_number,
                destination.account_number,
                exc,
            )
            await self.session.rollback()
            raise
