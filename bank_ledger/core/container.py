"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession

from bank_ledger.core.config import Settings, get_settings
from bank_ledger.core.logging import setup_logging
from bank_ledger.infrastructure.database.session import dispose_engine, get_engine, init_db
from bank_ledger.modules.transfers import TransferService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (logging, database engine) are initialised."""
        setup_logging(self.settings)
        get_engine(self.settings)

    async def startup(self) -> None:
        self.init_infrastructure()
        if self.settings.database.create_tables:
            await init_db()
        logger.info(
            "Ledger ready: max_conflict_retries=%s check_incoming_pending_on_delete=%s",
            self.settings.ledger.max_conflict_retries,
            self.settings.ledger.check_incoming_pending_on_delete,
        )

    async def shutdown(self) -> None:
        await dispose_engine()

    def transfer_service(self, session: AsyncSession) -> TransferService:
        return TransferService.with_session(session, self.settings.ledger)


@lru_cache()
def get_container() -> ApplicationContainer:
    return ApplicationContainer(settings=get_settings())


__all__ = ["ApplicationContainer", "get_container"]
