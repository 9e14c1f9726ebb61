"""Transfer service dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bank_ledger.core.container import ApplicationContainer, get_container
from bank_ledger.modules.transfers import TransferService

from .database import get_db_session


def get_transfer_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> TransferService:
    return container.transfer_service(db)


__all__ = ["get_transfer_service"]
