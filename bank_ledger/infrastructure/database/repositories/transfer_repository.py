"""SQLAlchemy implementation of the transfer repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select

from bank_ledger.infrastructure.database.models import Transfer as TransferModel
from bank_ledger.modules.common.exceptions import StoreFailureError
from bank_ledger.modules.transfers.models import Transfer, TransferStatus
from bank_ledger.modules.transfers.repository import TransferRepository

from .base import AsyncRepository, store_errors


class SqlTransferRepository(AsyncRepository, TransferRepository):
    """Transfer repository backed by SQLAlchemy models."""

    async def find_by_id(self, transfer_id: int) -> Transfer | None:
        stmt = select(TransferModel).where(TransferModel.id == transfer_id)
        with store_errors("find transfer"):
            result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def find_all(self) -> Sequence[Transfer]:
        return await self._find_where("list transfers")

    async def find_by_source_id(self, account_id: int) -> Sequence[Transfer]:
        return await self._find_where("find transfers by source", TransferModel.source_account_id == account_id)

    async def find_by_destination_id(self, account_id: int) -> Sequence[Transfer]:
        return await self._find_where(
            "find transfers by destination", TransferModel.destination_account_id == account_id
        )

    async def find_by_status(self, status: TransferStatus) -> Sequence[Transfer]:
        return await self._find_where("find transfers by status", TransferModel.status == status.value)

    async def save(self, transfer: Transfer) -> Transfer:
        with store_errors("save transfer"):
            if transfer.id is None:
                model = TransferModel()
                self.session.add(model)
            else:
                model = await self.session.get(TransferModel, transfer.id)
                if model is None:
                    raise StoreFailureError(f"save transfer failed: transfer {transfer.id} no longer exists")
            model.source_account_id = transfer.source_account_id
            model.destination_account_id = transfer.destination_account_id
            model.amount = transfer.amount
            model.description = transfer.description
            model.status = transfer.status.value
            if transfer.created_at is not None:
                model.created_at = transfer.created_at
            await self.session.flush()
            await self.session.refresh(model)
        return self._to_domain(model)

    async def delete_by_id(self, transfer_id: int) -> None:
        with store_errors("delete transfer"):
            model = await self.session.get(TransferModel, transfer_id)
            if model is None:
                return
            await self.session.delete(model)
            await self.session.flush()

    async def _find_where(self, operation: str, *criteria) -> Sequence[Transfer]:
        # Ascending id is insertion order
        stmt = select(TransferModel).where(*criteria).order_by(TransferModel.id)
        with store_errors(operation):
            result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: TransferModel) -> Transfer:
        return Transfer(
            id=model.id,
            source_account_id=model.source_account_id,
            destination_account_id=model.destination_account_id,
            amount=model.amount,
            description=model.description,
            status=TransferStatus(model.status),
            created_at=model.created_at,
        )
