"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select

from bank_ledger.infrastructure.database.models import Account as AccountModel
from bank_ledger.modules.accounts.models import Account
from bank_ledger.modules.accounts.repository import AccountRepository
from bank_ledger.modules.common.exceptions import ConcurrentUpdateError

from .base import AsyncRepository, store_errors


class SqlAccountRepository(AsyncRepository, AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    async def find_by_number(self, account_number: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.account_number == account_number)
        with store_errors("find account by number"):
            result = await self.session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def find_by_id(self, account_id: int) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        with store_errors("find account by id"):
            result = await self.session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_accounts(self) -> Sequence[Account]:
        stmt = select(AccountModel).order_by(AccountModel.id)
        with store_errors("list accounts"):
            result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def exists_by_number(self, account_number: str) -> bool:
        stmt = select(func.count()).select_from(AccountModel).where(AccountModel.account_number == account_number)
        with store_errors("check account existence"):
            result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def save(self, account: Account) -> Account:
        with store_errors("save account"):
            if account.id is None:
                model = AccountModel(
                    account_number=account.account_number,
                    owner_name=account.owner_name,
                    balance=account.balance,
                )
                if account.created_at is not None:
                    model.created_at = account.created_at
                    model.updated_at = account.updated_at or account.created_at
                self.session.add(model)
            else:
                model = await self.session.get(AccountModel, account.id)
                if model is None or model.version != account.version:
                    raise ConcurrentUpdateError(
                        f"account {account.account_number} was modified or removed since it was read"
                    )
                model.owner_name = account.owner_name
                model.balance = account.balance
                model.updated_at = account.updated_at or func.now()
            await self.session.flush()
            await self.session.refresh(model)
        return self._to_domain(model)

    async def delete_by_id(self, account_id: int) -> None:
        with store_errors("delete account"):
            model = await self.session.get(AccountModel, account_id)
            if model is None:
                return
            await self.session.delete(model)
            await self.session.flush()

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=model.id,
            account_number=model.account_number,
            owner_name=model.owner_name,
            balance=model.balance,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )
