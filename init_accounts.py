"""
Seed the demo accounts.

Creates the three sample accounts used in local development when they do
not exist yet.
"""
import asyncio
from decimal import Decimal

from bank_ledger.infrastructure.database.repositories import SqlAccountRepository
from bank_ledger.infrastructure.database.session import get_session, init_db
from bank_ledger.modules.accounts import Account

DEMO_ACCOUNTS = [
    ("1234567890", "Juan Pérez", Decimal("1000.00")),
    ("0987654321", "María García", Decimal("2500.50")),
    ("1111222233", "Carlos López", Decimal("500.00")),
]


async def create_demo_accounts():
    """Create the demo accounts that are missing."""
    await init_db()

    async for db in get_session():
        repository = SqlAccountRepository(db)
        for account_number, owner_name, balance in DEMO_ACCOUNTS:
            if await repository.exists_by_number(account_number):
                print(f"Account already exists: {account_number}")
                continue
            await repository.save(
                Account(id=None, account_number=account_number, owner_name=owner_name, balance=balance)
            )
            print(f"Created account {account_number} ({owner_name}) with balance {balance}")


if __name__ == "__main__":
    asyncio.run(create_demo_accounts())
