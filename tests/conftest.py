"""
Pytest configuration and fixtures for the ledger tests
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bank_ledger.infrastructure.database import Base, enable_sqlite_foreign_keys
from bank_ledger.infrastructure.database import models  # noqa: F401
from bank_ledger.infrastructure.database.repositories import SqlAccountRepository
from bank_ledger.modules.accounts import Account
from bank_ledger.modules.transfers import TransferService

from .fakes import InMemoryAccountRepository, InMemoryLedgerRepository, InMemoryTransferRepository

ACCOUNT_A = "1234567890"
ACCOUNT_B = "0987654321"
ACCOUNT_C = "1111222233"
ACCOUNT_EMPTY = "5555000000"

DEMO_ACCOUNTS = [
    (ACCOUNT_A, "Juan Pérez", Decimal("1000.00")),
    (ACCOUNT_B, "María García", Decimal("2500.50")),
    (ACCOUNT_C, "Carlos López", Decimal("500.00")),
    (ACCOUNT_EMPTY, "Ana Torres", Decimal("0.00")),
]


@pytest.fixture
async def engine():
    """One private in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def seed_accounts(session: AsyncSession) -> dict[str, Account]:
    repository = SqlAccountRepository(session)
    accounts = {}
    for account_number, owner_name, balance in DEMO_ACCOUNTS:
        accounts[account_number] = await repository.save(
            Account(id=None, account_number=account_number, owner_name=owner_name, balance=balance)
        )
    await session.commit()
    return accounts


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded(session) -> dict[str, Account]:
    return await seed_accounts(session)


@pytest.fixture
def sql_service(session, seeded) -> TransferService:
    return TransferService.with_session(session)


@pytest.fixture
def account_repo() -> InMemoryAccountRepository:
    repo = InMemoryAccountRepository()
    for account_number, owner_name, balance in DEMO_ACCOUNTS:
        repo.add(account_number, owner_name, balance)
    return repo


@pytest.fixture
def transfer_repo() -> InMemoryTransferRepository:
    return InMemoryTransferRepository()


@pytest.fixture
def ledger_repo(account_repo, transfer_repo) -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository(account_repo, transfer_repo)


@pytest.fixture
def service(account_repo, transfer_repo, ledger_repo) -> TransferService:
    return TransferService(accounts=account_repo, transfers=transfer_repo, ledger=ledger_repo)


@pytest.fixture
async def client(session_factory):
    """Async HTTP client against the app, backed by the test database."""
    from bank_ledger.interfaces.http.deps import get_db_session
    from bank_ledger.main import app

    async with session_factory() as session:
        await seed_accounts(session)

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
