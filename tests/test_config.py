import logging

from sqlalchemy import inspect, text

from bank_ledger.core.config import DatabaseSettings, LoggingSettings, Settings
from bank_ledger.core.container import ApplicationContainer
from bank_ledger.core.logging import SERVICE_LOGGER, setup_logging
from bank_ledger.infrastructure.database.session import engine_options, get_engine
from bank_ledger.interfaces.http.errors import status_for_error
from bank_ledger.modules.accounts import AccountNotFoundError, InsufficientFundsError
from bank_ledger.modules.common import ConcurrentUpdateError, LedgerError, StoreFailureError


def test_defaults():
    settings = Settings()
    assert settings.port == 8080
    assert settings.api_prefix == "/api"
    assert settings.ledger.max_conflict_retries == 3
    assert settings.ledger.check_incoming_pending_on_delete is False


def test_nested_environment_overrides(monkeypatch):
    monkeypatch.setenv("LEDGER__MAX_CONFLICT_RETRIES", "7")
    monkeypatch.setenv("DATABASE__URL", "sqlite+aiosqlite:///./other.db")
    monkeypatch.setenv("SERVER__PORT", "9090")

    settings = Settings()

    assert settings.ledger.max_conflict_retries == 7
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"
    assert settings.port == 9090


def test_setup_logging_writes_to_rotating_file(tmp_path):
    settings = Settings(logging=LoggingSettings(directory=tmp_path / "logs", level="DEBUG"))

    logger = setup_logging(settings)
    logging.getLogger(f"{SERVICE_LOGGER}.tests").info("hello ledger")
    for handler in logger.handlers:
        handler.flush()

    assert logger.name == SERVICE_LOGGER
    assert len(logger.handlers) == 2
    assert "hello ledger" in settings.log_file.read_text(encoding="utf-8")

    # Reconfiguring replaces the handlers instead of stacking them
    setup_logging(settings)
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []


def test_error_status_mapping():
    assert status_for_error(AccountNotFoundError("1")) == 404
    assert status_for_error(InsufficientFundsError(1, 2)) == 409
    assert status_for_error(StoreFailureError("down")) == 503
    assert status_for_error(ConcurrentUpdateError("raced")) == 503
    assert status_for_error(LedgerError("other")) == 500


async def test_container_startup_prepares_database(tmp_path):
    settings = Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}"),
        logging=LoggingSettings(directory=tmp_path / "logs"),
    )
    container = ApplicationContainer(settings=settings)

    await container.startup()
    try:
        async with get_engine().connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            foreign_keys = (await conn.execute(text("PRAGMA foreign_keys"))).scalar_one()
    finally:
        await container.shutdown()
        logger = logging.getLogger(SERVICE_LOGGER)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    assert {"accounts", "transfers"} <= set(tables)
    assert foreign_keys == 1
    assert "Ledger ready" in settings.log_file.read_text(encoding="utf-8")


def test_server_backend_engine_options():
    settings = Settings(database=DatabaseSettings(url="postgresql+asyncpg://ledger@db/ledger", pool_size=5))

    options = engine_options(settings)

    assert options["pool_pre_ping"] is True
    assert options["pool_size"] == 5
    assert "max_overflow" not in options
    assert "pool_pre_ping" not in engine_options(Settings())
