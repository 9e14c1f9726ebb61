"""
Logging configuration for the ledger service.

Creates a rotating file logger under the configured log directory and a
console handler for warnings and above.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from bank_ledger.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVICE_LOGGER = "bank_ledger"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """
    Configure root + service loggers.

    Safe to call more than once; handlers on the service logger are replaced.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    logger = logging.getLogger(SERVICE_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    log_dir = settings.logging.directory
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.log_file,
        maxBytes=settings.logging.max_bytes,
        backupCount=settings.logging.backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    # SQL echo is governed by database.echo; keep the engine logger quiet otherwise
    if not settings.database.echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logger


__all__ = ["setup_logging", "LOG_FORMAT", "DATE_FORMAT", "SERVICE_LOGGER"]
