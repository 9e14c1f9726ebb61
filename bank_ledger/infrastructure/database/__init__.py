"""Database infrastructure helpers (engine, sessions, migrations)."""

from .base import Base
from .session import dispose_engine, enable_sqlite_foreign_keys, get_engine, get_session, init_db

__all__ = ["Base", "dispose_engine", "enable_sqlite_foreign_keys", "get_engine", "get_session", "init_db"]
