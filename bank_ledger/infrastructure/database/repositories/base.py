"""Shared plumbing for SQLAlchemy-backed repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from bank_ledger.modules.common.exceptions import ConcurrentUpdateError, StoreFailureError


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into the ledger's store error types."""
    try:
        yield
    except StaleDataError as exc:
        raise ConcurrentUpdateError(f"{operation}: record was modified concurrently") from exc
    except SQLAlchemyError as exc:
        raise StoreFailureError(f"{operation} failed: {exc}") from exc


class AsyncRepository:
    """Base repository exposing the SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session
