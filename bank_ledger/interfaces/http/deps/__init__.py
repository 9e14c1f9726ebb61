"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .transfer import get_transfer_service

__all__ = [
    "get_db_session",
    "get_transfer_service",
]
