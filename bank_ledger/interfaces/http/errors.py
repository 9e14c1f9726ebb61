"""Mapping of ledger errors onto HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bank_ledger.modules.common.exceptions import (
    BusinessRuleError,
    LedgerError,
    NotFoundError,
    StoreFailureError,
)
from bank_ledger.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def status_for_error(exc: LedgerError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, BusinessRuleError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, StoreFailureError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    body = ErrorResponse(detail=str(exc), error_type=type(exc).__name__)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerError, ledger_error_handler)


__all__ = ["ledger_error_handler", "register_exception_handlers", "status_for_error"]
