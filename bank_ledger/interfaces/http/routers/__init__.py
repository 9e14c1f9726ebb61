from fastapi import APIRouter

from bank_ledger.interfaces.http.routers import accounts, transfers


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(transfers.router, prefix="/transfers", tags=["transfers"])
    router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
    return router


__all__ = [
    "create_api_router",
]
