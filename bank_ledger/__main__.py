"""Run the API server with ``python -m bank_ledger``."""

import uvicorn

from bank_ledger.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "bank_ledger.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )


if __name__ == "__main__":
    main()
