import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bank_ledger import __version__
from bank_ledger.core.config import get_settings
from bank_ledger.core.container import get_container
from bank_ledger.interfaces.http.errors import register_exception_handlers
from bank_ledger.interfaces.http.routers import create_api_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = get_container()
    await container.startup()
    logger.info("%s %s started (environment=%s)", settings.project_name, __version__, settings.environment)
    yield
    await container.shutdown()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Account ledger with audited money transfers",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


app = create_app()
