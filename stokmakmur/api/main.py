"""
ASGI entry point.

Builds the FastAPI app with middleware, error handlers and routers, and
loads the inventory state when the server starts.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stokmakmur.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stokmakmur.api.middleware.error_handler import setup_exception_handlers
from stokmakmur.api.routes import (
    categories_router,
    health_router,
    insights_router,
    inventory_router,
    sync_router,
)
from stokmakmur.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Startup and shutdown hooks.

    Loads the cached inventory on startup, waits for pending background
    tasks and closes the cache on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        storage=settings.storage.backend,
        sheet_linked=bool(settings.sheet.source_url),
    )

    from stokmakmur.application.services import get_inventory_state

    state = get_inventory_state()
    await state.load()
    logger.info("application_started", items=len(state.items))

    yield

    logger.info("application_stopping")

    await state.drain()

    if settings.storage.backend == "sqlite":
        from stokmakmur.infrastructure.storage.sqlite import close_pool

        await close_pool()
        logger.info("connection_pool_closed")

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Assemble the API. Settings are read once, at build time."""
    settings = get_settings()

    app = FastAPI(
        title="Stok Makmur Inventory API",
        description="Spreadsheet-backed inventory with stock ledger, alerts and AI insights",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(inventory_router)
    app.include_router(categories_router)
    app.include_router(sync_router)
    app.include_router(insights_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "stokmakmur.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
