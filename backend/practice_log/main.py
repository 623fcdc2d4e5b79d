"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from practice_log.config import Settings, get_settings
from practice_log.domain.exceptions import StoreConnectionError
from practice_log.infrastructure.database import StorageConnector
from practice_log.infrastructure.logging.log_config import setup_logging
from practice_log.presentation.api.errors import register_exception_handlers
from practice_log.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def _build_connector(settings: Settings) -> StorageConnector:
    return StorageConnector(
        settings.database_url,
        database_name=settings.database_name,
        connect_timeout=settings.connect_timeout_seconds,
        socket_timeout=settings.socket_timeout_seconds,
        echo=settings.is_development and settings.log_level_sql.upper() == "DEBUG",
    )


async def _warm_up_connection(connector: StorageConnector, delay_seconds: float) -> None:
    """Connect in the background after a grace delay.

    A failure here is logged only; requests will retry the connection lazily.
    """
    await asyncio.sleep(delay_seconds)
    try:
        await connector.connect()
    except StoreConnectionError as exc:
        logger.warning("Record store warm-up failed, server keeps running: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Warm up the store connection on startup and close it on shutdown."""
    settings: Settings = app.state.settings
    connector: StorageConnector = app.state.connector
    setup_logging(settings)
    logger.info("%s %s starting (env=%s)", settings.app_title, settings.app_version, settings.app_env)

    warm_up: asyncio.Task[None] | None = None
    if settings.eager_connect:
        warm_up = asyncio.create_task(
            _warm_up_connection(connector, settings.connect_grace_seconds)
        )

    yield

    # Shutdown
    if warm_up is not None and not warm_up.done():
        warm_up.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await warm_up
    await connector.disconnect()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Connection is lazy: built here, opened on first use or by the warm-up.
    app.state.connector = _build_connector(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "practice_log.main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
