"""Storage connector — owns the async engine and its connect/disconnect lifecycle.

One connector is built per application and shared by every request.
``connect()`` is idempotent and single-flight: concurrent callers during an
in-progress attempt all await the same task instead of opening their own
engines.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from sqlalchemy import inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from practice_log.domain.exceptions import NotConnectedError, StoreConnectionError
from practice_log.infrastructure.database.base import Base
from practice_log.infrastructure.database.repositories import (
    SQLAlchemyPracticeRecordRepository,
    SQLAlchemySubmissionLogRepository,
)

logger = logging.getLogger(__name__)

EngineFactory = Callable[..., AsyncEngine]


class ConnectionState(str, Enum):
    """Lifecycle states of the storage connector."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def resolve_database_url(url: str, database_name: str = "") -> str:
    """Async driver URL, with ``database_name`` filled in when the URL names none."""
    parsed = make_url(_get_async_url(url.strip()))
    if not parsed.database and database_name:
        parsed = parsed.set(database=database_name)
    return parsed.render_as_string(hide_password=False)


class StorageConnector:
    """Lazily connected handle on the record store.

    Usage:
        connector = StorageConnector("postgresql://user:pw@db:5432", database_name="homework_db")
        await connector.connect()
        records = connector.records_repository()
        ...
        await connector.disconnect()
    """

    def __init__(
        self,
        database_url: str,
        *,
        database_name: str = "",
        connect_timeout: float = 10.0,
        socket_timeout: float = 30.0,
        echo: bool = False,
        engine_factory: EngineFactory = create_async_engine,
    ):
        self._url = resolve_database_url(database_url, database_name)
        self._connect_timeout = connect_timeout
        self._socket_timeout = socket_timeout
        self._echo = echo
        self._engine_factory = engine_factory

        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._pending: asyncio.Task[AsyncEngine] | None = None
        self._state = ConnectionState.DISCONNECTED

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED and self._engine is not None

    @property
    def backend_name(self) -> str:
        return make_url(self._url).get_backend_name()

    # ── Lifecycle ────────────────────────────────────────────────────

    async def connect(self) -> AsyncEngine:
        """Return the live engine, opening it on first use.

        Raises:
            StoreConnectionError: the store is unreachable, rejected the
                credentials, or timed out. The connector is left
                disconnected so the next call retries.
        """
        if self.is_connected:
            return self._engine  # type: ignore[return-value]

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._open())
            self._pending.add_done_callback(self._clear_pending)
        # Shielded: a cancelled caller must not abort the attempt others await.
        return await asyncio.shield(self._pending)

    def _clear_pending(self, task: asyncio.Task[AsyncEngine]) -> None:
        if self._pending is task:
            self._pending = None
        if not task.cancelled():
            task.exception()  # mark retrieved; awaiting callers re-raise it

    async def _open(self) -> AsyncEngine:
        self._state = ConnectionState.CONNECTING
        logger.info("Connecting to record store (%s)", self.backend_name)

        engine: AsyncEngine | None = None
        try:
            try:
                engine = self._engine_factory(self._url, **self._engine_options())
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            except Exception as exc:
                logger.error("Record store connection failed: %s: %s", type(exc).__name__, exc)
                raise StoreConnectionError(f"Could not connect to record store: {exc}") from exc

            logger.info("Record store ping succeeded")
            await self._ensure_schema(engine)
        except BaseException:
            # Includes cancellation by disconnect() at any await above.
            self._state = ConnectionState.DISCONNECTED
            if engine is not None:
                await engine.dispose()
            raise

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._state = ConnectionState.CONNECTED
        logger.info("Record store connected")
        return engine

    def _engine_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"echo": self._echo}
        if self.backend_name == "postgresql":
            options["connect_args"] = {
                "timeout": self._connect_timeout,
                "command_timeout": self._socket_timeout,
            }
        return options

    async def _ensure_schema(self, engine: AsyncEngine) -> None:
        """Create missing tables and indexes.

        Failures are logged and do not abort the connection: an existing
        schema may still be usable.
        """
        try:
            async with engine.begin() as conn:
                existing = await conn.run_sync(_table_names)
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            logger.exception("Failed to initialize record store tables")
            return

        for table_name in Base.metadata.tables:
            if table_name in existing:
                logger.debug("Table '%s' already exists", table_name)
            else:
                logger.info("Created table '%s'", table_name)
        logger.info("Record store indexes ensured")

    async def disconnect(self) -> None:
        """Close the engine if open. Never raises."""
        pending = self._pending
        if pending is not None and not pending.done():
            pending.cancel()
            with contextlib.suppress(asyncio.CancelledError, StoreConnectionError):
                await pending

        engine = self._engine
        self._engine = None
        self._session_factory = None
        self._state = ConnectionState.DISCONNECTED
        if engine is None:
            return
        try:
            await engine.dispose()
            logger.info("Record store connection closed")
        except Exception:
            logger.exception("Failed to close record store connection")

    async def ping(self) -> None:
        """Connect if needed, then round-trip ``SELECT 1`` on the live engine."""
        engine = await self.connect()
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            raise StoreConnectionError(f"Record store ping failed: {exc}") from exc

    # ── Collection handles ───────────────────────────────────────────

    def _require_sessions(self, resource: str) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise NotConnectedError(resource)
        return self._session_factory

    def records_repository(self) -> SQLAlchemyPracticeRecordRepository:
        return SQLAlchemyPracticeRecordRepository(self._require_sessions("the records collection"))

    def logs_repository(self) -> SQLAlchemySubmissionLogRepository:
        return SQLAlchemySubmissionLogRepository(self._require_sessions("the logs collection"))


def _table_names(sync_conn: Any) -> set[str]:
    return set(inspect(sync_conn).get_table_names())
