"""Logging setup for the practice log service.

Three logger groups get their own level so SQL echo can be turned up while
debugging the record store without flooding the request log:

    sql      SQLAlchemy engine/pool and the aiosqlite driver
    uvicorn  server and access logs
    storage  StorageConnector lifecycle and the record/log repositories

Everything else follows ``LOG_LEVEL``. ``create_app``'s lifespan calls
``setup_logging`` once per process.
"""

import logging
import sys

from practice_log.config import Settings, get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field -> loggers whose level it controls.
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_storage": ("practice_log.infrastructure.database",),
}


def setup_logging(settings: Settings | None = None) -> None:
    """Apply the root and per-group levels from ``settings``.

    A stderr handler is installed only when the root logger has none, so
    running under uvicorn keeps uvicorn's handlers.
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Log levels: root=%s sql=%s uvicorn=%s storage=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_uvicorn,
        settings.log_level_storage,
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
