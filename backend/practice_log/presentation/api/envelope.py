"""Helpers for the ``{success, ..., timestamp}`` response envelope."""

from datetime import datetime, timezone
from typing import Any


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_body(message: str, **extra: Any) -> dict[str, Any]:
    return {"success": False, "error": message, **extra, "timestamp": utc_timestamp()}
