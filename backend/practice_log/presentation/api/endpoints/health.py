"""Health and static configuration endpoints."""

from fastapi import APIRouter, Depends, Response, status

from practice_log.config import Settings
from practice_log.domain.exceptions import StoreConnectionError
from practice_log.infrastructure.database import StorageConnector
from practice_log.infrastructure.dependencies import get_app_settings, get_storage_connector
from practice_log.presentation.api.envelope import utc_timestamp

router = APIRouter(tags=["Health"])

SERVICE_NAME = "homework-collection-system"
FEATURES = ["submit", "query", "stats", "update", "delete"]


@router.get("/health")
async def health_check(
    response: Response,
    connector: StorageConnector = Depends(get_storage_connector),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    """Healthy when the record store answers a ping, 503 otherwise."""
    try:
        await connector.ping()
    except StoreConnectionError as exc:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unhealthy", "error": str(exc), "timestamp": utc_timestamp()}
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "service": SERVICE_NAME,
        "version": settings.app_version,
        "environment": settings.app_env,
    }


@router.get("/config")
async def get_config(settings: Settings = Depends(get_app_settings)) -> dict:
    """Static service metadata; never touches the record store."""
    return {
        "success": True,
        "system": settings.app_system_name,
        "version": settings.app_version,
        "timestamp": utc_timestamp(),
        "features": FEATURES,
    }
