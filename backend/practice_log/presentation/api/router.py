"""Top-level API router; mounts every endpoint router under /api."""

from fastapi import APIRouter

from practice_log.presentation.api.endpoints.health import router as health_router
from practice_log.presentation.api.endpoints.records import router as records_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(records_router)
