"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass

from fastapi import Depends, Request

from practice_log.application.services import (
    PracticeRecordService,
    RecordQueryService,
    SubmissionAuditLogger,
)
from practice_log.config import Settings
from practice_log.infrastructure.database import StorageConnector

DEFAULT_SOURCE_DEVICE = "web"


@dataclass(frozen=True)
class RequestProvenance:
    """Where a submission came from."""

    source_ip: str
    source_device: str


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_storage_connector(request: Request) -> StorageConnector:
    """The process-wide connector created in ``create_app``."""
    return request.app.state.connector


async def get_connected_storage(
    connector: StorageConnector = Depends(get_storage_connector),
) -> StorageConnector:
    """Connector after a successful (possibly shared) connect."""
    await connector.connect()
    return connector


def get_request_provenance(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> RequestProvenance:
    """Client IP and device string for the current request."""
    source_ip = ""
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        source_ip = forwarded.split(",")[0].strip()
    if not source_ip and request.client is not None:
        source_ip = request.client.host
    source_device = request.headers.get("user-agent") or DEFAULT_SOURCE_DEVICE
    return RequestProvenance(source_ip=source_ip, source_device=source_device)


async def get_practice_record_service(
    connector: StorageConnector = Depends(get_connected_storage),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[PracticeRecordService, None]:
    """Provides a PracticeRecordService with record and audit repositories wired up."""
    audit_logger = SubmissionAuditLogger(connector.logs_repository())
    yield PracticeRecordService(
        connector.records_repository(),
        audit_logger,
        clamp_negative_counters=settings.clamp_negative_counters,
    )


async def get_record_query_service(
    connector: StorageConnector = Depends(get_connected_storage),
) -> AsyncGenerator[RecordQueryService, None]:
    """Provides a RecordQueryService bound to the records repository."""
    yield RecordQueryService(connector.records_repository())
