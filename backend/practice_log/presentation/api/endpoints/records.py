"""Practice record endpoints: submit, list, stats, update, delete."""

from fastapi import APIRouter, Depends, Query

from practice_log.application.schemas import (
    PaginationResponse,
    RecordDeleteRequest,
    RecordUpdateRequest,
    StatisticsResponse,
    SubmissionPayload,
)
from practice_log.application.services import PracticeRecordService, RecordQueryService
from practice_log.config import Settings
from practice_log.infrastructure.dependencies import (
    RequestProvenance,
    get_app_settings,
    get_practice_record_service,
    get_record_query_service,
    get_request_provenance,
)
from practice_log.presentation.api.envelope import utc_timestamp

router = APIRouter(tags=["Practice Records"])


@router.post("/submit")
async def submit_record(
    payload: SubmissionPayload,
    provenance: RequestProvenance = Depends(get_request_provenance),
    service: PracticeRecordService = Depends(get_practice_record_service),
) -> dict:
    """Normalize and store a submission, then append its audit entry."""
    record = await service.submit(
        payload,
        source_ip=provenance.source_ip,
        source_device=provenance.source_device,
    )
    return {
        "success": True,
        "message": "Practice record submitted",
        "recordId": record.id,
        "timestamp": utc_timestamp(),
    }


@router.get("/records")
async def list_records(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, description="Page size; capped at max_page_size"),
    search: str = Query("", max_length=500, description="Case-insensitive substring of name or remark"),
    sort_by: str = Query("submittedAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    settings: Settings = Depends(get_app_settings),
    service: RecordQueryService = Depends(get_record_query_service),
) -> dict:
    """Retrieve a searchable, sorted, paginated list of records."""
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    result = await service.list_records(
        page=page,
        limit=page_size,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return {
        "success": True,
        "data": [record.to_document() for record in result.records],
        "pagination": PaginationResponse.from_page(result).model_dump(by_alias=True),
        "timestamp": utc_timestamp(),
    }


@router.get("/records/{record_id}")
async def get_record(
    record_id: str,
    service: RecordQueryService = Depends(get_record_query_service),
) -> dict:
    """Retrieve a single record by id."""
    record = await service.get_record(record_id)
    return {"success": True, "data": record.to_document(), "timestamp": utc_timestamp()}


@router.get("/stats")
async def get_statistics(
    service: RecordQueryService = Depends(get_record_query_service),
) -> dict:
    """Totals, per-submitter counts and per-category sums over all records."""
    stats = await service.statistics()
    return {
        "success": True,
        "stats": StatisticsResponse.from_entity(stats).model_dump(by_alias=True),
        "timestamp": utc_timestamp(),
    }


@router.put("/update")
async def update_record(
    body: RecordUpdateRequest,
    service: PracticeRecordService = Depends(get_practice_record_service),
) -> dict:
    """Overwrite the supplied fields of one record."""
    modified = await service.update(body.id, body)
    return {
        "success": True,
        "modifiedCount": modified,
        "message": "Record updated" if modified else "No record matched the id",
    }


@router.delete("/delete")
async def delete_record(
    body: RecordDeleteRequest,
    service: PracticeRecordService = Depends(get_practice_record_service),
) -> dict:
    """Delete one record; a missing id reports deletedCount 0."""
    deleted = await service.delete(body.id)
    return {
        "success": True,
        "deletedCount": deleted,
        "message": "Record deleted" if deleted else "No record matched the id",
    }
