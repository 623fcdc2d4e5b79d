"""Application service for record listings and aggregate statistics."""

import asyncio
from datetime import date as date_type

from practice_log.application.interfaces import PracticeRecordRepository
from practice_log.domain.entities import (
    FIELD_ATTRIBUTES,
    PracticeRecord,
    RecordPage,
    RecordStatistics,
    parse_record_id,
)
from practice_log.domain.exceptions import EntityNotFoundError, RecordValidationError


class RecordQueryService:
    """Read side of the record store: paginated search and statistics.

    Listing and statistics issue their reads concurrently; results are
    snapshots that may straddle concurrent writes. Records with equal sort
    keys come back in the store's natural order, which is not guaranteed
    to be stable across calls.
    """

    def __init__(self, repository: PracticeRecordRepository):
        self._repository = repository

    async def get_record(self, record_id: object) -> PracticeRecord:
        canonical_id = parse_record_id(record_id)
        record = await self._repository.get_by_id(canonical_id)
        if record is None:
            raise EntityNotFoundError("PracticeRecord", canonical_id)
        return record

    async def list_records(
        self,
        *,
        page: int = 1,
        limit: int = 20,
        search: str = "",
        sort_by: str = "submittedAt",
        sort_order: str = "desc",
    ) -> RecordPage:
        if page < 1:
            raise RecordValidationError("page", "must be at least 1")
        if limit < 1:
            raise RecordValidationError("limit", "must be at least 1")
        sort_field = FIELD_ATTRIBUTES.get(sort_by)
        if sort_field is None:
            raise RecordValidationError("sortBy", f"cannot sort by '{sort_by}'")

        search = search or ""
        records, total_count = await asyncio.gather(
            self._repository.find(
                search=search,
                sort_field=sort_field,
                descending=sort_order != "asc",
                skip=(page - 1) * limit,
                limit=limit,
            ),
            self._repository.count(search=search),
        )
        return RecordPage(records=records, page=page, limit=limit, total_count=total_count)

    async def statistics(self, *, today: date_type | None = None) -> RecordStatistics:
        """Totals over all records; ``today`` defaults to the server's local date."""
        today_str = (today or date_type.today()).isoformat()
        total_records, today_records, name_stats, category_totals = await asyncio.gather(
            self._repository.count(),
            self._repository.count(date=today_str),
            self._repository.name_statistics(),
            self._repository.category_totals(),
        )
        return RecordStatistics(
            total_records=total_records,
            today_records=today_records,
            name_stats=name_stats,
            category_totals=dict(category_totals),
        )
