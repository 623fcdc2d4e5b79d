"""Concrete repository implementation for PracticeRecord backed by SQLAlchemy."""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from practice_log.application.interfaces import PracticeRecordRepository
from practice_log.domain.entities import CATEGORY_FIELDS, NameStat, PracticeRecord
from practice_log.infrastructure.database.models import PracticeRecordModel

_SORTABLE_ATTRIBUTES = frozenset(
    {
        "id",
        "submitter_name",
        "date",
        *(attr for attr, _ in CATEGORY_FIELDS),
        "remark",
        "storage_mode",
        "submitted_at",
        "created_at",
        "updated_at",
        "source_device",
        "source_ip",
    }
)

_MUTABLE_ATTRIBUTES = frozenset(
    {
        "submitter_name",
        "date",
        *(attr for attr, _ in CATEGORY_FIELDS),
        "remark",
        "storage_mode",
    }
)


class SQLAlchemyPracticeRecordRepository(PracticeRecordRepository):
    """Implements the PracticeRecordRepository port using SQLAlchemy async sessions.

    Each operation runs in its own short-lived session so that independent
    reads (a page and its count, the statistics figures) can run concurrently.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _to_entity(self, model: PracticeRecordModel) -> PracticeRecord:
        """Map ORM model → domain entity."""
        return PracticeRecord(
            id=model.id,
            submitter_name=model.submitter_name,
            date=model.date,
            **{attr: getattr(model, attr) for attr, _ in CATEGORY_FIELDS},
            remark=model.remark,
            storage_mode=model.storage_mode,
            source_device=model.source_device,
            source_ip=model.source_ip,
            extra=dict(model.extra or {}),
            submitted_at=model.submitted_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: PracticeRecord) -> PracticeRecordModel:
        """Map domain entity → ORM model (for creation)."""
        return PracticeRecordModel(
            id=entity.id,
            submitter_name=entity.submitter_name,
            date=entity.date,
            **entity.counters(),
            remark=entity.remark,
            storage_mode=entity.storage_mode,
            source_device=entity.source_device,
            source_ip=entity.source_ip,
            extra=dict(entity.extra),
            submitted_at=entity.submitted_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _search_clause(search: str) -> ColumnElement[bool]:
        # Literal substring: LIKE wildcards in the search text are escaped.
        return or_(
            PracticeRecordModel.submitter_name.icontains(search, autoescape=True),
            PracticeRecordModel.remark.icontains(search, autoescape=True),
        )

    async def create(self, record: PracticeRecord) -> PracticeRecord:
        if record.id is None:
            record.id = str(uuid.uuid4())
        async with self._session_factory() as session:
            async with session.begin():
                model = self._to_model(record)
                session.add(model)
                await session.flush()
                return self._to_entity(model)

    async def get_by_id(self, record_id: str) -> PracticeRecord | None:
        async with self._session_factory() as session:
            model = await session.get(PracticeRecordModel, record_id)
            return self._to_entity(model) if model else None

    async def find(
        self,
        *,
        search: str = "",
        sort_field: str = "submitted_at",
        descending: bool = True,
        skip: int = 0,
        limit: int = 20,
    ) -> list[PracticeRecord]:
        if sort_field not in _SORTABLE_ATTRIBUTES:
            raise ValueError(f"Unsupported sort field: {sort_field}")

        stmt = select(PracticeRecordModel)
        if search:
            stmt = stmt.where(self._search_clause(search))

        column = getattr(PracticeRecordModel, sort_field)
        stmt = (
            stmt.order_by(column.desc() if descending else column.asc())
            .offset(skip)
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def count(self, *, search: str = "", date: str | None = None) -> int:
        stmt = select(func.count()).select_from(PracticeRecordModel)
        if search:
            stmt = stmt.where(self._search_clause(search))
        if date is not None:
            stmt = stmt.where(PracticeRecordModel.date == date)
        async with self._session_factory() as session:
            return int((await session.execute(stmt)).scalar_one())

    async def update_fields(
        self,
        record_id: str,
        changes: dict[str, Any],
        extra: dict[str, Any] | None = None,
    ) -> int:
        async with self._session_factory() as session:
            async with session.begin():
                model = await session.get(PracticeRecordModel, record_id)
                if model is None:
                    return 0
                for attr, value in changes.items():
                    if attr in _MUTABLE_ATTRIBUTES:
                        setattr(model, attr, value)
                if extra:
                    # Reassign so the JSON column is flagged dirty.
                    model.extra = {**(model.extra or {}), **extra}
                model.updated_at = datetime.now(timezone.utc)
        return 1

    async def delete(self, record_id: str) -> int:
        stmt = delete(PracticeRecordModel).where(PracticeRecordModel.id == record_id)
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(stmt)
        return int(result.rowcount or 0)

    async def name_statistics(self) -> list[NameStat]:
        count_col = func.count(PracticeRecordModel.id).label("count")
        stmt = (
            select(
                PracticeRecordModel.submitter_name,
                count_col,
                func.max(PracticeRecordModel.submitted_at).label("last_submit"),
            )
            .group_by(PracticeRecordModel.submitter_name)
            .order_by(count_col.desc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [
                NameStat(
                    submitter_name=row.submitter_name,
                    count=int(row.count),
                    last_submit=row.last_submit,
                )
                for row in result.all()
            ]

    async def category_totals(self) -> dict[str, int]:
        columns = [
            func.coalesce(func.sum(getattr(PracticeRecordModel, attr)), 0).label(attr)
            for attr, _ in CATEGORY_FIELDS
        ]
        async with self._session_factory() as session:
            row = (await session.execute(select(*columns))).one()
        return {attr: int(row._mapping[attr]) for attr, _ in CATEGORY_FIELDS}
