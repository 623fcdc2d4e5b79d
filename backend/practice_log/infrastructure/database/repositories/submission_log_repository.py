"""Concrete repository for submission audit logs backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from practice_log.application.interfaces import SubmissionLogRepository
from practice_log.domain.entities import SubmissionLog
from practice_log.infrastructure.database.models import SubmissionLogModel


class SQLAlchemySubmissionLogRepository(SubmissionLogRepository):
    """Implements the SubmissionLogRepository port using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _to_entity(self, model: SubmissionLogModel) -> SubmissionLog:
        """Map ORM model → domain entity."""
        return SubmissionLog(
            id=model.id,
            type=model.type,
            record_id=model.record_id,
            submitter_name=model.submitter_name,
            date=model.date,
            source_ip=model.source_ip,
            timestamp=model.timestamp,
        )

    def _to_model(self, entity: SubmissionLog) -> SubmissionLogModel:
        """Map domain entity → ORM model."""
        return SubmissionLogModel(
            type=entity.type,
            record_id=entity.record_id,
            submitter_name=entity.submitter_name,
            date=entity.date,
            source_ip=entity.source_ip,
            timestamp=entity.timestamp,
        )

    async def create(self, entry: SubmissionLog) -> SubmissionLog:
        async with self._session_factory() as session:
            async with session.begin():
                model = self._to_model(entry)
                session.add(model)
                await session.flush()
                return self._to_entity(model)

    async def get_all(self, *, skip: int = 0, limit: int = 100) -> list[SubmissionLog]:
        stmt = (
            select(SubmissionLogModel)
            .order_by(SubmissionLogModel.timestamp.desc())
            .offset(skip)
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]
