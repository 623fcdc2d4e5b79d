"""Audit logger — appends one submission log entry per created record."""

import logging

from practice_log.application.interfaces import SubmissionLogRepository
from practice_log.domain.entities import PracticeRecord, SubmissionLog

logger = logging.getLogger(__name__)


class SubmissionAuditLogger:
    """Writes the audit trail for submissions.

    A failed write is reported in the application log and swallowed; it
    never fails the submission it describes.
    """

    def __init__(self, log_repository: SubmissionLogRepository):
        self._repo = log_repository

    async def append(self, record: PracticeRecord) -> SubmissionLog | None:
        """Persist a ``homework_submit`` entry referencing ``record``.

        Returns the stored entry, or None if the write failed.
        """
        entry = SubmissionLog(
            record_id=record.id or "",
            submitter_name=record.submitter_name,
            date=record.date,
            source_ip=record.source_ip,
        )
        try:
            return await self._repo.create(entry)
        except Exception:
            logger.exception("Failed to write submission log for record %s", record.id)
            return None
