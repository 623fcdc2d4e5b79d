"""Application service (use case) for creating and mutating practice records."""

import logging
from collections.abc import Mapping
from typing import Any

from practice_log.application.interfaces import PracticeRecordRepository
from practice_log.application.schemas import RecordUpdateRequest, SubmissionPayload
from practice_log.domain.entities import CATEGORY_FIELDS, PracticeRecord, parse_record_id

from .record_normalizer import normalize_submission
from .submission_audit_logger import SubmissionAuditLogger

logger = logging.getLogger(__name__)

_COUNTER_ATTRIBUTES = frozenset(attr for attr, _ in CATEGORY_FIELDS)


class PracticeRecordService:
    """Orchestrates submit, update and delete. Depends on the repository ports (DI)."""

    def __init__(
        self,
        repository: PracticeRecordRepository,
        audit_logger: SubmissionAuditLogger,
        *,
        clamp_negative_counters: bool = False,
    ):
        self._repository = repository
        self._audit_logger = audit_logger
        self._clamp_negative_counters = clamp_negative_counters

    async def submit(
        self,
        payload: SubmissionPayload | Mapping[str, Any],
        *,
        source_ip: str,
        source_device: str,
    ) -> PracticeRecord:
        """Normalize, persist, then append the audit entry."""
        record = normalize_submission(
            payload,
            source_ip=source_ip,
            source_device=source_device,
            clamp_negative_counters=self._clamp_negative_counters,
        )
        saved = await self._repository.create(record)
        await self._audit_logger.append(saved)
        logger.info(
            "Record %s submitted by %r for %s from %s",
            saved.id,
            saved.submitter_name,
            saved.date,
            saved.source_ip,
        )
        return saved

    async def update(
        self,
        record_id: object,
        fields: RecordUpdateRequest | Mapping[str, Any],
    ) -> int:
        """Overwrite the supplied fields and refresh updated_at.

        Returns the modified count; 0 when no record has this id.
        """
        canonical_id = parse_record_id(record_id)
        if not isinstance(fields, RecordUpdateRequest):
            fields = RecordUpdateRequest.model_validate(dict(fields))

        changes = fields.changes()
        if self._clamp_negative_counters:
            changes = {
                key: max(value, 0) if key in _COUNTER_ATTRIBUTES else value
                for key, value in changes.items()
            }

        modified = await self._repository.update_fields(
            canonical_id, changes, fields.extra_fields()
        )
        logger.info("Record %s update: %d modified", canonical_id, modified)
        return modified

    async def delete(self, record_id: object) -> int:
        """Remove a record; deleting a missing id returns 0."""
        canonical_id = parse_record_id(record_id)
        deleted = await self._repository.delete(canonical_id)
        logger.info("Record %s delete: %d deleted", canonical_id, deleted)
        return deleted
