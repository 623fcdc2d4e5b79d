"""Turns a submitted payload into a canonical PracticeRecord.

Pure: no I/O, no id assignment. Persistence happens in the caller.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from practice_log.application.schemas import SubmissionPayload
from practice_log.domain.entities import CATEGORY_FIELDS, PracticeRecord


def normalize_submission(
    payload: SubmissionPayload | Mapping[str, Any],
    *,
    source_ip: str,
    source_device: str,
    now: datetime | None = None,
    clamp_negative_counters: bool = False,
) -> PracticeRecord:
    """Build the record to persist from a submission and its request provenance.

    Args:
        payload: Validated submission, or a raw mapping that is validated here.
        source_ip: Client address the submission came from.
        source_device: Device description, usually the User-Agent header.
        now: Timestamp for submitted_at/created_at/updated_at; defaults to now (UTC).
        clamp_negative_counters: Floor negative counters at 0. Off by default,
            so negative inputs are stored as given.
    """
    if not isinstance(payload, SubmissionPayload):
        payload = SubmissionPayload.model_validate(dict(payload))

    stamp = now or datetime.now(timezone.utc)
    counters = {attr: getattr(payload, attr) for attr, _ in CATEGORY_FIELDS}
    if clamp_negative_counters:
        counters = {attr: max(value, 0) for attr, value in counters.items()}

    return PracticeRecord(
        submitter_name=payload.submitter_name,
        date=payload.date,
        **counters,
        remark=payload.remark,
        storage_mode=payload.storage_mode,
        source_device=source_device,
        source_ip=source_ip,
        extra=payload.extra_fields(),
        submitted_at=stamp,
        created_at=stamp,
        updated_at=stamp,
    )
