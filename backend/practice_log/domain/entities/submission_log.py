"""Domain entity for the submission audit trail."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

SUBMIT_LOG_TYPE = "homework_submit"


@dataclass
class SubmissionLog:
    """Append-only audit entry written alongside each new record.

    ``record_id`` is a plain reference; the entry outlives the record.
    """

    record_id: str
    submitter_name: str
    date: str
    source_ip: str = ""
    type: str = SUBMIT_LOG_TYPE
    id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
