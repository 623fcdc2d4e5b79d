"""One practice-log submission and its counter categories."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from practice_log.domain.exceptions import InvalidIdentifierError


# ── Counter categories ───────────────────────────────────────────────
#
# (python attribute, wire name). Order is the order used in responses.

CATEGORY_FIELDS: tuple[tuple[str, str], ...] = (
    ("nine_word", "nineWord"),
    ("buddha_worship", "buddhaWorship"),
    ("quiet_zen", "quietZen"),
    ("active_zen", "activeZen"),
    ("diamond", "diamond"),
    ("amitabha", "amitabha"),
    ("guanyin", "guanyin"),
    ("puxian", "puxian"),
    ("dizang", "dizang"),
)

# Scripture recitations. The other four categories are practice sessions
# and are not part of totalClassics.
CLASSICS_FIELDS: tuple[str, ...] = ("diamond", "amitabha", "guanyin", "puxian", "dizang")

DEFAULT_STORAGE_MODE = "both"

# Wire name → attribute for every persisted field except the extra bag.
FIELD_ATTRIBUTES: dict[str, str] = {
    "id": "id",
    "submitterName": "submitter_name",
    "name": "submitter_name",
    "date": "date",
    **{wire: attr for attr, wire in CATEGORY_FIELDS},
    "remark": "remark",
    "storageMode": "storage_mode",
    "submittedAt": "submitted_at",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "sourceDevice": "source_device",
    "sourceIp": "source_ip",
}

# Set by the server at creation and never written by clients.
SERVER_OWNED_FIELDS: frozenset[str] = frozenset({
    "id",
    "_id",
    "submittedAt",
    "submitTime",
    "createdAt",
    "updatedAt",
    "sourceDevice",
    "sourceIp",
    "deviceId",
    "ip",
})


def parse_record_id(value: object) -> str:
    """Return the canonical form of a record id, or raise InvalidIdentifierError."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidIdentifierError(value)
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError as exc:
        raise InvalidIdentifierError(value) from exc


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PracticeRecord:
    """Core domain entity: one submission of practice counts for a day.

    ``id`` stays None until the repository persists the record.
    ``extra`` holds any submitted keys outside the known fields; they are
    echoed back flattened into the record document.
    """

    submitter_name: str
    date: str
    nine_word: int = 0
    buddha_worship: int = 0
    quiet_zen: int = 0
    active_zen: int = 0
    diamond: int = 0
    amitabha: int = 0
    guanyin: int = 0
    puxian: int = 0
    dizang: int = 0
    remark: str = ""
    storage_mode: str = DEFAULT_STORAGE_MODE
    source_device: str = ""
    source_ip: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
    id: str | None = None
    submitted_at: datetime = field(default_factory=_utc_now)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def counters(self) -> dict[str, int]:
        """Category counters keyed by attribute name."""
        return {attr: getattr(self, attr) for attr, _ in CATEGORY_FIELDS}

    def touch(self) -> None:
        """Refresh the updated_at timestamp."""
        self.updated_at = _utc_now()

    def to_document(self) -> dict[str, Any]:
        """Flat wire representation: extra keys first, known fields on top."""
        document: dict[str, Any] = dict(self.extra)
        document.update(
            {
                "id": self.id,
                "submitterName": self.submitter_name,
                "date": self.date,
                **{wire: getattr(self, attr) for attr, wire in CATEGORY_FIELDS},
                "remark": self.remark,
                "storageMode": self.storage_mode,
                "submittedAt": self.submitted_at,
                "createdAt": self.created_at,
                "updatedAt": self.updated_at,
                "sourceDevice": self.source_device,
                "sourceIp": self.source_ip,
            }
        )
        return document
