"""Pydantic DTOs (Data Transfer Objects) for the practice record feature.

Wire names are camelCase; Python attributes are snake_case. Submission and
update bodies are lenient on purpose: counters are coerced the way
JavaScript ``parseInt`` would read them, and unrecognised keys are kept as
extras rather than rejected.
"""

import math
import re
from datetime import datetime
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from practice_log.domain.entities import (
    DEFAULT_STORAGE_MODE,
    FIELD_ATTRIBUTES,
    SERVER_OWNED_FIELDS,
    RecordPage,
    RecordStatistics,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Counters are stored in signed 64-bit columns.
COUNTER_MIN = -(2**63)
COUNTER_MAX = 2**63 - 1


def coerce_counter(value: Any) -> int:
    """Read a counter value; anything unparseable or out of range becomes 0.

    "12abc" → 12, "3.7" → 3, 4.9 → 4, "abc" / None / True / NaN / 1e20 → 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        number = int(value) if math.isfinite(value) else 0
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        number = int(match.group(1)) if match else 0
    else:
        return 0
    return number if COUNTER_MIN <= number <= COUNTER_MAX else 0


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def split_extra(values: dict[str, Any] | None) -> dict[str, Any]:
    """Keep only the keys that are neither known fields nor server-owned."""
    return {
        key: value
        for key, value in (values or {}).items()
        if key not in FIELD_ATTRIBUTES and key not in SERVER_OWNED_FIELDS
    }


Counter = Annotated[int, BeforeValidator(coerce_counter)]
Text = Annotated[str, BeforeValidator(coerce_text)]


# ── Request Schemas ──────────────────────────────────────────────────


class SubmissionPayload(BaseModel):
    """Body of ``POST /submit``. Every field is optional; missing ones get defaults."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    submitter_name: Text = Field(
        "", validation_alias=AliasChoices("submitterName", "name", "submitter_name"),
    )
    date: Text = Field("", examples=["2024-01-01"])
    nine_word: Counter = Field(0, alias="nineWord")
    buddha_worship: Counter = Field(0, alias="buddhaWorship")
    quiet_zen: Counter = Field(0, alias="quietZen")
    active_zen: Counter = Field(0, alias="activeZen")
    diamond: Counter = 0
    amitabha: Counter = 0
    guanyin: Counter = 0
    puxian: Counter = 0
    dizang: Counter = 0
    remark: Text = ""
    storage_mode: Text = Field(DEFAULT_STORAGE_MODE, alias="storageMode")

    @field_validator("storage_mode")
    @classmethod
    def _default_empty_storage_mode(cls, value: str) -> str:
        return value or DEFAULT_STORAGE_MODE

    def extra_fields(self) -> dict[str, Any]:
        return split_extra(self.model_extra)


class RecordUpdateRequest(BaseModel):
    """Body of ``PUT /update``: ``id`` plus the fields to overwrite."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Any = None
    submitter_name: Text | None = Field(
        None, validation_alias=AliasChoices("submitterName", "name", "submitter_name"),
    )
    date: Text | None = None
    nine_word: Counter | None = Field(None, alias="nineWord")
    buddha_worship: Counter | None = Field(None, alias="buddhaWorship")
    quiet_zen: Counter | None = Field(None, alias="quietZen")
    active_zen: Counter | None = Field(None, alias="activeZen")
    diamond: Counter | None = None
    amitabha: Counter | None = None
    guanyin: Counter | None = None
    puxian: Counter | None = None
    dizang: Counter | None = None
    remark: Text | None = None
    storage_mode: Text | None = Field(None, alias="storageMode")

    def changes(self) -> dict[str, Any]:
        """Supplied known fields, keyed by entity attribute."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name != "id" and name in self.model_fields_set and getattr(self, name) is not None
        }

    def extra_fields(self) -> dict[str, Any]:
        return split_extra(self.model_extra)


class RecordDeleteRequest(BaseModel):
    """Body of ``DELETE /delete``."""

    id: Any = None


# ── Response Schemas ─────────────────────────────────────────────────


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationResponse(_CamelModel):
    page: int
    limit: int
    total_count: int
    total_pages: int

    @classmethod
    def from_page(cls, page: RecordPage) -> "PaginationResponse":
        return cls(
            page=page.page,
            limit=page.limit,
            total_count=page.total_count,
            total_pages=page.total_pages,
        )


class NameStatResponse(_CamelModel):
    submitter_name: str
    count: int
    last_submit: datetime | None = None


class StatisticsResponse(_CamelModel):
    total_records: int
    today_records: int
    name_stats: list[NameStatResponse]
    classics_stats: dict[str, int]
    total_classics: int

    @classmethod
    def from_entity(cls, stats: RecordStatistics) -> "StatisticsResponse":
        return cls(
            total_records=stats.total_records,
            today_records=stats.today_records,
            name_stats=[
                NameStatResponse(
                    submitter_name=item.submitter_name,
                    count=item.count,
                    last_submit=item.last_submit,
                )
                for item in stats.name_stats
            ],
            classics_stats=stats.classics_stats(),
            total_classics=stats.total_classics,
        )
