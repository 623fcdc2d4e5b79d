"""Domain value objects for record listings and aggregate statistics."""

import math
from dataclasses import dataclass, field
from datetime import datetime

from .practice_record import CATEGORY_FIELDS, CLASSICS_FIELDS, PracticeRecord


@dataclass
class RecordPage:
    """One page of a filtered, sorted record listing."""

    records: list[PracticeRecord]
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        if self.limit < 1:
            return 0
        return math.ceil(self.total_count / self.limit)


@dataclass
class NameStat:
    """Submission count and latest submission time for one submitter."""

    submitter_name: str
    count: int
    last_submit: datetime | None = None


@dataclass
class RecordStatistics:
    """Cross-record figures.

    The four inputs come from independent reads, so under concurrent
    writes they may reflect slightly different moments.
    """

    total_records: int
    today_records: int
    name_stats: list[NameStat] = field(default_factory=list)
    category_totals: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for attr, _ in CATEGORY_FIELDS:
            self.category_totals.setdefault(attr, 0)

    @property
    def total_classics(self) -> int:
        return sum(self.category_totals[attr] for attr in CLASSICS_FIELDS)

    def classics_stats(self) -> dict[str, int]:
        """Category sums keyed as totalNineWord, totalDiamond, ..."""
        return {
            f"total{wire[0].upper()}{wire[1:]}": self.category_totals[attr]
            for attr, wire in CATEGORY_FIELDS
        }
