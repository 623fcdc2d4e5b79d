"""Abstract repository interface (port) for PracticeRecord persistence."""

from abc import ABC, abstractmethod
from typing import Any

from practice_log.domain.entities import NameStat, PracticeRecord


class PracticeRecordRepository(ABC):
    """Port for practice record persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def create(self, record: PracticeRecord) -> PracticeRecord:
        """Persist a new record, assigning its id, and return it."""
        ...

    @abstractmethod
    async def get_by_id(self, record_id: str) -> PracticeRecord | None:
        """Retrieve a single record by its canonical id."""
        ...

    @abstractmethod
    async def find(
        self,
        *,
        search: str = "",
        sort_field: str = "submitted_at",
        descending: bool = True,
        skip: int = 0,
        limit: int = 20,
    ) -> list[PracticeRecord]:
        """Filtered, sorted, paginated listing.

        ``search`` matches submitter name or remark as a case-insensitive
        substring. ``sort_field`` is an entity attribute name.
        """
        ...

    @abstractmethod
    async def count(self, *, search: str = "", date: str | None = None) -> int:
        """Count records matching the search filter and, if given, the date."""
        ...

    @abstractmethod
    async def update_fields(
        self,
        record_id: str,
        changes: dict[str, Any],
        extra: dict[str, Any] | None = None,
    ) -> int:
        """Apply attribute changes (and merge extra keys), refreshing updated_at.

        Returns the number of modified records (0 or 1).
        """
        ...

    @abstractmethod
    async def delete(self, record_id: str) -> int:
        """Delete a record. Returns the number of deleted records (0 or 1)."""
        ...

    @abstractmethod
    async def name_statistics(self) -> list[NameStat]:
        """Per-submitter counts and latest submission, by count descending."""
        ...

    @abstractmethod
    async def category_totals(self) -> dict[str, int]:
        """Sum of every category counter across all records, keyed by attribute."""
        ...
