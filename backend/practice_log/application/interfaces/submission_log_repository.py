"""Abstract repository interface (port) for the submission audit trail."""

from abc import ABC, abstractmethod

from practice_log.domain.entities import SubmissionLog


class SubmissionLogRepository(ABC):
    """Port for append-only submission log persistence."""

    @abstractmethod
    async def create(self, entry: SubmissionLog) -> SubmissionLog:
        """Append a log entry and return it with its id."""
        ...

    @abstractmethod
    async def get_all(self, *, skip: int = 0, limit: int = 100) -> list[SubmissionLog]:
        """Retrieve log entries, newest first."""
        ...
