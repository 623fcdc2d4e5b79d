from .practice_record_repository import SQLAlchemyPracticeRecordRepository
from .submission_log_repository import SQLAlchemySubmissionLogRepository

__all__ = [
    "SQLAlchemyPracticeRecordRepository",
    "SQLAlchemySubmissionLogRepository",
]
