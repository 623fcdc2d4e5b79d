from .practice_record_repository import PracticeRecordRepository
from .submission_log_repository import SubmissionLogRepository

__all__ = [
    "PracticeRecordRepository",
    "SubmissionLogRepository",
]
