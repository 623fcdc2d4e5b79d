from .practice_record import PracticeRecordModel
from .submission_log import SubmissionLogModel

__all__ = [
    "PracticeRecordModel",
    "SubmissionLogModel",
]
