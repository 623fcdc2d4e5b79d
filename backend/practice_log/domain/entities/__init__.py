from .practice_record import (
    CATEGORY_FIELDS,
    CLASSICS_FIELDS,
    DEFAULT_STORAGE_MODE,
    FIELD_ATTRIBUTES,
    SERVER_OWNED_FIELDS,
    PracticeRecord,
    parse_record_id,
)
from .submission_log import SUBMIT_LOG_TYPE, SubmissionLog
from .record_statistics import NameStat, RecordPage, RecordStatistics

__all__ = [
    "CATEGORY_FIELDS",
    "CLASSICS_FIELDS",
    "DEFAULT_STORAGE_MODE",
    "FIELD_ATTRIBUTES",
    "SERVER_OWNED_FIELDS",
    "PracticeRecord",
    "parse_record_id",
    "SUBMIT_LOG_TYPE",
    "SubmissionLog",
    "NameStat",
    "RecordPage",
    "RecordStatistics",
]
