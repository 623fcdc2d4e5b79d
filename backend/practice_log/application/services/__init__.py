from .practice_record_service import PracticeRecordService
from .record_normalizer import normalize_submission
from .record_query_service import RecordQueryService
from .submission_audit_logger import SubmissionAuditLogger

__all__ = [
    "PracticeRecordService",
    "normalize_submission",
    "RecordQueryService",
    "SubmissionAuditLogger",
]
