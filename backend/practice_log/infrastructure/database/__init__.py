from .base import Base
from .connector import ConnectionState, StorageConnector, resolve_database_url
from .models import PracticeRecordModel, SubmissionLogModel

__all__ = [
    "Base",
    "ConnectionState",
    "StorageConnector",
    "resolve_database_url",
    "PracticeRecordModel",
    "SubmissionLogModel",
]
