from .practice_record import (
    NameStatResponse,
    PaginationResponse,
    RecordDeleteRequest,
    RecordUpdateRequest,
    StatisticsResponse,
    SubmissionPayload,
    coerce_counter,
)

__all__ = [
    "NameStatResponse",
    "PaginationResponse",
    "RecordDeleteRequest",
    "RecordUpdateRequest",
    "StatisticsResponse",
    "SubmissionPayload",
    "coerce_counter",
]
