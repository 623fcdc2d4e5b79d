"""SQLAlchemy ORM model for submission audit log entries."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from practice_log.infrastructure.database.base import Base


class SubmissionLogModel(Base):
    """ORM model — maps to the 'homework_logs' table.

    ``record_id`` carries no foreign key: entries outlive deleted records.
    """

    __tablename__ = "homework_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    record_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    submitter_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    date: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    source_ip: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<SubmissionLogModel(id={self.id}, type='{self.type}', record_id={self.record_id})>"
