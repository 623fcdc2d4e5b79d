"""SQLAlchemy ORM model for the PracticeRecord entity."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, BigInteger, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from practice_log.infrastructure.database.base import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PracticeRecordModel(Base):
    """ORM model — maps to the 'homework_records' table."""

    __tablename__ = "homework_records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    submitter_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    date: Mapped[str] = mapped_column(String(32), nullable=False, default="")

    nine_word: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    buddha_worship: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    quiet_zen: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    active_zen: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    diamond: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    amitabha: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    guanyin: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    puxian: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    dizang: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    remark: Mapped[str] = mapped_column(Text, nullable=False, default="")
    storage_mode: Mapped[str] = mapped_column(String(50), nullable=False, default="both")
    source_device: Mapped[str] = mapped_column(Text, nullable=False, default="")
    source_ip: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    extra: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utc_now, nullable=False,
    )

    __table_args__ = (
        Index("ix_homework_records_submitter_name", "submitter_name"),
        Index("ix_homework_records_date", "date"),
    )

    def __repr__(self) -> str:
        return (
            f"<PracticeRecordModel(id={self.id}, "
            f"submitter='{self.submitter_name}', date='{self.date}')>"
        )


Index("ix_homework_records_submitted_at", PracticeRecordModel.submitted_at.desc())
