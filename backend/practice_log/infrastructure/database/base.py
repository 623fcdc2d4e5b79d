"""SQLAlchemy declarative base for the record store tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for the practice record and submission log models."""

    pass
