"""SQLAlchemy ORM models for CountClock."""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class StorageEntry(Base):
    """One key/value pair of the app's local storage."""

    __tablename__ = "local_storage"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False, default="")
    updated_at = Column(
        DateTime, nullable=False, default=datetime.now, onupdate=datetime.now,
    )

    def __repr__(self) -> str:
        return f"<StorageEntry key={self.key} size={len(self.value or '')}>"
