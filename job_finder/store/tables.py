"""Database table models."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from job_finder.store.base import Base


class PreferenceEntry(Base):
    """One key of a client's preference storage."""

    __tablename__ = "preference_entries"

    namespace: Mapped[str] = mapped_column(String(64), primary_key=True)  # client id
    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text)  # serialized JSON, parsed by the store
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC)
    )
