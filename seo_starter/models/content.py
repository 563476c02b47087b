"""Content collection SQLAlchemy model."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from seo_starter.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentEntry(Base):
    """One record of a content collection (e.g. ``seo/global``, ``services/services``)."""

    __tablename__ = "content_entries"
    __table_args__ = (
        UniqueConstraint("collection", "entry_id", name="uq_content_collection_entry"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    collection: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entry_id: Mapped[str] = mapped_column(String(255), nullable=False)
    data: Mapped[Any] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<ContentEntry {self.collection}/{self.entry_id}>"
