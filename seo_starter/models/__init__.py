"""SQLAlchemy ORM models — import every model so Base.metadata is populated."""

from seo_starter.models.content import ContentEntry

__all__ = [
    "ContentEntry",
]
