"""Content module — content stores and the async content accessor."""

from seo_starter.modules.content.accessor import ContentAccessor
from seo_starter.modules.content.store import (
    ContentStore,
    DatabaseContentStore,
    FileContentStore,
    MemoryContentStore,
)

__all__ = [
    "ContentAccessor",
    "ContentStore",
    "DatabaseContentStore",
    "FileContentStore",
    "MemoryContentStore",
]
