"""Async accessor over a content store plus helpers for the business collections.

Store reads are blocking (file or SQLite I/O), so each one runs in a worker
thread under a bounded timeout.  A timeout surfaces as
:class:`~seo_starter.errors.FetchFailureError`, exactly like any other
store failure.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from seo_starter.errors import FetchFailureError
from seo_starter.modules.content.store import ContentStore

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 5.0


class ContentAccessor:
    """Read typed records by collection name and entry id.

    Usage::

        accessor = ContentAccessor(FileContentStore("content"))
        company = await accessor.get_company_info()
        plumbing = await accessor.get_services_by_category("plumbing")
    """

    def __init__(
        self,
        store: ContentStore,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
    ) -> None:
        self._store = store
        self._timeout = timeout

    @property
    def store(self) -> ContentStore:
        return self._store

    @property
    def timeout(self) -> float:
        return self._timeout

    # ------------------------------------------------------------------
    # Generic reads
    # ------------------------------------------------------------------

    async def get_entry(self, collection: str, entry_id: str) -> Optional[dict[str, Any]]:
        """Return one record, or ``None`` when the id does not exist."""
        record = await self._run(
            self._store.get, collection, entry_id,
            label=collection + "/" + entry_id,
        )
        logger.debug(
            "Fetched %s/%s (%s)", collection, entry_id,
            "found" if record is not None else "missing",
        )
        return record

    async def get_collection(
        self,
        collection: str,
        predicate: Optional[Callable[[dict[str, Any]], bool]] = None,
    ) -> list[dict[str, Any]]:
        """Return every record in a collection, optionally filtered."""
        return await self._run(
            self._store.list, collection, predicate, label=collection,
        )

    async def _run(self, func, *args, label: str):
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args), timeout=self._timeout,
            )
        except asyncio.TimeoutError as exc:
            raise FetchFailureError(
                "Timed out after " + str(self._timeout) + "s reading " + label
            ) from exc

    # ------------------------------------------------------------------
    # Business collections (one singleton entry per collection)
    # ------------------------------------------------------------------

    async def get_company_info(self) -> Optional[dict[str, Any]]:
        return await self.get_entry("company", "company")

    async def get_contact_info(self) -> Optional[dict[str, Any]]:
        return await self.get_entry("contact", "contact")

    async def get_faqs(self) -> Optional[dict[str, Any]]:
        return await self.get_entry("faqs", "faqs")

    async def get_services(self) -> Optional[dict[str, Any]]:
        return await self.get_entry("services", "services")

    async def get_pricing(self) -> Optional[dict[str, Any]]:
        return await self.get_entry("pricing", "pricing")

    async def get_testimonials(self) -> Optional[dict[str, Any]]:
        return await self.get_entry("testimonials", "testimonials")

    async def get_navigation(self) -> Optional[dict[str, Any]]:
        return await self.get_entry("navigation", "navigation")

    # ------------------------------------------------------------------
    # Filtered helpers
    # ------------------------------------------------------------------

    async def get_featured_testimonials(self) -> list[dict[str, Any]]:
        data = await self.get_testimonials()
        return [t for t in (data or {}).get("testimonials", []) if t.get("featured")]

    async def get_popular_services(self) -> list[dict[str, Any]]:
        data = await self.get_services()
        return [s for s in (data or {}).get("services", []) if s.get("popular")]

    async def get_services_by_category(self, category: str) -> list[dict[str, Any]]:
        data = await self.get_services()
        return [
            s for s in (data or {}).get("services", [])
            if s.get("category") == category
        ]

    async def get_faqs_by_category(self, category: str) -> Optional[dict[str, Any]]:
        """Return the FAQ category block named *category*, if any."""
        data = await self.get_faqs()
        for block in (data or {}).get("categories", []):
            if block.get("name") == category:
                return block
        return None
