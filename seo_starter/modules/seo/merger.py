"""SEO Merger — combine the global SEO record with a page's SEO record.

Every record in the ``seo`` collection has the shape::

    meta:            # optional MetaRecord
      title: ...
      description: ...
    schema:          # optional list of Schema.org blocks
      - {"@context": "https://schema.org", "@type": "LocalBusiness", ...}

The ``global`` entry is the base layer for every page; a page entry
overrides it field by field.  Schema blocks are concatenated with every
global block ahead of every page block.
"""

import asyncio
import logging
from typing import Any, Optional

from seo_starter.errors import (
    FetchFailureError,
    MalformedRecordError,
    MissingGlobalConfigError,
    SEODataError,
)
from seo_starter.modules.content.accessor import ContentAccessor

logger = logging.getLogger(__name__)

SEO_COLLECTION = "seo"
GLOBAL_KEY = "global"

META_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "url",
    "image",
    "robots",
    "author",
    "publisher",
    "keywords",
    "ogType",
    "siteName",
    "twitterCard",
    "twitterCreator",
    "themeColor",
)

FALLBACK_METADATA: dict[str, str] = {
    "title": "Page Not Found",
    "description": "SEO data could not be loaded",
}


def fallback_seo_data() -> dict[str, Any]:
    """Return a fresh copy of the minimal metadata used when loading fails."""
    return {"metadata": dict(FALLBACK_METADATA), "schemaData": []}


# ---------------------------------------------------------------------------
# Record decoding
# ---------------------------------------------------------------------------

def parse_seo_record(
    record: Optional[dict[str, Any]], entry_id: str
) -> tuple[dict[str, str], list[dict[str, Any]]]:
    """Split a raw ``seo`` record into its metadata and schema blocks.

    Unknown metadata keys are dropped.  Raises :class:`MalformedRecordError`
    when ``meta`` or ``schema`` has the wrong type.
    """
    if record is None:
        return {}, []

    meta = record.get("meta")
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise MalformedRecordError("seo/" + entry_id + ": 'meta' must be a mapping")

    metadata: dict[str, str] = {}
    for key, value in meta.items():
        if key not in META_FIELDS:
            logger.debug("seo/%s: ignoring unknown meta field %r", entry_id, key)
            continue
        if value is None:
            continue
        if not isinstance(value, str):
            raise MalformedRecordError(
                "seo/" + entry_id + ": meta field '" + key + "' must be a string"
            )
        metadata[key] = value

    schema = record.get("schema")
    if schema is None:
        schema = []
    if not isinstance(schema, list):
        raise MalformedRecordError("seo/" + entry_id + ": 'schema' must be a list")
    for idx, block in enumerate(schema):
        if not isinstance(block, dict):
            raise MalformedRecordError(
                "seo/" + entry_id + ": schema[" + str(idx) + "] must be a mapping"
            )
    return metadata, list(schema)


def merge_metadata(
    global_meta: dict[str, str], page_meta: dict[str, str]
) -> dict[str, str]:
    """Field-wise merge: a non-empty page value wins, else the global value."""
    merged: dict[str, str] = {}
    for field in META_FIELDS:
        page_value = page_meta.get(field)
        if page_value is not None and page_value != "":
            merged[field] = page_value
        elif global_meta.get(field) is not None:
            merged[field] = global_meta[field]
    return merged


# ---------------------------------------------------------------------------
# SEOMerger
# ---------------------------------------------------------------------------

class SEOMerger:
    """Merge global and page-level SEO data for page templates.

    Usage::

        merger = SEOMerger(ContentAccessor(FileContentStore("content")))
        seo = await merger.merge_seo_data("contact")
        seo["metadata"]["title"], seo["schemaData"]
    """

    def __init__(
        self,
        accessor: ContentAccessor,
        collection: str = SEO_COLLECTION,
        global_key: str = GLOBAL_KEY,
    ) -> None:
        self._accessor = accessor
        self._collection = collection
        self._global_key = global_key

    async def load_seo_data(self, page_key: str) -> dict[str, Any]:
        """Strict merge: raise the loading error instead of falling back.

        Raises:
            MissingGlobalConfigError: the global record does not exist.
            FetchFailureError: the store failed, timed out, or returned a
                malformed record.
        """
        try:
            global_record, page_record = await asyncio.wait_for(
                asyncio.gather(
                    self._accessor.get_entry(self._collection, self._global_key),
                    self._accessor.get_entry(self._collection, page_key),
                ),
                timeout=self._accessor.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise FetchFailureError(
                "Timed out loading SEO data for page: " + page_key
            ) from exc

        if global_record is None:
            raise MissingGlobalConfigError(self._collection, self._global_key)

        global_meta, global_schema = parse_seo_record(global_record, self._global_key)
        page_meta, page_schema = parse_seo_record(page_record, page_key)
        if page_record is None:
            logger.debug("No page SEO record for %r; using global data only", page_key)

        merged = {
            "metadata": merge_metadata(global_meta, page_meta),
            "schemaData": global_schema + page_schema,
        }
        logger.debug(
            "Merged SEO data for %s: %d meta fields, %d schema blocks",
            page_key, len(merged["metadata"]), len(merged["schemaData"]),
        )
        return merged

    async def merge_seo_data(self, page_key: str) -> dict[str, Any]:
        """Return ``{"metadata": ..., "schemaData": [...]}`` for *page_key*.

        Never raises for loading problems: the page build gets the fallback
        metadata and an empty schema list instead.
        """
        try:
            return await self.load_seo_data(page_key)
        except SEODataError as exc:
            logger.error(
                "Error loading SEO data for page: %s (%s: %s)",
                page_key, type(exc).__name__, exc,
            )
        except Exception:
            logger.exception("Unexpected error loading SEO data for page: %s", page_key)
        return fallback_seo_data()
