"""Tests for the SEO merger: global/page merging, fallback, and decoding."""

import logging
import time

import pytest

from seo_starter.errors import (
    FetchFailureError,
    MalformedRecordError,
    MissingGlobalConfigError,
)
from seo_starter.modules.content import ContentAccessor, MemoryContentStore
from seo_starter.modules.seo import (
    FALLBACK_METADATA,
    SEOMerger,
    fallback_seo_data,
    merge_metadata,
    parse_seo_record,
)


def _merger(records):
    store = MemoryContentStore({"seo": records})
    return SEOMerger(ContentAccessor(store, timeout=2.0))


class _FailingStore(MemoryContentStore):

    def get(self, collection, entry_id):
        raise FetchFailureError("store offline")


class _BrokenStore(MemoryContentStore):

    def get(self, collection, entry_id):
        raise RuntimeError("unexpected bug")


class _SlowStore(MemoryContentStore):

    def get(self, collection, entry_id):
        time.sleep(0.3)
        return super().get(collection, entry_id)


# ===========================================================================
# merge_metadata / parse_seo_record
# ===========================================================================
class TestMergeMetadata:

    def test_page_value_wins(self):
        merged = merge_metadata({"title": "Global"}, {"title": "Page"})
        assert merged["title"] == "Page"

    def test_empty_page_value_falls_back(self):
        merged = merge_metadata({"title": "Global"}, {"title": ""})
        assert merged["title"] == "Global"

    def test_field_absent_from_both_is_unset(self):
        merged = merge_metadata({"title": "Global"}, {"url": "https://x.test"})
        assert "description" not in merged
        assert set(merged) == {"title", "url"}


class TestParseSeoRecord:

    def test_none_record_is_empty(self):
        assert parse_seo_record(None, "contact") == ({}, [])

    def test_unknown_meta_keys_are_dropped(self):
        meta, schema = parse_seo_record({"meta": {"title": "T", "colour": "red"}}, "x")
        assert meta == {"title": "T"}
        assert schema == []

    @pytest.mark.parametrize("record", [
        {"meta": ["title"]},
        {"meta": {"title": 42}},
        {"schema": {"@type": "Thing"}},
        {"schema": ["not-a-mapping"]},
    ])
    def test_malformed_records(self, record):
        with pytest.raises(MalformedRecordError):
            parse_seo_record(record, "bad")


# ===========================================================================
# SEOMerger
# ===========================================================================
class TestSEOMerger:

    @pytest.mark.asyncio
    async def test_page_title_overrides_global(self, seo_records):
        result = await _merger(seo_records).merge_seo_data("contact")
        assert result["metadata"]["title"] == "Contact PipeFix Experts | Get in Touch"
        # Fields only the global record has are inherited.
        assert result["metadata"]["robots"] == "index, follow"
        assert result["metadata"]["keywords"] == "contact, plumbing, Manchester"

    @pytest.mark.asyncio
    async def test_only_global_equals_global_metadata(self, seo_records):
        result = await _merger(seo_records).merge_seo_data("services")
        assert result["metadata"] == seo_records["global"]["meta"]
        assert result["schemaData"] == seo_records["global"]["schema"]

    @pytest.mark.asyncio
    async def test_schema_order_global_then_page(self, seo_records):
        seo_records["contact"]["schema"].append(dict(seo_records["global"]["schema"][0]))
        result = await _merger(seo_records).merge_seo_data("contact")
        types = [block["@type"] for block in result["schemaData"]]
        # No dedup: the repeated LocalBusiness block is kept in place.
        assert types == ["LocalBusiness", "ContactPage", "LocalBusiness"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_key", ["contact", "missing", "global"])
    async def test_missing_global_returns_fallback(self, seo_records, page_key):
        del seo_records["global"]
        result = await _merger(seo_records).merge_seo_data(page_key)
        assert result == {"metadata": FALLBACK_METADATA, "schemaData": []}

    @pytest.mark.asyncio
    async def test_fetch_failure_returns_fallback(self, caplog):
        merger = SEOMerger(ContentAccessor(_FailingStore()))
        with caplog.at_level(logging.ERROR):
            result = await merger.merge_seo_data("contact")
        assert result == fallback_seo_data()
        assert "Error loading SEO data for page: contact" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_fallback(self):
        merger = SEOMerger(ContentAccessor(_BrokenStore()))
        assert await merger.merge_seo_data("contact") == fallback_seo_data()

    @pytest.mark.asyncio
    async def test_slow_store_returns_fallback(self, seo_records, caplog):
        merger = SEOMerger(ContentAccessor(_SlowStore({"seo": seo_records}), timeout=0.05))
        with caplog.at_level(logging.ERROR):
            result = await merger.merge_seo_data("contact")
        assert result == fallback_seo_data()
        assert "Error loading SEO data for page: contact" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_page_returns_fallback(self, seo_records):
        seo_records["contact"] = {"meta": "not a mapping"}
        result = await _merger(seo_records).merge_seo_data("contact")
        assert result["metadata"]["title"] == "Page Not Found"

    @pytest.mark.asyncio
    async def test_strict_load_raises_missing_global(self, seo_records):
        del seo_records["global"]
        with pytest.raises(MissingGlobalConfigError) as exc_info:
            await _merger(seo_records).load_seo_data("contact")
        assert str(exc_info.value) == "Global SEO data not found: seo/global"

    @pytest.mark.asyncio
    async def test_strict_load_raises_fetch_failure(self):
        merger = SEOMerger(ContentAccessor(_FailingStore()))
        with pytest.raises(FetchFailureError):
            await merger.load_seo_data("contact")

    @pytest.mark.asyncio
    async def test_results_are_independent(self, seo_records):
        merger = _merger(seo_records)
        first = await merger.merge_seo_data("contact")
        first["metadata"]["title"] = "Changed"
        first["schemaData"].clear()
        second = await merger.merge_seo_data("contact")
        assert second["metadata"]["title"] == "Contact PipeFix Experts | Get in Touch"
        assert len(second["schemaData"]) == 2

    @pytest.mark.asyncio
    async def test_fallback_is_fresh_copy(self):
        merger = _merger({})
        first = await merger.merge_seo_data("contact")
        first["metadata"]["title"] = "Changed"
        assert FALLBACK_METADATA["title"] == "Page Not Found"

    @pytest.mark.asyncio
    async def test_custom_global_key(self, seo_records):
        seo_records["site"] = seo_records.pop("global")
        store = MemoryContentStore({"seo": seo_records})
        merger = SEOMerger(ContentAccessor(store), global_key="site")
        result = await merger.merge_seo_data("contact")
        assert result["metadata"]["siteName"] == "PipeFix Experts"
