"""SEO module — global/page metadata and structured-data merging."""

from seo_starter.modules.seo.merger import (
    FALLBACK_METADATA,
    META_FIELDS,
    SEOMerger,
    fallback_seo_data,
    merge_metadata,
    parse_seo_record,
)

__all__ = [
    "FALLBACK_METADATA",
    "META_FIELDS",
    "SEOMerger",
    "fallback_seo_data",
    "merge_metadata",
    "parse_seo_record",
]
