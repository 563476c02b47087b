"""Schema module — Schema.org JSON-LD construction, validation, and cleanup."""

from seo_starter.modules.schema.builder import (
    DEFAULT_SCHEMA_CONFIG,
    SCHEMA_CONTEXT,
    SCHEMA_TYPES,
    SchemaType,
    build_schema,
    clean_schema,
    create_article_schema,
    create_breadcrumb_schema,
    create_faq_schema,
    create_local_business_schema,
    create_organization_schema,
    create_person_schema,
    create_product_schema,
    create_service_schema,
    create_webpage_schema,
    create_website_schema,
    to_json_ld,
    validate_schema,
)
from seo_starter.modules.schema.page import PAGE_TYPES, generate_page_schema

__all__ = [
    "DEFAULT_SCHEMA_CONFIG",
    "PAGE_TYPES",
    "SCHEMA_CONTEXT",
    "SCHEMA_TYPES",
    "SchemaType",
    "build_schema",
    "clean_schema",
    "create_article_schema",
    "create_breadcrumb_schema",
    "create_faq_schema",
    "create_local_business_schema",
    "create_organization_schema",
    "create_person_schema",
    "create_product_schema",
    "create_service_schema",
    "create_webpage_schema",
    "create_website_schema",
    "generate_page_schema",
    "to_json_ld",
    "validate_schema",
]
