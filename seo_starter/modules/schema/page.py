"""Page-level schema assembly: site blocks first, then the page's own blocks."""

import logging
from typing import Any, Optional

from seo_starter.modules.schema.builder import (
    DEFAULT_SCHEMA_CONFIG,
    create_article_schema,
    create_breadcrumb_schema,
    create_faq_schema,
    create_organization_schema,
    create_person_schema,
    create_product_schema,
    create_service_schema,
    create_webpage_schema,
    create_website_schema,
)

logger = logging.getLogger(__name__)

PAGE_TYPES = ("webpage", "about", "contact", "article", "service", "product", "faq")

_WEBPAGE_VARIANTS = {
    "about": "AboutPage",
    "contact": "ContactPage",
}


def _page_author(
    page_data: dict[str, Any], site_config: dict[str, Any]
) -> Optional[dict[str, Any]]:
    if page_data.get("author"):
        return create_person_schema(page_data["author"])
    if site_config.get("defaultAuthor"):
        return create_person_schema(site_config["defaultAuthor"])
    return None


def generate_page_schema(
    page_data: dict[str, Any],
    site_config: dict[str, Any],
    config: Optional[dict[str, Any]] = None,
) -> list[dict[str, Any]]:
    """Return the ordered schema blocks for one page.

    Organization and WebSite always come first, then the block(s) for
    ``page_data["type"]``, then a BreadcrumbList when more than one crumb
    was given.  An unknown type is treated as a plain web page.

    Args:
        page_data: ``type``, ``title``, ``description``, ``url`` and optionally
            ``image``, ``author``, ``datePublished``, ``dateModified``,
            ``breadcrumbs``, ``faqs``, ``services``, ``products``.
        site_config: ``organization``, ``website`` and optional
            ``defaultAuthor`` partial records.
        config: schema options; ``breadcrumbs`` controls whether web pages
            embed their breadcrumb trail.
    """
    config = config if config is not None else DEFAULT_SCHEMA_CONFIG
    organization = site_config.get("organization") or {}
    website = site_config.get("website") or {}
    page_type = page_data.get("type") or "webpage"
    breadcrumbs = page_data.get("breadcrumbs") or []

    schemas: list[dict[str, Any]] = [
        create_organization_schema(organization),
        create_website_schema(website),
    ]

    if page_type == "article":
        schemas.append(create_article_schema({
            "headline": page_data.get("title"),
            "description": page_data.get("description"),
            "url": page_data.get("url"),
            "image": page_data.get("image"),
            "author": _page_author(page_data, site_config),
            "publisher": create_organization_schema(organization),
            "datePublished": page_data.get("datePublished"),
            "dateModified": page_data.get("dateModified"),
        }))

    elif page_type == "service":
        for service in page_data.get("services") or []:
            schemas.append(create_service_schema({
                **service,
                "provider": create_organization_schema(organization),
            }))

    elif page_type == "product":
        for product in page_data.get("products") or []:
            schemas.append(create_product_schema({
                **product,
                "brand": create_organization_schema(organization),
            }))

    elif page_type == "faq":
        if page_data.get("faqs"):
            schemas.append(create_faq_schema(page_data["faqs"]))

    else:
        if page_type not in PAGE_TYPES:
            logger.warning("Unknown page type %r; using WebPage schema", page_type)
        schemas.append(create_webpage_schema({
            "@type": _WEBPAGE_VARIANTS.get(page_type, "WebPage"),
            "name": page_data.get("title"),
            "description": page_data.get("description"),
            "url": page_data.get("url"),
            "isPartOf": create_website_schema(website),
            "author": _page_author(page_data, site_config),
            "publisher": create_organization_schema(organization),
            "datePublished": page_data.get("datePublished"),
            "dateModified": page_data.get("dateModified"),
            "breadcrumb": create_breadcrumb_schema(breadcrumbs) if breadcrumbs else None,
        }, config))

    if len(breadcrumbs) > 1:
        schemas.append(create_breadcrumb_schema(breadcrumbs))

    logger.debug(
        "Generated %d schema blocks for %s page %s",
        len(schemas), page_type, page_data.get("url", ""),
    )
    return schemas
