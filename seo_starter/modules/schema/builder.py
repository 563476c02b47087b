"""Schema Builder — produces Schema.org JSON-LD blocks from partial records.

Every supported type is described by one :class:`SchemaType` row in
``SCHEMA_TYPES``: the fields it copies, placeholder defaults for required
fields, value transforms, and how its ``@id`` is derived.  A single routine,
:func:`build_schema`, turns a partial record into a complete block, so a
constructor can never fail: missing required data degrades to a
placeholder.
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

SCHEMA_CONTEXT = "https://schema.org"
DEFAULT_SITE_URL = "https://yourwebsite.com"
DEFAULT_LANGUAGE = "en-US"

DEFAULT_SCHEMA_CONFIG: dict[str, Any] = {
    "breadcrumbs": True,
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _search_action(site_url: str) -> dict[str, Any]:
    return {
        "@type": "SearchAction",
        "target": {
            "@type": "EntryPoint",
            "urlTemplate": site_url + "/search?q={search_term_string}",
        },
        "query-input": "required name=search_term_string",
    }


def _image_objects(image: Any) -> Any:
    """Promote a bare image URL to a one-element ``ImageObject`` list."""
    if isinstance(image, str):
        return [{"@type": "ImageObject", "url": image}]
    return image


# ---------------------------------------------------------------------------
# Type table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SchemaType:
    """Descriptor for one Schema.org type.

    ``defaults`` values are either constants (deep-copied per block) or
    callables receiving the fields resolved so far, in ``fields`` order.
    The ``@id`` is ``url + id_suffix`` when the block has a URL, else
    ``id_fallback``.
    """

    type_name: str
    fields: tuple[str, ...]
    defaults: dict[str, Any] = field(default_factory=dict)
    transforms: dict[str, Callable[[Any], Any]] = field(default_factory=dict)
    type_overridable: bool = False
    id_suffix: str = ""
    id_fallback: Optional[str] = None


SCHEMA_TYPES: dict[str, SchemaType] = {
    "organization": SchemaType(
        type_name="Organization",
        fields=(
            "name", "url", "logo", "address", "contactPoint", "sameAs",
            "description", "email", "telephone", "foundingDate",
            "numberOfEmployees", "areaServed",
        ),
        defaults={"name": "Your Company", "url": DEFAULT_SITE_URL, "sameAs": []},
        id_suffix="#organization",
    ),
    "person": SchemaType(
        type_name="Person",
        fields=(
            "name", "url", "image", "jobTitle", "worksFor", "sameAs",
            "email", "telephone", "address",
        ),
        defaults={"name": "Author Name", "sameAs": []},
        id_fallback="#person",
    ),
    "website": SchemaType(
        type_name="WebSite",
        fields=(
            "name", "url", "description", "publisher", "potentialAction",
            "inLanguage", "copyrightYear", "copyrightHolder",
        ),
        defaults={
            "name": "Your Website",
            "url": DEFAULT_SITE_URL,
            "potentialAction": lambda r: _search_action(r["url"]),
            "inLanguage": DEFAULT_LANGUAGE,
            "copyrightYear": lambda r: datetime.now(timezone.utc).year,
        },
        id_suffix="#website",
    ),
    "webpage": SchemaType(
        type_name="WebPage",
        fields=(
            "name", "url", "description", "isPartOf", "author", "publisher",
            "datePublished", "dateModified", "inLanguage", "breadcrumb",
            "mainEntity", "speakable",
        ),
        defaults={
            "name": "Page Title",
            "url": DEFAULT_SITE_URL,
            "dateModified": lambda r: r.get("datePublished"),
            "inLanguage": DEFAULT_LANGUAGE,
        },
        type_overridable=True,
    ),
    "article": SchemaType(
        type_name="Article",
        fields=(
            "headline", "description", "image", "author", "publisher",
            "datePublished", "dateModified", "url", "mainEntityOfPage",
            "articleSection", "wordCount", "keywords", "inLanguage",
        ),
        defaults={
            "headline": "Article Title",
            "datePublished": lambda r: _now_iso(),
            "dateModified": lambda r: r["datePublished"],
            "url": DEFAULT_SITE_URL,
            "mainEntityOfPage": lambda r: r["url"],
            "keywords": [],
            "inLanguage": DEFAULT_LANGUAGE,
        },
        transforms={"image": _image_objects},
        type_overridable=True,
    ),
    "service": SchemaType(
        type_name="Service",
        fields=(
            "name", "description", "provider", "areaServed", "serviceType",
            "offers", "url", "image", "category",
        ),
        defaults={
            "name": "Service Name",
            "description": "Service description",
            "provider": lambda r: create_organization_schema({}),
            "offers": [],
        },
        id_fallback="#service",
    ),
    "faq": SchemaType(
        type_name="FAQPage",
        fields=("mainEntity",),
        defaults={"mainEntity": []},
        id_fallback="#faq",
    ),
    "product": SchemaType(
        type_name="Product",
        fields=(
            "name", "description", "image", "brand", "manufacturer", "offers",
            "aggregateRating", "review", "sku", "mpn", "gtin", "category", "url",
        ),
        defaults={
            "name": "Product Name",
            "description": "Product description",
            "offers": [],
            "review": [],
        },
        transforms={"image": _image_objects},
        type_overridable=True,
        id_fallback="#product",
    ),
    "local_business": SchemaType(
        type_name="LocalBusiness",
        fields=(
            "name", "address", "telephone", "url", "image", "description",
            "openingHours", "priceRange", "servesCuisine", "paymentAccepted",
            "currenciesAccepted", "geo", "aggregateRating", "review",
        ),
        defaults={
            "name": "Business Name",
            "address": {
                "@type": "PostalAddress",
                "streetAddress": "123 Main St",
                "addressLocality": "City",
                "addressRegion": "State",
                "postalCode": "12345",
                "addressCountry": "US",
            },
            "telephone": "+1-555-555-5555",
            "url": DEFAULT_SITE_URL,
            "openingHours": [],
            "review": [],
        },
        type_overridable=True,
        id_suffix="#business",
    ),
    "breadcrumb": SchemaType(
        type_name="BreadcrumbList",
        fields=("itemListElement",),
        defaults={"itemListElement": []},
        id_fallback="#breadcrumb",
    ),
}


def build_schema(kind: str, data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Build a complete block of type *kind* (a ``SCHEMA_TYPES`` key).

    Fields outside the type's field list are ignored.  The input is never
    mutated.
    """
    spec = SCHEMA_TYPES[kind]
    data = data or {}

    schema_type = spec.type_name
    if spec.type_overridable and not _is_blank(data.get("@type")):
        schema_type = data["@type"]

    block: dict[str, Any] = {"@context": SCHEMA_CONTEXT, "@type": schema_type}
    resolved: dict[str, Any] = {}
    for name in spec.fields:
        value = data.get(name)
        if _is_blank(value) and name in spec.defaults:
            default = spec.defaults[name]
            value = default(resolved) if callable(default) else copy.deepcopy(default)
        if value is not None and name in spec.transforms:
            value = spec.transforms[name](value)
        resolved[name] = value
        if value is not None:
            block[name] = value

    if not _is_blank(data.get("@id")):
        block["@id"] = data["@id"]
    elif block.get("url"):
        block["@id"] = block["url"] + spec.id_suffix
    elif spec.id_fallback:
        block["@id"] = spec.id_fallback

    logger.debug("Built %s schema (%s)", schema_type, block.get("@id", "no id"))
    return block


# ---------------------------------------------------------------------------
# Public constructors
# ---------------------------------------------------------------------------

def create_organization_schema(data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return build_schema("organization", data)


def create_person_schema(data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return build_schema("person", data)


def create_website_schema(data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return build_schema("website", data)


def create_webpage_schema(
    data: Optional[dict[str, Any]] = None,
    config: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """WebPage / AboutPage / ContactPage block.

    The ``breadcrumb`` property is embedded only when
    ``config["breadcrumbs"]`` is true.
    """
    config = config if config is not None else DEFAULT_SCHEMA_CONFIG
    data = dict(data or {})
    if not config.get("breadcrumbs", True):
        data.pop("breadcrumb", None)
    return build_schema("webpage", data)


def create_article_schema(data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return build_schema("article", data)


def create_service_schema(data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return build_schema("service", data)


def create_product_schema(data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return build_schema("product", data)


def create_local_business_schema(data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return build_schema("local_business", data)


def create_faq_schema(questions: list[dict[str, str]]) -> dict[str, Any]:
    """FAQPage block from a list of ``{question, answer}`` dicts."""
    entities = []
    for idx, qa in enumerate(questions, start=1):
        entities.append({
            "@type": "Question",
            "@context": SCHEMA_CONTEXT,
            "name": qa.get("question", ""),
            "acceptedAnswer": {
                "@type": "Answer",
                "@context": SCHEMA_CONTEXT,
                "text": qa.get("answer", ""),
            },
            "@id": "#question-" + str(idx),
        })
    return build_schema("faq", {"mainEntity": entities})


def create_breadcrumb_schema(items: list[dict[str, Any]]) -> dict[str, Any]:
    """BreadcrumbList block from ``[{name, url?}]`` in navigation order."""
    elements = []
    for idx, crumb in enumerate(items, start=1):
        element: dict[str, Any] = {
            "@type": "ListItem",
            "position": idx,
            "name": crumb.get("name", ""),
        }
        if crumb.get("url"):
            element["item"] = crumb["url"]
        elements.append(element)
    return build_schema("breadcrumb", {"itemListElement": elements})


# ---------------------------------------------------------------------------
# Validation and cleanup
# ---------------------------------------------------------------------------

_REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "Organization": ("name", "url"),
    "Person": ("name",),
    "WebSite": ("name", "url"),
    "WebPage": ("name", "url"),
    "AboutPage": ("name", "url"),
    "ContactPage": ("name", "url"),
    "Article": ("headline", "datePublished"),
    "BlogPosting": ("headline", "datePublished"),
    "NewsArticle": ("headline", "datePublished"),
}


def validate_schema(schema: Any) -> bool:
    """Structural check: ``@context``, ``@type`` and type-specific required fields.

    Types without an entry in the required-field table pass.
    """
    if not isinstance(schema, dict):
        return False
    if not schema.get("@context") or not schema.get("@type"):
        return False
    required = _REQUIRED_FIELDS.get(schema["@type"], ())
    return all(schema.get(fld) for fld in required)


def _clean_value(value: Any) -> Any:
    if isinstance(value, dict):
        return clean_schema(value)
    if isinstance(value, list):
        return [_clean_value(v) for v in value if v is not None]
    return value


def clean_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Return a copy with ``None`` values and empty lists removed, recursively."""
    cleaned: dict[str, Any] = {}
    for key, value in schema.items():
        if value is None:
            continue
        value = _clean_value(value)
        if isinstance(value, list) and not value:
            continue
        cleaned[key] = value
    return cleaned


def to_json_ld(schemas: list[dict[str, Any]], indent: Optional[int] = None) -> str:
    """Serialise cleaned blocks for a ``<script type="application/ld+json">`` tag."""
    cleaned = [clean_schema(s) for s in schemas]
    return json.dumps(cleaned, indent=indent, ensure_ascii=False)
