"""Content Validator — rule-based SEO quality checks for pages.

Checks page metadata, content HTML, images, and Schema.org blocks against
configurable thresholds.  Every check returns a list of
:class:`ValidationResult` findings; nothing here raises on a bad page, and
the checks never stop at the first problem.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Iterable, Optional

from bs4 import BeautifulSoup

from seo_starter.utils.text_processing import (
    average_sentence_length,
    count_words,
    parse_keywords,
)

logger = logging.getLogger(__name__)

LEVELS = ("error", "warning", "info")

VALID_ROBOTS_DIRECTIVES = (
    "index",
    "noindex",
    "follow",
    "nofollow",
    "noarchive",
    "nosnippet",
    "noimageindex",
)

_HEADING_RE = re.compile(r"^h[1-6]$")
_MAX_AVG_SENTENCE_WORDS = 25


@dataclass(frozen=True)
class ValidationResult:
    """One rule violation found on a page."""

    level: str
    field: str
    message: str
    suggestion: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["suggestion"] is None:
            del data["suggestion"]
        return data


@dataclass
class ContentQualityRules:
    """Thresholds used by every check."""

    title_min_length: int = 30
    title_max_length: int = 60
    description_min_length: int = 120
    description_max_length: int = 160
    keyword_max_count: int = 10
    min_content_length: int = 300
    max_content_length: int = 10000
    require_schema: bool = True
    required_schema_types: list[str] = field(
        default_factory=lambda: ["Organization", "WebSite"]
    )

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "ContentQualityRules":
        """Build rules from the ``validation`` settings section; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        overrides = {k: v for k, v in (config or {}).items() if k in known}
        ignored = sorted(set(config or {}) - known)
        if ignored:
            logger.warning("Ignoring unknown validation settings: %s", ", ".join(ignored))
        return cls(**overrides)


DEFAULT_QUALITY_RULES = ContentQualityRules()


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

def _type_error(field_name: str, label: str, expected: str = "a string") -> ValidationResult:
    return ValidationResult(
        level="error",
        field=field_name,
        message=label + " must be " + expected,
        suggestion="Fix the " + field_name + " value in the SEO record",
    )


def _check_length(
    value: str, field_name: str, label: str, min_len: int, max_len: int,
) -> list[ValidationResult]:
    results: list[ValidationResult] = []
    length = len(value)
    if length < min_len:
        results.append(ValidationResult(
            level="warning",
            field=field_name,
            message=(
                label + " too short (" + str(length) + " chars). Recommended: "
                + str(min_len) + "+ characters"
            ),
            suggestion="Expand the " + label.lower() + " with relevant keywords and descriptive text",
        ))
    if length > max_len:
        results.append(ValidationResult(
            level="warning",
            field=field_name,
            message=(
                label + " too long (" + str(length) + " chars). Recommended: "
                + str(max_len) + " characters maximum"
            ),
            suggestion="Shorten the " + label.lower() + " while keeping key information",
        ))
    return results


def validate_seo_data(
    seo: Mapping[str, Any],
    rules: ContentQualityRules = DEFAULT_QUALITY_RULES,
) -> list[ValidationResult]:
    """Check title, description, keywords and robots of a metadata record."""
    results: list[ValidationResult] = []

    title = seo.get("title")
    if not title:
        results.append(ValidationResult(
            level="error",
            field="title",
            message="Title is required",
            suggestion="Add a descriptive title for better SEO",
        ))
    elif not isinstance(title, str):
        results.append(_type_error("title", "Title"))
    else:
        results.extend(_check_length(
            title, "title", "Title", rules.title_min_length, rules.title_max_length,
        ))

    description = seo.get("description")
    if not description:
        results.append(ValidationResult(
            level="error",
            field="description",
            message="Meta description is required",
            suggestion="Add a compelling meta description to improve CTR",
        ))
    elif not isinstance(description, str):
        results.append(_type_error("description", "Description"))
    else:
        results.extend(_check_length(
            description, "description", "Description",
            rules.description_min_length, rules.description_max_length,
        ))

    raw_keywords = seo.get("keywords")
    if raw_keywords is None or isinstance(raw_keywords, (str, list, tuple)):
        keywords = parse_keywords(raw_keywords)
    else:
        results.append(_type_error("keywords", "Keywords", "a string or a list"))
        keywords = []
    if len(keywords) > rules.keyword_max_count:
        results.append(ValidationResult(
            level="warning",
            field="keywords",
            message=(
                "Too many keywords (" + str(len(keywords)) + "). Recommended: "
                + str(rules.keyword_max_count) + " maximum"
            ),
            suggestion="Focus on the most relevant keywords for better targeting",
        ))
    seen: set[str] = set()
    duplicates: list[str] = []
    for kw in keywords:
        if kw in seen and kw not in duplicates:
            duplicates.append(kw)
        seen.add(kw)
    if duplicates:
        results.append(ValidationResult(
            level="warning",
            field="keywords",
            message="Duplicate keywords found: " + ", ".join(duplicates),
            suggestion="Remove duplicate keywords to improve keyword focus",
        ))

    robots = seo.get("robots")
    if robots and not isinstance(robots, str):
        results.append(_type_error("robots", "Robots"))
    elif robots:
        for directive in (d.strip() for d in robots.split(",")):
            if directive not in VALID_ROBOTS_DIRECTIVES:
                results.append(ValidationResult(
                    level="error",
                    field="robots",
                    message="Invalid robots directive: " + directive,
                    suggestion="Use valid directives: " + ", ".join(VALID_ROBOTS_DIRECTIVES),
                ))

    return results


# ---------------------------------------------------------------------------
# Content and images
# ---------------------------------------------------------------------------

def validate_content(
    content: Optional[str],
    rules: ContentQualityRules = DEFAULT_QUALITY_RULES,
) -> list[ValidationResult]:
    """Check length, sentence length and heading structure of page HTML."""
    if not content or not content.strip():
        return [ValidationResult(
            level="error",
            field="content",
            message="Content is empty",
            suggestion="Add meaningful content for better user experience and SEO",
        )]

    results: list[ValidationResult] = []
    char_count = len(content)
    word_count = count_words(content)
    size = "(" + str(char_count) + " chars, ~" + str(word_count) + " words)"

    if char_count < rules.min_content_length:
        results.append(ValidationResult(
            level="warning",
            field="content",
            message=(
                "Content too short " + size + ". Recommended: "
                + str(rules.min_content_length) + "+ characters"
            ),
            suggestion="Add more detailed, valuable content for better SEO and user experience",
        ))
    if char_count > rules.max_content_length:
        results.append(ValidationResult(
            level="info",
            field="content",
            message=(
                "Content very long " + size + ". Consider: "
                + str(rules.max_content_length) + " characters maximum"
            ),
            suggestion="Consider breaking into multiple pages or sections for better readability",
        ))

    avg_len = average_sentence_length(content)
    if avg_len > _MAX_AVG_SENTENCE_WORDS:
        results.append(ValidationResult(
            level="info",
            field="content",
            message=(
                "Long average sentence length (" + format(avg_len, ".1f")
                + " words). Consider shorter sentences for readability"
            ),
            suggestion="Break long sentences into shorter ones for better readability",
        ))

    soup = BeautifulSoup(content, "html.parser")
    if soup.find(_HEADING_RE) is None:
        results.append(ValidationResult(
            level="warning",
            field="content",
            message="No headings found in content",
            suggestion="Add headings (H1, H2, etc.) to improve content structure and SEO",
        ))

    return results


def validate_images(content: str) -> list[ValidationResult]:
    """Check alt text, lazy loading and explicit dimensions of every ``<img>``."""
    results: list[ValidationResult] = []
    soup = BeautifulSoup(content or "", "html.parser")

    for idx, img in enumerate(soup.find_all("img")):
        field_name = "image[" + str(idx) + "]"
        alt = img.get("alt")
        if alt is None:
            results.append(ValidationResult(
                level="error",
                field=field_name,
                message="Image missing alt text",
                suggestion="Add descriptive alt text for accessibility and SEO",
            ))
        elif not alt.strip():
            results.append(ValidationResult(
                level="error",
                field=field_name,
                message="Image has empty alt text",
                suggestion="Add descriptive alt text content",
            ))

        if img.get("loading") is None:
            results.append(ValidationResult(
                level="warning",
                field=field_name,
                message="Image missing loading attribute",
                suggestion='Add loading="lazy" for performance optimization',
            ))

        if img.get("width") is None or img.get("height") is None:
            results.append(ValidationResult(
                level="info",
                field=field_name,
                message="Image missing width/height attributes",
                suggestion="Add width and height to prevent layout shift",
            ))

    return results


# ---------------------------------------------------------------------------
# Schema markup
# ---------------------------------------------------------------------------

def validate_schemas(
    schemas: list[dict[str, Any]],
    rules: ContentQualityRules = DEFAULT_QUALITY_RULES,
) -> list[ValidationResult]:
    """Check presence, required types and per-block required fields."""
    results: list[ValidationResult] = []

    if rules.require_schema and not schemas:
        results.append(ValidationResult(
            level="error",
            field="schema",
            message="Schema markup is required but not found",
            suggestion="Add structured data to improve search engine understanding",
        ))

    present_types = {s.get("@type") for s in schemas}
    for required_type in rules.required_schema_types:
        if required_type not in present_types:
            results.append(ValidationResult(
                level="warning",
                field="schema",
                message="Missing required schema type: " + required_type,
                suggestion="Add " + required_type + " schema for better SEO",
            ))

    for idx, schema in enumerate(schemas):
        prefix = "schema[" + str(idx) + "]"
        if not schema.get("@context"):
            results.append(ValidationResult(
                level="error",
                field=prefix,
                message="Schema missing @context",
                suggestion="Add @context to schema for proper structured data",
            ))
        if not schema.get("@type"):
            results.append(ValidationResult(
                level="error",
                field=prefix,
                message="Schema missing @type",
                suggestion="Add @type to schema for proper classification",
            ))

        schema_type = schema.get("@type")
        if schema_type == "Organization" and not schema.get("name"):
            results.append(ValidationResult(
                level="error",
                field=prefix + ".name",
                message="Organization schema missing name",
                suggestion="Add organization name for proper identification",
            ))
        elif schema_type == "WebSite" and not schema.get("url"):
            results.append(ValidationResult(
                level="error",
                field=prefix + ".url",
                message="WebSite schema missing URL",
                suggestion="Add website URL for proper identification",
            ))
        elif schema_type in ("Article", "BlogPosting"):
            if not schema.get("headline"):
                results.append(ValidationResult(
                    level="error",
                    field=prefix + ".headline",
                    message="Article schema missing headline",
                    suggestion="Add article headline for proper content identification",
                ))
            if not schema.get("datePublished"):
                results.append(ValidationResult(
                    level="warning",
                    field=prefix + ".datePublished",
                    message="Article schema missing publication date",
                    suggestion="Add publication date for better content freshness signals",
                ))

    return results


# ---------------------------------------------------------------------------
# Page-level entry point and reporting
# ---------------------------------------------------------------------------

def validate_page(
    page_data: Mapping[str, Any],
    rules: ContentQualityRules = DEFAULT_QUALITY_RULES,
) -> list[ValidationResult]:
    """Run every check whose input is present in *page_data*.

    ``page_data`` may carry ``seo`` (metadata mapping), ``content`` (HTML
    string; an empty string still counts as supplied) and ``schemas``.
    """
    results: list[ValidationResult] = []

    if page_data.get("seo") is not None:
        results.extend(validate_seo_data(page_data["seo"], rules))

    content = page_data.get("content")
    if content is not None:
        results.extend(validate_content(content, rules))
        results.extend(validate_images(content))

    if page_data.get("schemas") is not None:
        results.extend(validate_schemas(page_data["schemas"], rules))

    logger.debug("Page validation produced %d findings", len(results))
    return results


def _finding_dict(result: Any) -> dict[str, Any]:
    if isinstance(result, ValidationResult):
        return result.to_dict()
    return dict(result)


def generate_validation_report(results: Iterable[Any]) -> dict[str, Any]:
    """Aggregate findings into ``{"summary": {...}, "results": [...]}``.

    Accepts :class:`ValidationResult` objects or plain mappings with a
    ``level`` key.  The page is valid when there are no errors.
    """
    results = list(results)
    counts = {level: 0 for level in LEVELS}
    for result in results:
        level = _finding_dict(result).get("level")
        if level in counts:
            counts[level] += 1

    return {
        "summary": {
            "total": len(results),
            "errors": counts["error"],
            "warnings": counts["warning"],
            "info": counts["info"],
            "valid": counts["error"] == 0,
        },
        "results": results,
    }


def format_validation_report(report: Mapping[str, Any]) -> str:
    """Render a report as plain text for logs and CI output."""
    summary = report["summary"]
    findings = [_finding_dict(r) for r in report["results"]]

    lines = [
        "Content Validation Report",
        "=" * 40,
        "Summary: " + str(summary["total"]) + " issues found",
        "  Errors: " + str(summary["errors"]),
        "  Warnings: " + str(summary["warnings"]),
        "  Info: " + str(summary["info"]),
        "  Status: " + ("Valid" if summary["valid"] else "Has errors"),
        "",
    ]

    if not findings:
        lines.append("All validation checks passed!")
        return "\n".join(lines) + "\n"

    for level, heading in (("error", "ERRORS"), ("warning", "WARNINGS"), ("info", "SUGGESTIONS")):
        group = [f for f in findings if f.get("level") == level]
        if not group:
            continue
        lines.append(heading + " (" + str(len(group)) + "):")
        for finding in group:
            lines.append("  - " + finding.get("field", "") + ": " + finding.get("message", ""))
            if finding.get("suggestion"):
                lines.append("    Suggestion: " + finding["suggestion"])
        lines.append("")

    return "\n".join(lines)
