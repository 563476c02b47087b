"""Validation module — SEO metadata, content, image, and schema quality checks."""

from seo_starter.modules.validation.validator import (
    DEFAULT_QUALITY_RULES,
    VALID_ROBOTS_DIRECTIVES,
    ContentQualityRules,
    ValidationResult,
    format_validation_report,
    generate_validation_report,
    validate_content,
    validate_images,
    validate_page,
    validate_schemas,
    validate_seo_data,
)

__all__ = [
    "DEFAULT_QUALITY_RULES",
    "VALID_ROBOTS_DIRECTIVES",
    "ContentQualityRules",
    "ValidationResult",
    "format_validation_report",
    "generate_validation_report",
    "validate_content",
    "validate_images",
    "validate_page",
    "validate_schemas",
    "validate_seo_data",
]
