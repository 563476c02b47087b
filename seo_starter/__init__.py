"""SEO Starter Kit — content collections, SEO metadata merging, Schema.org
structured data, and content quality validation for business websites."""

__version__ = "1.0.0"
