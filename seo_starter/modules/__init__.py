"""Feature modules: content access, SEO merging, schema building, validation."""
