"""Error taxonomy for content and SEO data loading.

Stores raise these; ``merge_seo_data`` catches every one of them and
returns fallback metadata so a page build never aborts.
"""


class SEODataError(Exception):
    """Base class for failures while loading SEO content records."""


class MissingGlobalConfigError(SEODataError):
    """The mandatory site-wide ``global`` SEO record does not exist."""

    def __init__(self, collection: str, entry_id: str) -> None:
        self.collection = collection
        self.entry_id = entry_id
        super().__init__(
            "Global SEO data not found: " + collection + "/" + entry_id
        )


class FetchFailureError(SEODataError):
    """The content store could not be read (I/O, database, timeout)."""


class MalformedRecordError(FetchFailureError):
    """A record was read but does not have the expected shape."""
