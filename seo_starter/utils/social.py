"""Social sharing links and Open Graph / Twitter Card properties."""

from typing import Any, Mapping, Optional
from urllib.parse import quote


def _encode(value: str) -> str:
    """Percent-encode a query value the way browsers' encodeURIComponent does."""
    return quote(value, safe="~()*!.'-_")


def generate_social_share_urls(
    url: str,
    title: str,
    description: str = "",
    image: Optional[str] = None,
    via: Optional[str] = None,
    hashtags: Optional[list[str]] = None,
) -> dict[str, str]:
    """Return share links keyed by platform.

    Args:
        url: Canonical page URL.
        title: Text used as the share title.
        description: Summary used by LinkedIn and email.
        image: Image URL for Pinterest.
        via: Twitter/X handle without ``@``.
        hashtags: Twitter/X hashtags without ``#``.
    """
    e_url = _encode(url)
    e_title = _encode(title)
    e_desc = _encode(description)
    e_image = _encode(image) if image else ""

    twitter = "https://twitter.com/intent/tweet?url=" + e_url + "&text=" + e_title
    if via:
        twitter += "&via=" + _encode(via)
    if hashtags:
        twitter += "&hashtags=" + _encode(",".join(hashtags))

    return {
        "facebook": "https://www.facebook.com/sharer/sharer.php?u=" + e_url + "&quote=" + e_title,
        "twitter": twitter,
        "linkedin": (
            "https://www.linkedin.com/sharing/share-offsite/?url=" + e_url
            + "&title=" + e_title + "&summary=" + e_desc
        ),
        "pinterest": (
            "https://pinterest.com/pin/create/button/?url=" + e_url
            + "&media=" + e_image + "&description=" + e_title
        ),
        "whatsapp": "https://wa.me/?text=" + e_title + "%20" + e_url,
        "telegram": "https://t.me/share/url?url=" + e_url + "&text=" + e_title,
        "reddit": "https://reddit.com/submit?url=" + e_url + "&title=" + e_title,
        "hackernews": "https://news.ycombinator.com/submitlink?u=" + e_url + "&t=" + e_title,
        "email": "mailto:?subject=" + e_title + "&body=" + e_desc + "%0A%0A" + e_url,
    }


# MetaRecord field -> list of meta properties it feeds.
_OG_PROPERTIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("url", ("og:url",)),
    ("ogType", ("og:type",)),
    ("title", ("og:title", "twitter:title")),
    ("description", ("og:description", "twitter:description")),
    ("image", ("og:image", "twitter:image")),
    ("siteName", ("og:site_name",)),
    ("twitterCard", ("twitter:card",)),
    ("twitterCreator", ("twitter:creator", "twitter:site")),
)

OG_IMAGE_WIDTH = "1200"
OG_IMAGE_HEIGHT = "630"


def generate_open_graph_tags(metadata: Mapping[str, Any]) -> dict[str, str]:
    """Map merged page metadata onto ``og:*`` and ``twitter:*`` properties.

    Properties whose source field is absent are omitted.  When an image is
    set it gets the page title as alt text and the standard 1200x630 size.
    """
    tags: dict[str, str] = {}
    for source, properties in _OG_PROPERTIES:
        value = metadata.get(source)
        if not value:
            continue
        for prop in properties:
            tags[prop] = value

    if "og:image" in tags:
        tags["og:image:width"] = OG_IMAGE_WIDTH
        tags["og:image:height"] = OG_IMAGE_HEIGHT
        if "og:title" in tags:
            tags["og:image:alt"] = tags["og:title"]
    return tags
