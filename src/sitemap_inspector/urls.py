"""URL normalization and origin utilities."""

from __future__ import annotations

import re

from .errors import InvalidInput

# Schemes that cannot be fetched over HTTP
SKIPPED_PREFIXES = ("tel:", "sms:", "mailto:")
SKIPPED_MARKERS = ("javascript:void",)

_PROTOCOL_RE = re.compile(r"^https?://")
_SUFFIX_RE = re.compile(r"[#?].*$", re.DOTALL)


def get_base_origin(url: str) -> str:
    """
    Derive the base origin (scheme://host) of a URL.

    Args:
        url: An absolute http or https URL

    Returns:
        The origin without path, query, fragment or trailing slash

    Raises:
        InvalidInput: If the URL does not start with http:// or https://
    """
    if not _PROTOCOL_RE.match(url):
        raise InvalidInput(
            f"Sitemap url {url!r} is invalid. It must start with http:// or https://",
        )

    scheme = "https" if url.startswith("https") else "http"
    host = _PROTOCOL_RE.sub("", url)
    host = _SUFFIX_RE.sub("", host)
    host = host.split("/", 1)[0]

    return f"{scheme}://{host}"


def is_inspectable(url: str) -> bool:
    """Check whether a raw href points to something fetchable."""
    lowered = url.lower()
    if lowered.startswith(SKIPPED_PREFIXES):
        return False
    return not any(marker in lowered for marker in SKIPPED_MARKERS)


def normalize_url(
    url: str,
    parent_url: str | None,
    base_origin: str,
) -> str | None:
    """
    Convert a raw href or sitemap loc to an absolute page URL.

    Root-relative URLs are resolved against the base origin, other relative
    URLs against the parent page. The fragment and query string are dropped.

    Args:
        url: The raw URL as found in the document
        parent_url: The page the URL was found on, or None
        base_origin: The origin of the inspected site

    Returns:
        The normalized URL, or None if the URL should not be inspected
    """
    url = url.strip()
    if not url or not is_inspectable(url):
        return None

    if not url.startswith("http"):
        if url.startswith("/"):
            url = f"{base_origin}{url}"
        else:
            parent = parent_url or base_origin
            if parent.endswith("/"):
                url = f"{parent}{url}"
            else:
                url = f"{parent}/{url}"

    return _SUFFIX_RE.sub("", url)


def has_same_origin(url: str, base_origin: str) -> bool:
    """
    Check whether a URL belongs to the inspected origin.

    The URL must start with the origin, followed by nothing or by a path,
    query or fragment delimiter, so ``http://localhost.example`` is not
    treated as part of ``http://localhost``.
    """
    if not url.startswith(base_origin):
        return False
    rest = url[len(base_origin):]
    return rest == "" or rest[0] in "/?#"
