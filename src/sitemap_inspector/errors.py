"""Exceptions raised by the sitemap inspector."""

from __future__ import annotations


class InspectorError(Exception):
    """Base class for all inspector errors."""


class InvalidInput(InspectorError, ValueError):
    """The seed URL or a configuration value is not usable."""


class SitemapUnreachable(InspectorError):
    """A sitemap document could not be fetched."""

    def __init__(self, url: str, cause: BaseException | str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(
            f"Unable to access the sitemap at {url}.\n"
            f"Error: {cause}\n\n"
            "Please check if your server is running.",
        )


class EmptySitemap(InspectorError):
    """The resolved sitemap tree does not list a single page."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"No page URLs found in sitemap {url}")


class PageUnreachable(InspectorError):
    """A page could not be fetched (network error or non-2xx status)."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)
