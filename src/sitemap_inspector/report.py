"""Broken link aggregation and the final crawl report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .sitemap import SitemapResolution


@dataclass(frozen=True)
class BrokenLinkRecord:
    """A failed page fetch and the page that linked to it."""

    url: str
    error: Exception
    parent_url: str | None = None


@dataclass(frozen=True)
class BrokenLink:
    """A broken link as reported to the user."""

    link: str
    parent_page: str | None
    error: Exception
    has_same_origin_as_sitemap: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain data, with the error as its message."""
        return {
            "link": self.link,
            "parent_page": self.parent_page,
            "error": str(self.error),
            "has_same_origin_as_sitemap": self.has_same_origin_as_sitemap,
        }


@dataclass
class CrawlReport:
    """Result of a sitemap inspection."""

    base_url: str
    sitemap_urls: list[str] = field(default_factory=list)
    all_urls: list[str] = field(default_factory=list)
    broken_links: list[BrokenLink] = field(default_factory=list)

    @property
    def same_origin_broken_links(self) -> list[BrokenLink]:
        """Broken links hosted on the inspected site; these need fixing."""
        return [link for link in self.broken_links if link.has_same_origin_as_sitemap]

    @property
    def foreign_broken_links(self) -> list[BrokenLink]:
        """Broken links pointing to other sites."""
        return [
            link for link in self.broken_links if not link.has_same_origin_as_sitemap
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to JSON-serializable data."""
        return {
            "base_url": self.base_url,
            "sitemap_urls": list(self.sitemap_urls),
            "all_urls": list(self.all_urls),
            "broken_links": [link.to_dict() for link in self.broken_links],
        }


def build_report(
    base_origin: str,
    resolution: SitemapResolution,
    records: Iterable[BrokenLinkRecord],
) -> CrawlReport:
    """
    Classify broken link records and assemble the report.

    A broken link counts as same-origin when its URL starts with the origin.

    Args:
        base_origin: Origin of the inspected sitemap
        resolution: Sitemap and page URLs discovered during resolution
        records: Failed fetches collected during the crawl

    Returns:
        The crawl report
    """
    broken_links = [
        BrokenLink(
            link=record.url,
            parent_page=record.parent_url,
            error=record.error,
            has_same_origin_as_sitemap=record.url.startswith(base_origin),
        )
        for record in records
    ]
    return CrawlReport(
        base_url=base_origin,
        sitemap_urls=list(resolution.sitemap_urls),
        all_urls=list(resolution.page_urls),
        broken_links=broken_links,
    )
