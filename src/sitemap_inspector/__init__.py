"""Sitemap inspector: find broken links on a site from its sitemap."""

from .config import InspectorConfig
from .crawler import CrawlEngine, VisitedSet, extract_anchors
from .errors import (
    EmptySitemap,
    InspectorError,
    InvalidInput,
    PageUnreachable,
    SitemapUnreachable,
)
from .gate import ConcurrencyGate
from .http import create_client, fetch_text
from .inspector import inspect_sitemap, inspect_sitemap_async
from .report import BrokenLink, BrokenLinkRecord, CrawlReport, build_report
from .sitemap import SitemapResolution, extract_locs, resolve_sitemaps
from .urls import get_base_origin, has_same_origin, normalize_url

__all__ = [
    # Entry points
    "inspect_sitemap",
    "inspect_sitemap_async",
    "InspectorConfig",
    # Errors
    "InspectorError",
    "InvalidInput",
    "SitemapUnreachable",
    "EmptySitemap",
    "PageUnreachable",
    # HTTP client
    "create_client",
    "fetch_text",
    # URLs
    "get_base_origin",
    "normalize_url",
    "has_same_origin",
    # Sitemap
    "SitemapResolution",
    "extract_locs",
    "resolve_sitemaps",
    # Crawler
    "ConcurrencyGate",
    "CrawlEngine",
    "VisitedSet",
    "extract_anchors",
    # Report
    "BrokenLink",
    "BrokenLinkRecord",
    "CrawlReport",
    "build_report",
]
