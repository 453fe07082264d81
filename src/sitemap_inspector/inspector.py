"""Entry points for inspecting a sitemap."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .config import InspectorConfig
from .crawler import CrawlEngine
from .gate import ConcurrencyGate
from .http import create_client
from .report import CrawlReport, build_report
from .sitemap import resolve_sitemaps
from .urls import get_base_origin

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


async def inspect_sitemap_async(
    sitemap_url: str,
    config: InspectorConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> CrawlReport:
    """
    Check every page of a sitemap and every link found on those pages.

    Args:
        sitemap_url: URL of the sitemap or sitemap index
        config: Run configuration, defaults apply when omitted
        client: HTTP client to use; a new one is created (and closed) when
            omitted

    Returns:
        The crawl report. Unreachable pages are reported, not raised.

    Raises:
        InvalidInput: If the sitemap URL is not an http(s) URL
        SitemapUnreachable: If a sitemap in the tree cannot be fetched
        EmptySitemap: If the sitemap tree lists no pages
    """
    config = config or InspectorConfig()
    base_origin = get_base_origin(sitemap_url)

    if client is None:
        async with create_client(config) as own_client:
            return await _inspect(own_client, sitemap_url, base_origin, config)
    return await _inspect(client, sitemap_url, base_origin, config)


async def _inspect(
    client: httpx.AsyncClient,
    sitemap_url: str,
    base_origin: str,
    config: InspectorConfig,
) -> CrawlReport:
    logger.info(f"Inspecting sitemap {sitemap_url} (origin {base_origin})")
    resolution = await resolve_sitemaps(client, sitemap_url, base_origin)

    engine = CrawlEngine(
        client,
        base_origin,
        gate=ConcurrencyGate(config.max_active_pages),
    )
    records = await engine.run(resolution.page_urls)

    return build_report(base_origin, resolution, records)


def inspect_sitemap(
    sitemap_url: str,
    config: InspectorConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> CrawlReport:
    """Blocking wrapper around :func:`inspect_sitemap_async`."""
    return asyncio.run(inspect_sitemap_async(sitemap_url, config, client))
