"""Sitemap parsing and sitemap index resolution."""

from __future__ import annotations

import asyncio
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

import httpx

from .errors import EmptySitemap, PageUnreachable, SitemapUnreachable
from .http import fetch_text
from .urls import normalize_url

logger = logging.getLogger(__name__)

URLSET_TAG = "urlset"
SITEMAPINDEX_TAG = "sitemapindex"


@dataclass
class SitemapResolution:
    """Everything discovered while expanding a sitemap tree."""

    page_urls: list[str] = field(default_factory=list)
    sitemap_urls: list[str] = field(default_factory=list)


def _local_name(tag: object) -> str | None:
    """Strip the namespace from an element tag."""
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def extract_locs(xml_content: str, ancestor_tag: str) -> list[str]:
    """
    Extract the text of every <loc> nested under a given element.

    Namespaces are ignored, so ``<urlset xmlns="...">`` matches
    ``ancestor_tag="urlset"``.

    Args:
        xml_content: The XML content of the sitemap
        ancestor_tag: Element name the <loc> must be nested under

    Returns:
        Loc values in document order, without duplicates. Empty if the
        content cannot be parsed.
    """
    try:
        root = ET.fromstring(xml_content.strip())
    except ET.ParseError as e:
        logger.error(f"Failed to parse XML: {e}")
        return []

    locs: list[str] = []
    seen: set[str] = set()
    for ancestor in root.iter():
        if _local_name(ancestor.tag) != ancestor_tag:
            continue
        for loc in ancestor.iter():
            if _local_name(loc.tag) != "loc" or not loc.text:
                continue
            text = loc.text.strip()
            if text and text not in seen:
                seen.add(text)
                locs.append(text)

    return locs


async def _fetch_sitemap(client: httpx.AsyncClient, url: str) -> str:
    try:
        return await fetch_text(client, url)
    except PageUnreachable as e:
        raise SitemapUnreachable(url, e.reason) from e


async def resolve_sitemaps(
    client: httpx.AsyncClient,
    sitemap_url: str,
    base_origin: str,
) -> SitemapResolution:
    """
    Fetch a sitemap and expand every sitemap index it links to.

    Sitemaps are fetched round by round: all sitemaps discovered in one
    round are fetched concurrently, and the next round only starts once
    every fetch of the current one has completed.

    Args:
        client: HTTP client for the run
        sitemap_url: The seed sitemap (or sitemap index) URL
        base_origin: Origin used to resolve relative page locs

    Returns:
        The page URLs and sitemap URLs found, in discovery order

    Raises:
        SitemapUnreachable: If any sitemap in the tree cannot be fetched
        EmptySitemap: If no page URL was found anywhere in the tree
    """
    resolution = SitemapResolution(sitemap_urls=[sitemap_url])
    known_sitemaps = {sitemap_url}
    known_pages: set[str] = set()
    frontier = [sitemap_url]
    round_number = 0

    while frontier:
        round_number += 1
        results = await asyncio.gather(
            *(_fetch_sitemap(client, url) for url in frontier),
            return_exceptions=True,
        )

        # The whole round completes before a failure is reported
        for result in results:
            if isinstance(result, BaseException):
                raise result

        next_frontier: list[str] = []
        for text in results:
            for loc in extract_locs(text, URLSET_TAG):
                page_url = normalize_url(loc, None, base_origin)
                if page_url is None:
                    logger.debug(f"Skipped sitemap entry {loc}")
                    continue
                if page_url not in known_pages:
                    known_pages.add(page_url)
                    resolution.page_urls.append(page_url)

            for loc in extract_locs(text, SITEMAPINDEX_TAG):
                if loc not in known_sitemaps:
                    known_sitemaps.add(loc)
                    resolution.sitemap_urls.append(loc)
                    next_frontier.append(loc)

        logger.info(
            f"Sitemap round {round_number}: fetched {len(frontier)} sitemap(s), "
            f"{len(next_frontier)} new sitemap(s), "
            f"{len(resolution.page_urls)} page(s) so far",
        )
        frontier = next_frontier

    if not resolution.page_urls:
        raise EmptySitemap(sitemap_url)

    return resolution
