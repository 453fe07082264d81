"""Recursive same-origin crawler that records unreachable pages."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, ParserRejectedMarkup

from .errors import PageUnreachable
from .gate import ConcurrencyGate
from .http import fetch_text
from .report import BrokenLinkRecord
from .urls import has_same_origin, normalize_url

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

logger = logging.getLogger(__name__)


def extract_anchors(html: str) -> list[str]:
    """
    Extract all <a href> values from HTML.

    Anchors inside <template> elements are not rendered content and are
    ignored.

    Args:
        html: The HTML content

    Returns:
        Raw href values in document order
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        logger.debug(f"Could not parse HTML: {e}")
        return []

    hrefs: list[str] = []
    for link in soup.find_all("a", href=True):
        if link.find_parent("template") is not None:
            continue
        href = link.get("href")
        if href and isinstance(href, str):
            hrefs.append(href)

    return hrefs


class VisitedSet:
    """Normalized URLs already dispatched during a run.

    ``claim`` checks and inserts without yielding to the event loop, so two
    concurrent visits of the same URL cannot both succeed.
    """

    def __init__(self) -> None:
        self._urls: set[str] = set()

    def claim(self, url: str) -> bool:
        """Mark a URL as visited; False if it was already claimed."""
        if url in self._urls:
            return False
        self._urls.add(url)
        return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)


class CrawlEngine:
    """Visits pages from a sitemap and every same-origin page they link to.

    Pages on other origins are fetched to check they are reachable but their
    links are not followed. Every visit runs as a task of one TaskGroup, so
    ``run`` returns only after the whole tree of spawned visits is done.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_origin: str,
        gate: ConcurrencyGate | None = None,
    ) -> None:
        self.client = client
        self.base_origin = base_origin
        self.gate = gate or ConcurrencyGate()
        self.visited = VisitedSet()
        self.broken_links: list[BrokenLinkRecord] = []
        self._task_group: asyncio.TaskGroup | None = None

    async def run(self, seed_urls: Iterable[str]) -> list[BrokenLinkRecord]:
        """
        Crawl from the given seed URLs until no visit is pending.

        Args:
            seed_urls: Page URLs listed in the sitemap

        Returns:
            One record per page that could not be fetched
        """
        async with asyncio.TaskGroup() as task_group:
            self._task_group = task_group
            for url in seed_urls:
                task_group.create_task(self.visit(url, None))
        self._task_group = None

        logger.info(
            f"Crawl complete: {len(self.visited)} pages checked, "
            f"{len(self.broken_links)} broken",
        )
        return list(self.broken_links)

    async def visit(self, url: str, parent_url: str | None) -> None:
        """
        Check one page and schedule visits for the links it contains.

        Args:
            url: Raw URL as found in the sitemap or page
            parent_url: Normalized URL of the linking page, None for
                sitemap entries
        """
        if self._task_group is None:
            raise RuntimeError("CrawlEngine.visit must be called from CrawlEngine.run")

        page_url = normalize_url(url, parent_url, self.base_origin)
        if page_url is None:
            logger.debug(f"Skipped {url}")
            return

        if not self.visited.claim(page_url):
            return

        try:
            text = await self.gate.run(lambda: fetch_text(self.client, page_url))
        except PageUnreachable as e:
            self.broken_links.append(BrokenLinkRecord(page_url, e, parent_url))
            return

        if not has_same_origin(page_url, self.base_origin):
            logger.debug(f"Skipped sub-pages of {page_url}")
            return

        hrefs = extract_anchors(text)
        if hrefs:
            logger.info(
                f"{len(hrefs)} link{'s' if len(hrefs) > 1 else ''} on {page_url}",
            )
        for href in hrefs:
            self._spawn(href, page_url)

    def _spawn(self, url: str, parent_url: str) -> None:
        self._task_group.create_task(self.visit(url, parent_url))
