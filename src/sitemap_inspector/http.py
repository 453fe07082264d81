"""HTTP transport for the inspector."""

from __future__ import annotations

import logging

import httpx

from .config import InspectorConfig
from .errors import PageUnreachable

logger = logging.getLogger(__name__)


def create_client(config: InspectorConfig | None = None) -> httpx.AsyncClient:
    """
    Create the HTTP client used for one inspection run.

    The caller owns the client and must close it (``await client.aclose()``
    or ``async with``).

    Args:
        config: Run configuration, defaults apply when omitted

    Returns:
        A configured httpx.AsyncClient
    """
    config = config or InspectorConfig()
    return httpx.AsyncClient(
        headers={"User-Agent": config.user_agent},
        timeout=httpx.Timeout(config.timeout, connect=config.connect_timeout),
        follow_redirects=config.follow_redirects,
    )


async def fetch_text(client: httpx.AsyncClient, url: str) -> str:
    """
    Fetch a URL and return its body as text.

    Args:
        client: The client to send the request with
        url: Absolute URL to fetch

    Returns:
        The response body

    Raises:
        PageUnreachable: On malformed URLs, transport errors or a non-2xx status
    """
    logger.debug(f"Fetching {url}")
    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Failed to fetch {url}: {e}")
        raise PageUnreachable(url, str(e) or type(e).__name__) from e

    if not response.is_success:
        reason = f"{response.status_code} {response.reason_phrase}".strip()
        logger.warning(f"Failed to fetch {url}: {reason}")
        raise PageUnreachable(url, reason, status_code=response.status_code)

    return response.text
