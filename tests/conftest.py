"""Shared fixtures for the inspector tests."""

import httpx
import pytest

ORIGIN = "http://localhost"


def sitemap_xml(*urls):
    """Build a urlset sitemap listing the given URLs."""
    entries = "".join(
        f"<url><loc>{url}</loc><lastmod>2021-01-14</lastmod><priority>1.00</priority></url>\n"
        for url in urls
    )
    return f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n{entries}</urlset>'


def sitemap_index_xml(*urls):
    """Build a sitemap index referencing the given sitemaps."""
    entries = "".join(f"<sitemap><loc>{url}</loc></sitemap>\n" for url in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        f"{entries}</sitemapindex>\n"
    )


class FakeSite:
    """In-memory website served through httpx.MockTransport.

    Routes map absolute URLs to either a body (served with 200) or a status
    code. Unknown URLs return 404. Every requested URL is recorded.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []

    def handler(self, request):
        url = str(request.url)
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404)
        if isinstance(route, int):
            return httpx.Response(route)
        return httpx.Response(200, text=route)

    def client(self):
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def count(self, url):
        return self.requests.count(url)


@pytest.fixture
def fake_site():
    """Factory for FakeSite instances."""
    return FakeSite
