# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import Dict, Union

import pytest
import pytest_asyncio
from aiohttp import web

from vr_scout.crawler.fetcher import XmlFetcher
from vr_scout.observer import RecordingObserver

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]
Routes = Union[Dict[str, Handler], Callable[[str], Dict[str, Handler]]]
ServerFactory = Callable[[Routes], Awaitable[str]]

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def urlset_xml(urls: Iterable[str]) -> str:
    """Build a namespaced <urlset> document."""
    entries = "".join(
        f"<url><loc>{u}</loc><lastmod>2024-01-01</lastmod><priority>0.5</priority></url>"
        for u in urls
    )
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SITEMAP_NS}">{entries}</urlset>'


def index_xml(children: Iterable[str]) -> str:
    """Build a namespaced <sitemapindex> document."""
    entries = "".join(f"<sitemap><loc>{c}</loc></sitemap>" for c in children)
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="{SITEMAP_NS}">{entries}</sitemapindex>'
    )


def xml_handler(body: str) -> Handler:
    async def handle(_: web.Request) -> web.Response:
        return web.Response(text=body, content_type="application/xml")

    return handle


def text_handler(body: str, status: int = 200) -> Handler:
    async def handle(_: web.Request) -> web.Response:
        return web.Response(text=body, status=status, content_type="text/plain")

    return handle


@pytest_asyncio.fixture
async def make_server(unused_tcp_port_factory) -> AsyncIterator[ServerFactory]:
    """Start aiohttp apps on free ports; yields a factory ``routes -> base URL``.

    ``routes`` may be a callable taking the base URL, for documents that link
    back to the same server.
    """
    runners: list[web.AppRunner] = []

    async def _start(routes: Routes) -> str:
        port = unused_tcp_port_factory()
        base = f"http://127.0.0.1:{port}"
        if callable(routes):
            routes = routes(base)
        app = web.Application()
        for path, handler in routes.items():
            app.router.add_route("*", path, handler)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return base

    try:
        yield _start
    finally:
        for runner in runners:
            await runner.cleanup()


@pytest_asyncio.fixture
async def fetcher() -> AsyncIterator[XmlFetcher]:
    """Fetcher with a short deadline so timeout tests stay quick."""
    async with XmlFetcher(timeout=2.0, max_redirects=3, user_agent="TestAgent/1.0") as f:
        yield f


@pytest.fixture()
def observer() -> RecordingObserver:
    return RecordingObserver()
