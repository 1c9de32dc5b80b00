# vr_scout/crawler/discovery.py
"""
Sitemap discovery: probes conventional sitemap locations and robots.txt
declarations for a site.
"""
from __future__ import annotations

from typing import List, Optional, Sequence
from urllib.parse import urlsplit

from vr_scout.crawler.fetcher import XmlFetcher
from vr_scout.errors import ScoutError
from vr_scout.observer import LoggingObserver, ScoutObserver
from vr_scout.parser.robots_parser import extract_sitemaps

SITEMAP_CANDIDATES: Sequence[str] = (
    "/sitemap.xml",
    "/sitemap_index.xml",
    "/sitemaps.xml",
    "/sitemap1.xml",
    "/wp-sitemap.xml",  # WordPress
    "/sitemap-index.xml",
)


def site_root(base_url: str) -> str:
    """scheme://host[:port] of ``base_url``; ValueError if it has no http(s) host."""
    parts = urlsplit(base_url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ValueError(f"not an absolute http(s) URL: {base_url!r}")
    host = parts.hostname
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    return f"{parts.scheme}://{host}"


async def discover_sitemaps(
    base_url: str,
    fetcher: XmlFetcher,
    observer: Optional[ScoutObserver] = None,
) -> List[str]:
    """
    Return the sitemap URLs of ``base_url`` that answered a HEAD probe.

    Conventional paths come first, then ``Sitemap:`` declarations from robots.txt
    not already found. Unreachable candidates and robots.txt failures are dropped
    without raising.
    """
    obs: ScoutObserver = observer or LoggingObserver()
    try:
        root = site_root(base_url)
    except ValueError as exc:
        obs.error("Error discovering sitemaps: %s", exc)
        return []

    obs.info("Auto-discovering sitemaps for %s", root)
    found: List[str] = []
    for path in SITEMAP_CANDIDATES:
        candidate = root + path
        if await fetcher.is_reachable(candidate):
            obs.info("Found sitemap: %s", candidate)
            found.append(candidate)

    robots_url = root + "/robots.txt"
    try:
        robots_text = await fetcher.fetch(robots_url)
    except ScoutError as exc:
        obs.debug("robots.txt not available at %s: %s", robots_url, exc)
        return found

    for declared in extract_sitemaps(robots_text):
        if declared in found:
            continue
        if await fetcher.is_reachable(declared):
            obs.info("Found sitemap in robots.txt: %s", declared)
            found.append(declared)
    return found


__all__ = ["discover_sitemaps", "site_root", "SITEMAP_CANDIDATES"]
