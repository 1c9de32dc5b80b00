# vr_scout/crawler/models.py
"""
Data models shared by the sitemap crawler and the pairing engine.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple
from urllib.parse import urlsplit

from vr_scout.errors import InvalidUrlError

DocumentKind = Literal["urlset", "sitemapindex", "empty"]


def _check_absolute(url: str) -> None:
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a bad port
    except ValueError as exc:
        raise InvalidUrlError(url, str(exc)) from exc
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidUrlError(url, "not an absolute http(s) URL")


@dataclass(frozen=True, slots=True)
class SitemapDocument:
    """Parsed sitemap: page locations (urlset) or child sitemaps (sitemapindex)."""

    kind: DocumentKind
    locations: Tuple[str, ...] = ()

    @property
    def is_index(self) -> bool:
        return self.kind == "sitemapindex"


@dataclass(frozen=True, slots=True)
class Origin:
    """Scheme + hostname + port of a URL. ``port`` is None when implicit."""

    scheme: str
    hostname: str
    port: Optional[int] = None

    def netloc(self, credentials: Optional[str] = None) -> str:
        host = f"[{self.hostname}]" if ":" in self.hostname else self.hostname
        if self.port is not None:
            host = f"{host}:{self.port}"
        return f"{credentials}@{host}" if credentials else host

    def prefix(self, credentials: Optional[str] = None) -> str:
        return f"{self.scheme}://{self.netloc(credentials)}"


@dataclass(frozen=True, slots=True)
class PairingContext:
    """Reference/test origins and test-side credentials, built once per run."""

    reference_origin: Origin
    test_origin: Origin
    test_credentials: Optional[str] = None


@dataclass(frozen=True, slots=True)
class UrlPair:
    """A reference URL and the test URL showing the same logical page."""

    reference: str
    test: str

    def __post_init__(self) -> None:
        _check_absolute(self.reference)
        _check_absolute(self.test)

    def as_dict(self) -> Dict[str, str]:
        return {"reference": self.reference, "test": self.test}
