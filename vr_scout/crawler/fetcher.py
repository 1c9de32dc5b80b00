# vr_scout/crawler/fetcher.py
"""
Fetcher module: retrieves sitemap/robots.txt documents over HTTP(S) with a
per-request deadline and manual redirect handling, plus a HEAD reachability probe.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple
from urllib.parse import urljoin

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout, InvalidURL

from vr_scout.config import DEFAULT_USER_AGENT
from vr_scout.errors import (
    FetchTimeoutError,
    HttpStatusError,
    InvalidUrlError,
    NetworkError,
    ResponseTooLargeError,
)
from vr_scout.logger import logger

DEFAULT_TIMEOUT = 15.0
DEFAULT_MAX_REDIRECTS = 5
# sitemap protocol limit for one uncompressed file
DEFAULT_MAX_BYTES = 50 * 1024 * 1024
_CHUNK_SIZE = 64 * 1024


class XmlFetcher:
    """Fetches documents; one fresh timeout per request and per redirect hop, bounded body size."""

    def __init__(
        self,
        session: Optional[ClientSession] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        max_bytes: int = DEFAULT_MAX_BYTES,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.session = session
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.max_bytes = max_bytes
        self.user_agent = user_agent
        self._owns_session = session is None

    async def __aenter__(self) -> XmlFetcher:
        if self.session is None:
            self.session = ClientSession(headers={"User-Agent": self.user_agent})
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _require_session(self) -> ClientSession:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        return self.session

    @property
    def _request_timeout(self) -> ClientTimeout:
        return ClientTimeout(total=self.timeout)

    async def fetch(self, url: str) -> str:
        """
        Return the response body of ``url`` as text, decoded with the HTTP charset
        (UTF-8 when none is declared).

        Raises HttpStatusError, FetchTimeoutError (deadline or too many redirects),
        ResponseTooLargeError, NetworkError or InvalidUrlError.
        """
        body, charset = await self._follow(url)
        try:
            return body.decode(charset or "utf-8", errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    async def fetch_bytes(self, url: str) -> bytes:
        """Same as :meth:`fetch` but returns the raw body, leaving decoding to the XML parser."""
        body, _ = await self._follow(url)
        return body

    async def _follow(self, url: str) -> Tuple[bytes, Optional[str]]:
        current = url
        for hop in range(self.max_redirects + 1):
            body, charset, location = await self._fetch_once(current)
            if location is None:
                return body, charset
            logger.debug("Redirect %d: %s -> %s", hop + 1, current, location)
            current = location
        raise FetchTimeoutError(f"Too many redirects (>{self.max_redirects}) starting at {url}")

    async def _fetch_once(self, url: str) -> Tuple[bytes, Optional[str], Optional[str]]:
        session = self._require_session()
        try:
            async with session.get(
                url,
                allow_redirects=False,
                timeout=self._request_timeout,
                headers={"User-Agent": self.user_agent},
            ) as resp:
                location = resp.headers.get("Location")
                if 300 <= resp.status < 400 and location:
                    return b"", None, urljoin(url, location)
                if not 200 <= resp.status < 400:
                    raise HttpStatusError(resp.status, url, resp.reason)
                return await self._read_body(resp, url), resp.charset, None
        except asyncio.TimeoutError as exc:
            # leaving the response context closes the underlying connection
            raise FetchTimeoutError(f"Request timeout after {self.timeout}s: {url}") from exc
        except InvalidURL as exc:
            raise InvalidUrlError(url) from exc
        except ClientError as exc:
            raise NetworkError(f"{url}: {exc}") from exc
        except ValueError as exc:
            raise InvalidUrlError(url, str(exc)) from exc

    async def _read_body(self, resp: ClientResponse, url: str) -> bytes:
        if resp.content_length is not None and resp.content_length > self.max_bytes:
            raise ResponseTooLargeError(url, self.max_bytes)
        chunks: List[bytes] = []
        size = 0
        # Content-Length may be absent (chunked) or refer to the compressed body
        async for chunk in resp.content.iter_chunked(_CHUNK_SIZE):
            size += len(chunk)
            if size > self.max_bytes:
                raise ResponseTooLargeError(url, self.max_bytes)
            chunks.append(chunk)
        return b"".join(chunks)

    async def is_reachable(self, url: str) -> bool:
        """HEAD probe: True for a status in [200, 400), False on any failure."""
        session = self._require_session()
        try:
            async with session.head(
                url,
                allow_redirects=False,
                timeout=self._request_timeout,
                headers={"User-Agent": self.user_agent},
            ) as resp:
                return 200 <= resp.status < 400
        except (asyncio.TimeoutError, ClientError, ValueError) as exc:
            logger.debug("HEAD %s failed: %s", url, exc)
            return False


__all__ = ["XmlFetcher", "DEFAULT_TIMEOUT", "DEFAULT_MAX_REDIRECTS", "DEFAULT_MAX_BYTES"]
