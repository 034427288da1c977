"""
Async HTTP client used to fetch playlists and to share one connection pool with
the segment downloader.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from hls_mirror.exceptions import FetchError

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0


class PlaylistFetcher:
    """
    Fetches manifest text over plain HTTP GET.

    The manifest fetch fails fast: there is no retry at this layer, any network
    error, non-success status or timeout is raised as a FetchError.
    """

    def __init__(
        self, request_timeout: float = DEFAULT_TIMEOUT, max_connections: int = 1
    ):
        """
        Initializes the fetcher.

        Args:
            request_timeout: Total timeout in seconds for a single request.
            max_connections: Size of the connection pool, one per download worker.
        """
        self.request_timeout = request_timeout
        self.max_connections = max_connections
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "PlaylistFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get_session(self) -> aiohttp.ClientSession:
        """Returns the shared aiohttp session, creating it on first use."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_connections + 1,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.request_timeout),
            )
            log.debug(
                f"Created HTTP session (pool size {self.max_connections + 1}, "
                f"timeout {self.request_timeout:.0f}s)"
            )
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            log.debug("HTTP session closed.")
        self._session = None

    async def fetch(self, url: str) -> str:
        """
        Downloads a manifest and returns its body as text.

        Raises:
            FetchError: On network failure, non-success status or timeout.
        """
        session = await self.get_session()
        try:
            async with session.get(url) as response:
                response.raise_for_status()
                body = await response.read()
        except aiohttp.ClientResponseError as e:
            raise FetchError(url, f"HTTP {e.status} {e.message}") from e
        except asyncio.TimeoutError as e:
            raise FetchError(
                url, f"timed out after {self.request_timeout:.0f}s"
            ) from e
        except aiohttp.ClientError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e

        log.debug(f"Fetched {len(body)} bytes from {url}")
        return body.decode("utf-8", errors="replace")
