"""
Handles the low-level downloading of segment and key files over HTTP with a
fixed retry policy.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
import aiohttp

from hls_mirror.api.client import PlaylistFetcher

log = logging.getLogger(__name__)

# Failures worth another attempt: transport, timeout and local write errors.
RETRYABLE_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)


class SegmentDownloader:
    """A low-level file downloader with a fixed retry ceiling and fixed backoff."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(
        self,
        fetcher: PlaylistFetcher,
        max_attempts: int = 5,
        retry_delay: float = 2.0,
    ):
        self.fetcher = fetcher
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    async def _fetch_to_file(self, url: str, destination_path: Path) -> int:
        session = await self.fetcher.get_session()
        async with session.get(url) as response:
            response.raise_for_status()
            bytes_written = 0
            async with aiofiles.open(destination_path, "wb") as f:
                async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                    await f.write(chunk)
                    bytes_written += len(chunk)
        return bytes_written

    async def download_file(self, url: str, destination_path: Path) -> int:
        """
        Downloads a URL to a local file, creating or overwriting it.

        Each failed attempt except the last is followed by a fixed pause.

        Returns:
            The number of bytes written.

        Raises:
            The exception of the final attempt once all attempts are exhausted.
        """
        last_exception = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._fetch_to_file(url, destination_path)
            except RETRYABLE_ERRORS as e:
                last_exception = e
                log.debug(
                    f"Download attempt {attempt}/{self.max_attempts} for "
                    f"'{os.path.basename(destination_path)}' failed: {e!r}"
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.retry_delay)

        raise last_exception
