"""
The main orchestrator: resolves the playlist, rewrites it and runs the downloads.
"""

import logging
import time

from rich.markup import escape

from hls_mirror.api.client import PlaylistFetcher
from hls_mirror.exceptions import CycleError
from hls_mirror.media.downloader import SegmentDownloader
from hls_mirror.models.config import MirrorConfig
from hls_mirror.models.stats import MirrorResult
from hls_mirror.playlist.rewriter import PlaylistRewriter
from hls_mirror.playlist.variants import select_variants
from hls_mirror.utils.path import create_dir

from .worker_pool import DownloadWorkerPool

log = logging.getLogger(__name__)


class MirrorSession:
    """Orchestrates one mirror run from the input URL to the downloaded files."""

    def __init__(self, config: MirrorConfig, fetcher: PlaylistFetcher | None = None):
        self.config = config
        self.fetcher = fetcher or PlaylistFetcher(
            request_timeout=config.request_timeout, max_connections=config.workers
        )
        self.rewriter = PlaylistRewriter(config.name_prefix, config.name_width)
        self.pool = DownloadWorkerPool(
            SegmentDownloader(
                self.fetcher,
                max_attempts=config.max_attempts,
                retry_delay=config.retry_delay,
            ),
            worker_count=config.workers,
            request_delay=config.request_delay,
        )

    async def __aenter__(self) -> "MirrorSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.fetcher.close()

    async def resolve_media_playlist(self, url: str) -> tuple[str, str]:
        """
        Follows master playlists down to a media playlist.

        Only the first variant of each master playlist is followed.

        Returns:
            The media playlist URL and its text.

        Raises:
            FetchError: If a playlist cannot be fetched.
            CycleError: If a playlist URL is reached twice.
        """
        visited: set[str] = set()
        while True:
            if url in visited:
                raise CycleError(f"Variant playlists loop back to '{url}'.")
            visited.add(url)

            log.info(f"Fetching playlist: [dim]{escape(url)}[/dim]")
            text = await self.fetcher.fetch(url)
            variants = select_variants(url, text)
            if not variants:
                return url, text

            log.info(
                f"Master playlist with {len(variants)} variant(s), "
                f"following: [dim]{escape(variants[0])}[/dim]"
            )
            url = variants[0]

    async def run(self) -> MirrorResult:
        """
        Executes the whole mirror run.

        Returns:
            The rewritten manifest text together with the download statistics.
            Persisting the manifest is left to the caller.
        """
        start_time = time.monotonic()
        playlist_url, text = await self.resolve_media_playlist(self.config.input_url)

        log.info("Rewriting playlist references...")
        rewritten = self.rewriter.rewrite(playlist_url, text)
        log.info(f"Found {len(rewritten.links)} download tasks.")

        create_dir(self.config.segment_dir)

        log.info(
            f"[bold cyan]Downloading with {self.config.workers} worker(s)...[/bold cyan]"
        )
        stats = await self.pool.run(rewritten.links, self.config.output_path)

        return MirrorResult(
            playlist_url=playlist_url,
            manifest=rewritten.text,
            links=rewritten.links,
            stats=stats,
            duration=time.monotonic() - start_time,
        )
