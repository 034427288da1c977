"""
Runs the download workers: each one walks its own contiguous slice of links.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from rich.markup import escape

from hls_mirror.media.downloader import SegmentDownloader
from hls_mirror.models.playlist import ResourceLink
from hls_mirror.models.stats import MirrorStats, WorkerReport
from hls_mirror.utils.partition import partition_all

from .progress import ProgressAggregator

log = logging.getLogger(__name__)


class DownloadWorkerPool:
    """Executes download tasks with a fixed number of concurrent workers."""

    def __init__(
        self,
        downloader: SegmentDownloader,
        worker_count: int = 1,
        request_delay: float = 0.0,
    ):
        self.downloader = downloader
        self.worker_count = worker_count
        self.request_delay = request_delay

    async def run_worker(
        self,
        worker_index: int,
        links: Sequence[ResourceLink],
        output_dir: Path,
        on_complete: Callable[[int], None],
    ) -> WorkerReport:
        """
        Downloads the assigned links in order.

        A link that still fails after all retries is logged and skipped. The
        worker pauses for `request_delay` after every link and calls
        `on_complete` exactly once when it is done.
        """
        report = WorkerReport(worker_index=worker_index)
        try:
            for link in links:
                destination = output_dir / link.local_path
                try:
                    size = await self.downloader.download_file(
                        link.download_url, destination
                    )
                except Exception as e:
                    report.failed += 1
                    report.failed_links.append(link)
                    log.warning(
                        f"[yellow]✗ Download failed, origin: {escape(link.origin_reference)}, "
                        f"url: {escape(link.download_url)}, "
                        f"destination: {escape(str(destination))} ({e!r})[/yellow]"
                    )
                else:
                    report.downloaded += 1
                    report.bytes_downloaded += size
                await asyncio.sleep(self.request_delay)
        finally:
            on_complete(worker_index)
        return report

    async def run(self, links: Sequence[ResourceLink], output_dir: Path) -> MirrorStats:
        """
        Splits the links across the workers and waits for all of them.

        Returns:
            The merged statistics of every worker.
        """
        stats = MirrorStats(links_total=len(links))
        aggregator = ProgressAggregator(self.worker_count)
        ranges = partition_all(len(links), self.worker_count)

        log.debug(
            "Task ranges: "
            + ", ".join(f"{i}:[{r.start},{r.end})" for i, r in enumerate(ranges, 1))
        )

        aggregator_task = asyncio.create_task(aggregator.run())
        reports = await asyncio.gather(
            *(
                self.run_worker(
                    index,
                    links[task_range.as_slice()],
                    output_dir,
                    aggregator.signal,
                )
                for index, task_range in enumerate(ranges, start=1)
            )
        )
        await aggregator_task

        for report in reports:
            stats.merge(report)
        return stats
