"""
Dataclasses for tracking the outcome of a mirror session.
"""

from dataclasses import dataclass, field

from .playlist import ResourceLink


@dataclass
class WorkerReport:
    """The outcome of a single worker's assigned range."""

    worker_index: int
    downloaded: int = 0
    failed: int = 0
    bytes_downloaded: int = 0
    failed_links: list[ResourceLink] = field(default_factory=list)


@dataclass
class MirrorStats:
    """Merged statistics for a whole mirror session."""

    links_total: int = 0
    links_downloaded: int = 0
    links_failed: int = 0
    bytes_downloaded: int = 0
    workers_completed: int = 0
    failed_links: list[ResourceLink] = field(default_factory=list)

    def merge(self, report: WorkerReport) -> None:
        """Folds one worker's report into the session totals."""
        self.links_downloaded += report.downloaded
        self.links_failed += report.failed
        self.bytes_downloaded += report.bytes_downloaded
        self.failed_links.extend(report.failed_links)
        self.workers_completed += 1

    @property
    def success(self) -> bool:
        return self.links_failed == 0


@dataclass
class MirrorResult:
    """Everything a finished run hands back to its caller."""

    playlist_url: str
    manifest: str
    links: list[ResourceLink]
    stats: MirrorStats
    duration: float = 0.0
