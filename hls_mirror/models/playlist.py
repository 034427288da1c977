"""
Data structures produced by the playlist rewriter and consumed by the download workers.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ResourceLink:
    """One manifest-referenced resource (media segment or encryption key)."""

    origin_reference: str
    download_url: str
    local_path: str


@dataclass(frozen=True)
class TaskRange:
    """A half-open ``[start, end)`` window over the ordered link list."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def as_slice(self) -> slice:
        return slice(self.start, self.end)


@dataclass
class RewriteResult:
    """The rewritten manifest text and its links in order of appearance."""

    text: str
    links: list[ResourceLink] = field(default_factory=list)
