"""
Data Models Layer.

This package contains the Pydantic configuration model and the dataclasses
that flow between the rewriter, the worker pool and the CLI.
"""

from .config import MirrorConfig
from .playlist import ResourceLink, RewriteResult, TaskRange
from .stats import MirrorResult, MirrorStats, WorkerReport

__all__ = [
    "MirrorConfig",
    "MirrorResult",
    "MirrorStats",
    "ResourceLink",
    "RewriteResult",
    "TaskRange",
    "WorkerReport",
]
