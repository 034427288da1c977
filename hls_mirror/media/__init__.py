"""
Media Transfer Layer.

This package is responsible for writing remote segment and key files to disk.
"""

from .downloader import SegmentDownloader

__all__ = ["SegmentDownloader"]
