"""
HTTP Layer.

This package handles all communication with the server hosting the playlist.
"""

from .client import PlaylistFetcher

__all__ = ["PlaylistFetcher"]
