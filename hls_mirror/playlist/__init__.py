"""
Playlist Processing Layer.

This package parses HLS manifests: it picks a variant out of master playlists
and rewrites media playlists to point at local files.
"""

from .rewriter import PlaylistRewriter
from .variants import select_variants

__all__ = ["PlaylistRewriter", "select_variants"]
