"""
Core application engine for orchestrating the mirror process.

This package contains the primary logic. The `MirrorSession` resolves and
rewrites the playlist, delegating the downloads to the `DownloadWorkerPool`.
"""
