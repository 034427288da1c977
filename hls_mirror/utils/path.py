"""
Utilities for creating the output layout and persisting the rewritten manifest.
"""

import logging
from pathlib import Path

from hls_mirror.exceptions import StorageError

log = logging.getLogger(__name__)


def create_dir(directory_path: Path) -> None:
    """
    Creates a directory if it does not already exist.

    Raises:
        StorageError: If the directory cannot be created.
    """
    try:
        directory_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Could not create directory '{directory_path}': {e}") from e


def save_manifest(index_path: Path, content: str) -> None:
    """
    Writes the rewritten manifest, creating its parent directory when needed.

    Raises:
        StorageError: If the file cannot be written.
    """
    create_dir(index_path.parent)
    try:
        with open(index_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise StorageError(f"Failed to write manifest '{index_path}': {e}") from e
    log.debug(f"Saved manifest to '{index_path}'.")
