"""
Detects master (multi-bitrate) playlists and extracts their variant stream URLs.
"""

import logging

import m3u8

from hls_mirror.exceptions import ParseError
from hls_mirror.utils.url import resolve_url

log = logging.getLogger(__name__)


def select_variants(base_url: str, text: str) -> list[str]:
    """
    Returns the absolute URLs of all variant streams in manifest order.

    Variant references are the URIs following '#EXT-X-STREAM-INF' tags.
    References that cannot be resolved are skipped. An empty list means the
    manifest is a media playlist.

    Raises:
        ParseError: If a tag attribute of the manifest is malformed.
    """
    try:
        playlist = m3u8.loads(text, uri=base_url)
    except ValueError as e:
        raise ParseError(f"Malformed playlist at '{base_url}': {e}") from e

    if not playlist.is_variant:
        return []

    variants = []
    for variant in playlist.playlists:
        try:
            variants.append(resolve_url(base_url, variant.uri))
        except ParseError as e:
            log.debug(f"Skipping unresolvable variant reference: {e}")
    return variants
