"""
Rewrites a media playlist so every segment and key URI points at a local file,
and collects the download task for each of them.
"""

import logging
import re

from hls_mirror.exceptions import FormatError
from hls_mirror.models.playlist import ResourceLink, RewriteResult
from hls_mirror.utils.url import resolve_url

log = logging.getLogger(__name__)

HEADER_TAG = "#EXTM3U"
# Generated names start at SEQUENCE_OFFSET + 1.
SEQUENCE_OFFSET = 10000
# Key URIs are only looked for in the leading tag block.
KEY_SCAN_LINES = 10
KEY_URI_PATTERN = re.compile(r'(?<![\w-])URI="([^"]+)"')


class PlaylistRewriter:
    """
    Single-pass rewriter for media playlists.

    Each call to `rewrite` owns its own copy of the document lines and its own
    sequence counter, so names are unique within one manifest.
    """

    def __init__(self, name_prefix: str = "", name_width: int = 5):
        self.name_prefix = name_prefix
        self.name_width = name_width
        self._sequence = SEQUENCE_OFFSET

    def _next_local_path(self) -> str:
        self._sequence += 1
        return f"{self.name_prefix}{self._sequence:0{self.name_width}d}.ts"

    def _new_link(self, base_url: str, reference: str) -> ResourceLink:
        return ResourceLink(
            origin_reference=reference,
            download_url=resolve_url(base_url, reference),
            local_path=self._next_local_path(),
        )

    def rewrite(self, base_url: str, text: str) -> RewriteResult:
        """
        Rewrites every resource reference of a manifest to a generated local name.

        Args:
            base_url: The URL the manifest was fetched from.
            text: The manifest body.

        Returns:
            The rewritten text and the links in order of appearance.

        Raises:
            FormatError: If the first line is not the '#EXTM3U' header.
            ParseError: If a reference cannot be resolved against base_url.
        """
        self._sequence = SEQUENCE_OFFSET
        source_lines = text.split("\n")
        document = list(source_lines)
        links: list[ResourceLink] = []
        renamed_keys: dict[str, str] = {}

        for index, raw_line in enumerate(source_lines):
            line = raw_line.strip()
            if index == 0:
                line = line.lstrip("\ufeff")
                if line != HEADER_TAG:
                    raise FormatError(f"Invalid playlist header: {line!r}")
            if not line:
                continue

            if line.startswith("#"):
                if index >= KEY_SCAN_LINES:
                    continue
                match = KEY_URI_PATTERN.search(line)
                if not match or match.group(1) in renamed_keys:
                    continue
                link = self._new_link(base_url, match.group(1))
                links.append(link)
                renamed_keys[link.origin_reference] = link.local_path
                self._replace_key_reference(document, link)
                log.debug(f"Key {link.download_url} -> {link.local_path}")
            else:
                link = self._new_link(base_url, line)
                links.append(link)
                document[index] = raw_line.replace(line, link.local_path, 1)

        return RewriteResult(text="\n".join(document), links=links)

    @staticmethod
    def _replace_key_reference(document: list[str], link: ResourceLink) -> None:
        """Replaces the quoted key URI in every tag line that carries it."""
        quoted_origin = f'"{link.origin_reference}"'
        quoted_local = f'"{link.local_path}"'
        for index, line in enumerate(document):
            if line.lstrip().startswith("#") and quoted_origin in line:
                document[index] = line.replace(quoted_origin, quoted_local)
