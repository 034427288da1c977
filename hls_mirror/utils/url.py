"""
Utilities for validating URLs and resolving manifest references against them.
"""

import re
from urllib.parse import urljoin, urlsplit

from hls_mirror.exceptions import ParseError

HTTP_URL_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def is_http_url(url: str) -> bool:
    """Checks that a string looks like an absolute http(s) URL."""
    return bool(url and HTTP_URL_PATTERN.match(url))


def _check_syntax(value: str, role: str) -> None:
    if _CONTROL_CHARS.search(value):
        raise ParseError(f"Invalid {role} URL {value!r}: contains control characters.")
    if _BAD_ESCAPE.search(value):
        raise ParseError(f"Invalid {role} URL {value!r}: malformed percent-escape.")
    try:
        parts = urlsplit(value)
        # Accessing the port validates it.
        parts.port
    except ValueError as e:
        raise ParseError(f"Invalid {role} URL {value!r}: {e}") from e


def resolve_url(base_url: str, reference: str) -> str:
    """
    Resolves a possibly relative reference against a base URL.

    Absolute references are returned unchanged, root-relative ('/path') and
    relative ('path', '../path') ones follow RFC 3986 resolution.

    Raises:
        ParseError: If either input is not a syntactically valid URL.
    """
    _check_syntax(base_url, "base")
    base_parts = urlsplit(base_url)
    if base_parts.scheme.lower() not in ("http", "https") or not base_parts.netloc:
        raise ParseError(f"Base URL must be an absolute http(s) URL: {base_url!r}")

    _check_syntax(reference, "reference")
    return urljoin(base_url, reference)
