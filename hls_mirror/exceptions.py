"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class HlsMirrorError(Exception):
    """Base exception for all application-specific errors."""


class FormatError(HlsMirrorError):
    """Raised when a manifest does not start with the '#EXTM3U' header."""


class ParseError(HlsMirrorError):
    """Raised when a manifest reference cannot be resolved against its base URL."""


class FetchError(HlsMirrorError):
    """Raised when a manifest cannot be fetched (network error, bad status, timeout)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch '{url}': {reason}")
        self.url = url
        self.reason = reason


class CycleError(HlsMirrorError):
    """Raised when variant resolution leads back to an already visited playlist."""


class StorageError(HlsMirrorError):
    """Raised when the output directory or the index file cannot be written."""


class ConfigurationError(HlsMirrorError):
    """Raised for issues related to configuration loading or validation."""
