"""
Helper functions for formatting data into human-readable strings.
"""

import math
import re

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def format_size(bytes_size: int) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 MB')."""
    if bytes_size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while bytes_size >= 1024 and i < len(units) - 1:
        bytes_size /= 1024
        i += 1
    return f"{bytes_size:.1f} {units[i]}"


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def parse_duration(value: str) -> float:
    """
    Parses a duration such as '500ms', '2s' or '1m30s' into seconds.

    A bare number is taken as seconds.

    Raises:
        ValueError: If the string is not a valid, non-negative duration.
    """
    text = value.strip()
    if not text:
        raise ValueError("Duration cannot be empty.")
    try:
        seconds = float(text)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds) or seconds < 0:
            raise ValueError(f"Duration must be finite and non-negative: {value!r}")
        return seconds

    position = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        amount, unit = match.groups()
        total += float(amount) * _UNIT_SECONDS[unit]
        position = match.end()
    if position != len(text) or position == 0:
        raise ValueError(f"Invalid duration: {value!r} (expected e.g. 500ms, 2s, 1m30s)")
    return total
