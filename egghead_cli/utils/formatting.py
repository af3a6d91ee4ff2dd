"""
Helper functions for formatting data into human-readable strings.
"""

from typing import Optional

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(bytes_size: Optional[int]) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 MB')."""
    if bytes_size is None:
        return "unknown size"
    if bytes_size <= 0:
        return "0 B"
    size = float(bytes_size)
    for unit in _SIZE_UNITS[:-1]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_SIZE_UNITS[-1]}"


def format_duration(seconds: float) -> str:
    """Formats a duration as e.g. '2h 34m 12s'; zero components are left out."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    parts = [f"{value}{unit}" for value, unit in ((hours, "h"), (minutes, "m")) if value]
    if secs or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """Returns '1 lesson' / '3 lessons'."""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"
