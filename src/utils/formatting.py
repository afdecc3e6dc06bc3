"""
Formatting utilities for report output.

Provides common formatting functions for timestamps, table cells and
markdown text.
"""

from datetime import datetime, timezone
from typing import Optional

from constants import FIXED_VERSION_PLACEHOLDER


def format_timestamp(value: datetime) -> str:
    """
    Format a scan timestamp as ISO 8601 in UTC.

    Naive datetimes are assumed to already be UTC.

    Args:
        value: datetime to format

    Returns:
        ISO 8601 string with a "Z" suffix

    Examples:
        >>> from datetime import datetime, timezone
        >>> format_timestamp(datetime(2025, 5, 17, 20, 51, 7, tzinfo=timezone.utc))
        '2025-05-17T20:51:07Z'
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc).replace(microsecond=0)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_fixed_version(fixed_version: Optional[str]) -> str:
    """
    Display value for a fixed version.

    Examples:
        >>> format_fixed_version("3.0.16-1")
        '3.0.16-1'
        >>> format_fixed_version(None)
        '-'
    """
    return fixed_version if fixed_version else FIXED_VERSION_PLACEHOLDER


def truncate(text: str, width: int, ellipsis: str = "...") -> str:
    """
    Shorten text to at most `width` characters.

    Args:
        text: Text to shorten
        width: Maximum length including the ellipsis
        ellipsis: Suffix marking truncation

    Returns:
        Original text if short enough, otherwise truncated text

    Examples:
        >>> truncate("registry.example.com/app", 12)
        'registry....'
        >>> truncate("short", 12)
        'short'
    """
    if len(text) <= width:
        return text
    if width <= len(ellipsis):
        return text[:width]
    return text[: width - len(ellipsis)] + ellipsis


def single_line(text: Optional[str]) -> str:
    """Collapse whitespace (including newlines) into single spaces."""
    return " ".join((text or "").split())


def escape_markdown_cell(text: Optional[str]) -> str:
    """
    Make text safe for a markdown table cell.

    Pipes are escaped and line breaks collapsed so the cell cannot break
    the table layout.

    Examples:
        >>> escape_markdown_cell("a | b")
        'a \\\\| b'
    """
    return single_line(text).replace("|", "\\|")


__all__ = [
    "format_timestamp",
    "format_fixed_version",
    "truncate",
    "single_line",
    "escape_markdown_cell",
]
