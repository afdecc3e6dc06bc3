"""Utility modules for formatting, validation and logging."""

from utils.formatting import format_timestamp, truncate
from utils.validation import parse_bool, parse_exit_code, validate_image_reference

__all__ = [
    "format_timestamp",
    "truncate",
    "parse_bool",
    "parse_exit_code",
    "validate_image_reference",
]
