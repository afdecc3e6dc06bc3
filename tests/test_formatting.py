"""Tests for formatting utilities."""

from datetime import datetime, timedelta, timezone

from utils.formatting import (
    escape_markdown_cell,
    format_fixed_version,
    format_timestamp,
    single_line,
    truncate,
)


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_utc(self):
        """Test UTC timestamps keep their wall time."""
        value = datetime(2025, 5, 17, 20, 51, 7, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2025-05-17T20:51:07Z"

    def test_offset_converted_to_utc(self):
        """Test offsets are normalized to UTC."""
        value = datetime(2025, 5, 17, 13, 51, 7, 592255, tzinfo=timezone(timedelta(hours=-7)))
        assert format_timestamp(value) == "2025-05-17T20:51:07Z"

    def test_naive_assumed_utc(self):
        """Test naive datetimes are treated as UTC."""
        assert format_timestamp(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05Z"


class TestFormatFixedVersion:
    """Tests for format_fixed_version function."""

    def test_fixed(self):
        """Test a fixed version is shown as-is."""
        assert format_fixed_version("3.0.16-1~deb12u1") == "3.0.16-1~deb12u1"

    def test_unfixed(self):
        """Test missing fixes show a placeholder."""
        assert format_fixed_version(None) == "-"
        assert format_fixed_version("") == "-"


class TestTruncate:
    """Tests for truncate function."""

    def test_short_text_unchanged(self):
        """Test text within the width is returned unchanged."""
        assert truncate("openssl", 60) == "openssl"

    def test_exact_width_unchanged(self):
        """Test text exactly at the width is not truncated."""
        assert truncate("abcde", 5) == "abcde"

    def test_long_text(self):
        """Test long text is cut to the width including the ellipsis."""
        result = truncate("a" * 100, 60)
        assert len(result) == 60
        assert result.endswith("...")

    def test_tiny_width(self):
        """Test widths smaller than the ellipsis cut without it."""
        assert truncate("abcdef", 2) == "ab"


class TestMarkdownHelpers:
    """Tests for single_line and escape_markdown_cell."""

    def test_single_line(self):
        """Test newlines and runs of whitespace collapse."""
        assert single_line("line one\n  line\ttwo ") == "line one line two"
        assert single_line(None) == ""

    def test_escape_pipes(self):
        """Test pipes cannot split a table cell."""
        assert escape_markdown_cell("a | b") == "a \\| b"

    def test_escape_newlines(self):
        """Test line breaks cannot end a table row."""
        assert escape_markdown_cell("first\nsecond") == "first second"
