"""Tests for the fixed-width table report."""

from core.aggregation import aggregate
from core.filtering import filter_findings
from core.models import Severity
from outputs.table_report import COLUMNS, render_table
from conftest import make_finding


class TestRenderTable:
    """Tests for render_table."""

    def test_empty_emits_marker(self, empty_scan):
        """Test zero findings renders the explicit marker, never an empty string."""
        output = render_table(empty_scan, [], aggregate([]))
        assert output == "No vulnerabilities found\n"
        assert output.strip() != ""

    def test_header_and_separator(self, sample_scan, basic_spec):
        """Test header names every column."""
        findings = filter_findings(sample_scan.findings, basic_spec)
        lines = render_table(sample_scan, findings, aggregate(findings)).splitlines()
        for column in COLUMNS:
            assert column in lines[0]
        assert set(lines[1].replace(" ", "")) == {"-"}

    def test_one_row_per_finding_in_order(self, sample_scan, basic_spec):
        """Test rows follow the filtered order."""
        findings = filter_findings(sample_scan.findings, basic_spec)
        lines = render_table(sample_scan, findings, aggregate(findings)).splitlines()
        rows = lines[2:]
        assert len(rows) == 2
        assert "CVE-2024-0003" in rows[0]
        assert "CVE-2024-0001" in rows[1]

    def test_fixed_version_placeholder(self, sample_scan):
        """Test missing fixed version shows the placeholder."""
        finding = make_finding("CVE-9", Severity.CRITICAL)
        output = render_table(sample_scan, [finding], aggregate([finding]))
        row = output.splitlines()[2]
        assert row.endswith("-")

    def test_columns_aligned(self, sample_scan, detailed_spec):
        """Test every row starts the severity column at the same offset."""
        findings = filter_findings(sample_scan.findings, detailed_spec)
        lines = render_table(sample_scan, findings, aggregate(findings)).splitlines()
        offset = lines[0].index("SEVERITY")
        for row, finding in zip(lines[2:], findings):
            assert row[offset:].startswith(finding.severity.value)

    def test_long_cells_truncated(self, sample_scan):
        """Test overly long cells are shortened."""
        finding = make_finding("CVE-10", Severity.HIGH, target="x" * 200)
        output = render_table(sample_scan, [finding], aggregate([finding]))
        assert "x" * 200 not in output
        assert "..." in output

    def test_idempotent(self, sample_scan, basic_spec):
        """Test re-rendering produces identical output."""
        findings = filter_findings(sample_scan.findings, basic_spec)
        first = render_table(sample_scan, findings, aggregate(findings))
        second = render_table(sample_scan, findings, aggregate(findings))
        assert first == second
