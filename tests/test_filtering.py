"""Tests for severity filtering."""

import itertools

import pytest

from core.filtering import filter_findings, matches
from core.models import Severity, SeverityFilterSpec
from conftest import make_finding


class TestFilterFindings:
    """Tests for filter_findings."""

    def test_keeps_only_selected_severities(self, sample_findings, basic_spec):
        """Test only CRITICAL/HIGH findings pass the basic filter."""
        result = filter_findings(sample_findings, basic_spec)
        assert [f.id for f in result] == ["CVE-2024-0003", "CVE-2024-0001"]
        assert all(f.severity in basic_spec.severities for f in result)

    def test_preserves_scanner_order(self, sample_findings, detailed_spec):
        """Test the result is an order-preserving subsequence."""
        result = filter_findings(sample_findings, detailed_spec)
        assert result == sample_findings

    def test_ignore_unfixed(self, sample_findings):
        """Test unfixed findings are dropped when requested."""
        spec = SeverityFilterSpec(frozenset(Severity.ordered()), ignore_unfixed=True)
        result = filter_findings(sample_findings, spec)
        assert [f.id for f in result] == ["CVE-2024-0003", "CVE-2024-0005"]
        assert all(f.fixed_version for f in result)

    def test_empty_result_is_valid(self, sample_findings):
        """Test zero matches returns an empty list, not an error."""
        spec = SeverityFilterSpec(frozenset({Severity.CRITICAL}), ignore_unfixed=True)
        assert filter_findings(sample_findings, spec) == []

    def test_empty_input(self, basic_spec):
        """Test empty input."""
        assert filter_findings([], basic_spec) == []

    def test_example_from_two_findings(self):
        """Test CRITICAL unfixed kept, LOW fixed dropped for CRITICAL/HIGH without ignore."""
        findings = [
            make_finding("CVE-1", Severity.CRITICAL),
            make_finding("CVE-2", Severity.LOW, fixed_version="1.2"),
        ]
        spec = SeverityFilterSpec(frozenset({Severity.CRITICAL, Severity.HIGH}))
        assert [f.id for f in filter_findings(findings, spec)] == ["CVE-1"]

    @pytest.mark.parametrize("ignore_unfixed", [False, True])
    def test_property_over_all_severity_subsets(self, sample_findings, ignore_unfixed):
        """Test every result satisfies the filter contract for every severity subset."""
        levels = Severity.ordered()
        for size in range(1, len(levels) + 1):
            for subset in itertools.combinations(levels, size):
                spec = SeverityFilterSpec(frozenset(subset), ignore_unfixed=ignore_unfixed)
                result = filter_findings(sample_findings, spec)
                for finding in result:
                    assert finding.severity in spec.severities
                    if ignore_unfixed:
                        assert finding.fixed_version
                expected = [f for f in sample_findings if matches(f, spec)]
                assert result == expected
