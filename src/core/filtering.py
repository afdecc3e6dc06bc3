"""
Severity filtering of scan findings.
"""

from typing import Iterable

from core.models import Finding, SeverityFilterSpec


def matches(finding: Finding, spec: SeverityFilterSpec) -> bool:
    """
    Check whether a single finding passes a filter spec.

    Args:
        finding: Finding to check
        spec: Severity selection and unfixed policy

    Returns:
        True if the finding's severity is selected and, when unfixed
        findings are ignored, a fixed version is available
    """
    if finding.severity not in spec.severities:
        return False
    return not spec.ignore_unfixed or finding.is_fixed


def filter_findings(findings: Iterable[Finding], spec: SeverityFilterSpec) -> list[Finding]:
    """
    Select the findings matching a filter spec.

    The result keeps the scanner's order. An empty result is a normal
    outcome (nothing matched), not an error.

    Args:
        findings: Findings in scanner order
        spec: Severity selection and unfixed policy

    Returns:
        Order-preserving list of matching findings

    Examples:
        >>> spec = SeverityFilterSpec.from_string("CRITICAL,HIGH", ignore_unfixed=True)
        >>> [f.id for f in filter_findings(scan.findings, spec)]
        ['CVE-2024-0001']
    """
    return [finding for finding in findings if matches(finding, spec)]


__all__ = ["matches", "filter_findings"]
