"""
Aggregation of filtered findings into counts and an overall status.
"""

from collections import Counter
from typing import Iterable

from core.models import AggregationResult, Finding, ScanStatus, Severity


def aggregate(findings: Iterable[Finding]) -> AggregationResult:
    """
    Count findings per severity and derive the scan status.

    Every severity is present in the result, zero-filled when absent from
    the input. Counting does not depend on input order.

    Args:
        findings: Filtered findings

    Returns:
        AggregationResult with counts, total and status
    """
    counter = Counter(finding.severity for finding in findings)
    counts = {severity: counter.get(severity, 0) for severity in Severity.ordered()}
    total = sum(counts.values())

    return AggregationResult(
        counts_by_severity=counts,
        total_count=total,
        status=status_for(total),
    )


def status_for(total_count: int) -> ScanStatus:
    """Map a finding total onto the two-valued scan status."""
    return ScanStatus.SUCCESS if total_count == 0 else ScanStatus.VULNERABILITIES_FOUND


__all__ = ["aggregate", "status_for"]
