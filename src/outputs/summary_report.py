"""
Short human-readable scan summary.
"""

from typing import Sequence

from core.models import AggregationResult, Finding, ScanResult, Severity
from utils.formatting import format_timestamp


def render_summary(
    scan: ScanResult,
    findings: Sequence[Finding],
    aggregation: AggregationResult,
) -> str:
    """
    Render image, scan time, status and per-severity counts.

    All five severities are listed, zero counts included.

    Example output:
        Image: python:3.12
        Scanned at: 2025-05-17T20:51:07Z
        Status: vulnerabilities_found
        Total vulnerabilities: 3
          CRITICAL: 1
          HIGH: 2
          MEDIUM: 0
          LOW: 0
          UNKNOWN: 0
    """
    lines = [
        f"Image: {scan.image_ref}",
        f"Scanned at: {format_timestamp(scan.scanned_at)}",
        f"Status: {aggregation.status.value}",
        f"Total vulnerabilities: {aggregation.total_count}",
    ]
    for severity in Severity.ordered():
        lines.append(f"  {severity.value}: {aggregation.count(severity)}")
    return "\n".join(lines) + "\n"


__all__ = ["render_summary"]
