"""
Detailed JSON report: every field of every detailed-filtered finding,
plus scan metadata and counts. This is the archival, machine-readable
artifact.
"""

import json
from typing import Sequence

from core.models import AggregationResult, Finding, ScanResult
from utils.formatting import format_timestamp

SCHEMA_VERSION = 1


def build_detailed_report(
    scan: ScanResult,
    findings: Sequence[Finding],
    aggregation: AggregationResult,
) -> dict:
    """
    Build the nested detailed report document.

    Args:
        scan: Scan the findings come from
        findings: Detailed-filtered findings
        aggregation: Aggregation of the basic-filtered findings (drives status)

    Returns:
        JSON-serializable dictionary
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "image_ref": scan.image_ref,
        "scanned_at": format_timestamp(scan.scanned_at),
        "status": aggregation.status.value,
        "total_count": aggregation.total_count,
        "counts_by_severity": aggregation.to_dict(),
        "finding_count": len(findings),
        "findings": [finding.to_dict() for finding in findings],
    }


def render_detailed(
    scan: ScanResult,
    findings: Sequence[Finding],
    aggregation: AggregationResult,
) -> str:
    """Render the detailed report as indented JSON text."""
    document = build_detailed_report(scan, findings, aggregation)
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


__all__ = ["build_detailed_report", "render_detailed", "SCHEMA_VERSION"]
