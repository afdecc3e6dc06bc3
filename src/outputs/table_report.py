"""
Fixed-width text table of basic-filtered findings.
"""

from typing import Sequence

from constants import NO_VULNERABILITIES_MARKER, TABLE_MAX_CELL_WIDTH
from core.models import AggregationResult, Finding, ScanResult
from utils.formatting import format_fixed_version, single_line, truncate

COLUMNS = [
    "TARGET",
    "VULNERABILITY ID",
    "SEVERITY",
    "PACKAGE",
    "INSTALLED VERSION",
    "FIXED VERSION",
]

COLUMN_GAP = "  "


def _row(finding: Finding) -> list[str]:
    cells = [
        finding.target,
        finding.id,
        finding.severity.value,
        finding.package_name,
        finding.installed_version,
        format_fixed_version(finding.fixed_version),
    ]
    return [truncate(single_line(cell), TABLE_MAX_CELL_WIDTH) for cell in cells]


def _format_line(cells: list[str], widths: list[int]) -> str:
    return COLUMN_GAP.join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()


def render_table(
    scan: ScanResult,
    findings: Sequence[Finding],
    aggregation: AggregationResult,
) -> str:
    """
    Render findings as a plain fixed-width table, one row per finding.

    Rows follow the order of `findings`. When there are no findings a
    single explicit marker line is returned instead of an empty table.

    Args:
        scan: Scan the findings come from
        findings: Basic-filtered findings
        aggregation: Aggregation of the same findings

    Returns:
        Table text ending in a newline
    """
    if not findings:
        return NO_VULNERABILITIES_MARKER + "\n"

    rows = [_row(finding) for finding in findings]
    widths = [
        max(len(COLUMNS[i]), *(len(row[i]) for row in rows))
        for i in range(len(COLUMNS))
    ]

    lines = [
        _format_line(COLUMNS, widths),
        _format_line(["-" * width for width in widths], widths),
    ]
    lines.extend(_format_line(row, widths) for row in rows)
    return "\n".join(lines) + "\n"


__all__ = ["render_table", "COLUMNS"]
