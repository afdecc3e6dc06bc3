"""
Size-bounded markdown rendering for a single pull request comment.

The comment always carries the status line, the total and a breakdown
table of counts. Individual findings are listed only for CRITICAL and
HIGH severities, capped at PR_COMMENT_MAX_FINDINGS entries.
"""

from typing import Sequence

from constants import (
    MAX_COMMENT_SIZE,
    PR_COMMENT_MARKER,
    PR_COMMENT_MAX_FINDINGS,
    PR_COMMENT_TITLE_WIDTH,
)
from core.models import AggregationResult, Finding, ScanResult, ScanStatus, Severity
from utils.formatting import (
    escape_markdown_cell,
    format_fixed_version,
    format_timestamp,
    truncate,
)

LISTED_SEVERITIES = (Severity.CRITICAL, Severity.HIGH)

STATUS_LINES = {
    ScanStatus.SUCCESS: ":white_check_mark: No vulnerabilities found",
    ScanStatus.VULNERABILITIES_FOUND: ":x: Vulnerabilities found",
}

SIZE_LIMIT_NOTE = "\n\n_Comment truncated to fit the size limit, see full report._\n"

URL_ESCAPES = {
    "(": "%28",
    ")": "%29",
    "|": "%7C",
    " ": "%20",
    "\n": "%0A",
    "<": "%3C",
    ">": "%3E",
}


def select_listed_findings(findings: Sequence[Finding]) -> list[Finding]:
    """
    CRITICAL and HIGH findings in listing order.

    Ordered by severity (CRITICAL first), then vulnerability id, then
    package name so the listing is stable across runs.
    """
    listed = [f for f in findings if f.severity in LISTED_SEVERITIES]
    return sorted(listed, key=lambda f: (f.severity.rank, f.id, f.package_name))


def _link_target(url: str) -> str:
    # Characters that would end the link or split the table row
    return "".join(URL_ESCAPES.get(char, char) for char in url.strip())


def _vulnerability_cell(finding: Finding) -> str:
    vuln_id = escape_markdown_cell(finding.id)
    if finding.primary_url and finding.primary_url.strip():
        return f"[{vuln_id}]({_link_target(finding.primary_url)})"
    return vuln_id


def _finding_row(finding: Finding) -> str:
    cells = [
        finding.severity.value,
        _vulnerability_cell(finding),
        escape_markdown_cell(finding.package_name),
        escape_markdown_cell(finding.installed_version),
        escape_markdown_cell(format_fixed_version(finding.fixed_version)),
        escape_markdown_cell(truncate(finding.title, PR_COMMENT_TITLE_WIDTH)),
    ]
    return "| " + " | ".join(cells) + " |"


def _summary_section(scan: ScanResult, aggregation: AggregationResult) -> list[str]:
    lines = [
        PR_COMMENT_MARKER,
        f"## Vulnerability Scan: `{scan.image_ref}`",
        "",
        f"**Status:** {STATUS_LINES[aggregation.status]}",
        f"**Total vulnerabilities:** {aggregation.total_count}",
        f"**Scanned at:** {format_timestamp(scan.scanned_at)}",
        "",
        "| Severity | Count |",
        "|----------|------:|",
    ]
    for severity in Severity.ordered():
        lines.append(f"| {severity.value} | {aggregation.count(severity)} |")
    return lines


def _findings_section(listed: list[Finding]) -> list[str]:
    lines = [
        "",
        "### Critical and High Findings",
        "",
        "| Severity | Vulnerability | Package | Installed | Fixed | Title |",
        "|----------|---------------|---------|-----------|-------|-------|",
    ]
    lines.extend(_finding_row(f) for f in listed[:PR_COMMENT_MAX_FINDINGS])

    hidden = max(len(listed) - PR_COMMENT_MAX_FINDINGS, 0)
    if hidden:
        lines.append("")
        lines.append(f"_{hidden} more not shown, see full report._")
    return lines


def _enforce_size_limit(body: str) -> str:
    if len(body) <= MAX_COMMENT_SIZE:
        return body
    return body[: MAX_COMMENT_SIZE - len(SIZE_LIMIT_NOTE)].rstrip() + SIZE_LIMIT_NOTE


def render_pr_comment(
    scan: ScanResult,
    findings: Sequence[Finding],
    aggregation: AggregationResult,
) -> str:
    """
    Render the pull request comment body.

    Args:
        scan: Scan the findings come from
        findings: Findings to draw the CRITICAL/HIGH listing from (the
            detailed-filtered set, so the listing does not depend on the
            basic severity selection)
        aggregation: Aggregation of the basic-filtered findings

    Returns:
        Markdown body of at most MAX_COMMENT_SIZE characters
    """
    lines = _summary_section(scan, aggregation)

    listed = select_listed_findings(findings)
    if listed:
        lines.extend(_findings_section(listed))

    return _enforce_size_limit("\n".join(lines) + "\n")


__all__ = ["render_pr_comment", "select_listed_findings", "LISTED_SEVERITIES"]
