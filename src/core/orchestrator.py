"""
Orchestrates one report run: scan, filter, aggregate, render, publish, decide.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from core.aggregation import aggregate
from core.config import PipelineConfig
from core.decision import emit
from core.exceptions import IntegrationException, OutputException, ScanException
from core.filtering import filter_findings
from core.models import AggregationResult, Decision, Finding, ScanResult
from core.scanner_interface import ScanExecutor
from integrations.github_actions import append_step_summary, write_outputs
from outputs.base import ArtifactStore, CommentPoster, RenderedReport
from outputs.detailed_report import render_detailed
from outputs.pr_comment import render_pr_comment
from outputs.summary_report import render_summary
from outputs.table_report import render_table
from utils.logging_helpers import log_info_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """
    Everything a run produced.

    Attributes:
        scan: Scan result the reports were built from
        aggregation: Aggregation of the basic-filtered findings
        reports: Rendered reports keyed by report name
        decision: Final status, count and exit code
        artifacts: Stored report locations keyed by report name
        comment_url: URL of the posted PR comment, if posted
        warnings: Skipped or failed output paths
    """

    scan: ScanResult
    aggregation: AggregationResult
    reports: dict[str, RenderedReport]
    decision: Decision
    artifacts: dict[str, str] = field(default_factory=dict)
    comment_url: Optional[str] = None
    warnings: tuple[str, ...] = ()


def render_reports(
    scan: ScanResult,
    basic_findings: Sequence[Finding],
    detailed_findings: Sequence[Finding],
    aggregation: AggregationResult,
) -> dict[str, RenderedReport]:
    """
    Render all four reports.

    The renderers are independent pure functions; none reads another's
    output, so the order here carries no meaning.

    Args:
        scan: Scan result
        basic_findings: Findings matching the basic filter
        detailed_findings: Findings matching the detailed filter
        aggregation: Aggregation of basic_findings

    Returns:
        Reports keyed by name (table, detailed, summary, pr_comment)
    """
    return {
        "table": RenderedReport.for_output(
            "table", render_table(scan, basic_findings, aggregation)
        ),
        "detailed": RenderedReport.for_output(
            "detailed", render_detailed(scan, detailed_findings, aggregation)
        ),
        "summary": RenderedReport.for_output(
            "summary", render_summary(scan, basic_findings, aggregation)
        ),
        "pr_comment": RenderedReport.for_output(
            "pr_comment", render_pr_comment(scan, detailed_findings, aggregation)
        ),
    }


class ReportPipeline:
    """
    Runs the report pipeline for one image.

    Collaborators (scan executor, artifact store, comment poster) are
    injected. Failures of the artifact store, the comment poster and the
    step outputs are collected as warnings and never abort the run.
    """

    def __init__(
        self,
        config: PipelineConfig,
        scanner: ScanExecutor,
        artifact_store: Optional[ArtifactStore] = None,
        comment_poster: Optional[CommentPoster] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Validated configuration
            scanner: Produces the scan result
            artifact_store: Receives rendered reports (None to skip)
            comment_poster: Posts the PR comment (None when unavailable)
            environ: Environment for step outputs (defaults to os.environ)
        """
        self.config = config
        self.scanner = scanner
        self.artifact_store = artifact_store
        self.comment_poster = comment_poster
        self.environ = environ

    def run(self) -> PipelineResult:
        """
        Execute the pipeline.

        Returns:
            PipelineResult

        Raises:
            ScanException: If the scan executor cannot produce a result
        """
        config = self.config
        log_info_header(f"Vulnerability report for {config.image_ref}", logger=logger)

        if not self.scanner.is_available():
            raise ScanException(config.image_ref, f"Scan executor '{self.scanner.name()}' is not available")
        version = self.scanner.version()
        if version:
            logger.info(f"Using {self.scanner.name()} {version}")

        requested = config.basic.severities | config.detailed.severities
        scan = self.scanner.scan(config.image_ref, requested, config.basic.ignore_unfixed)
        logger.info(f"{self.scanner.name()} returned {len(scan.findings)} findings")

        basic_findings = filter_findings(scan.findings, config.basic)
        detailed_findings = filter_findings(scan.findings, config.detailed)
        logger.info(
            f"Basic filter [{config.basic}]: {len(basic_findings)} findings; "
            f"detailed filter [{config.detailed}]: {len(detailed_findings)} findings"
        )

        aggregation = aggregate(basic_findings)
        reports = render_reports(scan, basic_findings, detailed_findings, aggregation)
        decision = emit(aggregation, config.requested_exit_code)

        warnings: list[str] = []
        artifacts = self._store_reports(reports, warnings)
        comment_url = self._post_comment(reports["pr_comment"], warnings)
        self._publish_outputs(decision, reports["summary"], warnings)

        return PipelineResult(
            scan=scan,
            aggregation=aggregation,
            reports=reports,
            decision=decision,
            artifacts=artifacts,
            comment_url=comment_url,
            warnings=tuple(warnings),
        )

    def _warn(self, warnings: list[str], message: str) -> None:
        logger.warning(message)
        warnings.append(message)

    def _store_reports(self, reports: dict[str, RenderedReport], warnings: list[str]) -> dict[str, str]:
        """Hand every report to the artifact store, one failure at a time."""
        if self.artifact_store is None:
            logger.debug("No artifact store configured, reports kept in memory")
            return {}

        artifacts = {}
        for name, report in reports.items():
            try:
                artifacts[name] = self.artifact_store.store(report)
            except OutputException as e:
                self._warn(warnings, str(e))
            except Exception as e:
                self._warn(warnings, f"Failed to store {name} report: {e}")

        if artifacts:
            logger.info(f"Stored {len(artifacts)} report(s) for artifact '{self.config.artifact_name}'")
        return artifacts

    def _post_comment(self, report: RenderedReport, warnings: list[str]) -> Optional[str]:
        """Post the PR comment when enabled and possible."""
        if not self.config.post_pr_comment:
            logger.info("PR comment posting disabled")
            return None

        if self.comment_poster is None:
            self._warn(warnings, "Skipping PR comment: no GitHub token or pull request available")
            return None

        if not self.comment_poster.is_available():
            reason = self.comment_poster.unavailable_reason() or "comment poster unavailable"
            self._warn(warnings, f"Skipping PR comment: {reason}")
            return None

        try:
            url = self.comment_poster.post(report.content)
        except IntegrationException as e:
            self._warn(warnings, f"Skipping PR comment: {e}")
            return None
        except Exception as e:
            self._warn(warnings, f"Skipping PR comment: unexpected error: {e}")
            return None

        logger.info(f"PR comment posted: {url}")
        return url

    def _publish_outputs(self, decision: Decision, summary: RenderedReport, warnings: list[str]) -> None:
        """Expose step outputs and the job summary to the calling workflow."""
        outputs = dict(decision.to_outputs())
        outputs["artifact_name"] = self.config.artifact_name
        outputs["retention_days"] = str(self.config.retention_days)

        try:
            write_outputs(outputs, self.environ)
        except IntegrationException as e:
            self._warn(warnings, str(e))

        try:
            append_step_summary(f"```\n{summary.content}```", self.environ)
        except IntegrationException as e:
            self._warn(warnings, str(e))


__all__ = ["ReportPipeline", "PipelineResult", "render_reports"]
