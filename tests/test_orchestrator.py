"""Tests for the report pipeline."""

import logging
from dataclasses import replace
from unittest.mock import MagicMock, Mock

import pytest

from core.aggregation import aggregate
from core.exceptions import IntegrationException, OutputException, ScanException
from core.filtering import filter_findings
from core.models import ScanResult, ScanStatus, Severity, SeverityFilterSpec
from core.orchestrator import ReportPipeline, render_reports
from core.scanner_interface import ScanExecutor
from integrations.artifact_store import LocalArtifactStore
from outputs.base import ArtifactStore, CommentPoster
from conftest import SCANNED_AT, make_finding


class StaticScanner(ScanExecutor):
    """Scan executor returning a fixed result."""

    def __init__(self, result: ScanResult):
        self.result = result
        self.calls = []

    def name(self) -> str:
        return "static"

    def scan(self, image_ref, severities, ignore_unfixed=False):
        self.calls.append((image_ref, severities, ignore_unfixed))
        return self.result

    def is_available(self) -> bool:
        return True


class FailingStore(ArtifactStore):
    """Artifact store that always fails."""

    def store(self, report):
        raise OutputException(report.name, "disk full")


@pytest.fixture
def poster():
    """Available comment poster double."""
    mock = Mock(spec=CommentPoster)
    mock.is_available.return_value = True
    mock.post.return_value = "https://github.com/octo/app/pull/7#c1"
    return mock


class TestRenderReports:
    """Tests for render_reports."""

    def test_renders_four_reports(self, sample_scan, basic_spec, detailed_spec):
        """Test every report is rendered with its registered file name."""

        basic = filter_findings(sample_scan.findings, basic_spec)
        detailed = filter_findings(sample_scan.findings, detailed_spec)
        reports = render_reports(sample_scan, basic, detailed, aggregate(basic))

        assert set(reports) == {"table", "detailed", "summary", "pr_comment"}
        assert reports["table"].filename == "vulnerability-table.txt"
        assert reports["detailed"].content_type == "application/json"
        assert all(report.content for report in reports.values())


class TestReportPipeline:
    """Tests for ReportPipeline.run."""

    def test_vulnerabilities_found(self, pipeline_config, sample_scan, tmp_path):
        """Test counts, status and exit code for a scan with findings."""
        store = LocalArtifactStore(tmp_path, pipeline_config.artifact_name)
        pipeline = ReportPipeline(pipeline_config, StaticScanner(sample_scan), store, environ={})

        result = pipeline.run()

        assert result.aggregation.total_count == 2
        assert result.decision.scan_status == ScanStatus.VULNERABILITIES_FOUND
        assert result.decision.vulnerability_count == 2
        assert result.decision.process_exit_code == 1
        assert result.warnings == ()
        assert set(result.artifacts) == {"table", "detailed", "summary", "pr_comment"}
        assert (tmp_path / "vulnerability-reports" / "vulnerability-report.json").exists()

    def test_scanner_receives_union_of_severities(self, pipeline_config, sample_scan):
        """Test the executor is asked for every reported severity."""
        config = replace(pipeline_config, detailed=SeverityFilterSpec(frozenset({Severity.LOW})))
        scanner = StaticScanner(sample_scan)
        ReportPipeline(config, scanner, environ={}).run()

        image_ref, severities, _ = scanner.calls[0]
        assert image_ref == "python:3.12"
        assert severities == frozenset({Severity.CRITICAL, Severity.HIGH, Severity.LOW})

    def test_clean_scan_succeeds(self, pipeline_config, empty_scan):
        """Test a clean scan succeeds even with strict gating."""
        result = ReportPipeline(pipeline_config, StaticScanner(empty_scan), environ={}).run()

        assert result.decision.scan_status == ScanStatus.SUCCESS
        assert result.decision.process_exit_code == 0
        assert result.reports["table"].content == "No vulnerabilities found\n"

    def test_advisory_gating(self, pipeline_config, sample_scan):
        """Test exit code 0 keeps status and count but succeeds."""
        config = replace(pipeline_config, requested_exit_code=0)
        result = ReportPipeline(config, StaticScanner(sample_scan), environ={}).run()

        assert result.decision.scan_status == ScanStatus.VULNERABILITIES_FOUND
        assert result.decision.vulnerability_count == 2
        assert result.decision.process_exit_code == 0

    def test_idempotent(self, pipeline_config, sample_scan):
        """Test re-running produces byte-identical reports."""
        first = ReportPipeline(pipeline_config, StaticScanner(sample_scan), environ={}).run()
        second = ReportPipeline(pipeline_config, StaticScanner(sample_scan), environ={}).run()

        for name in first.reports:
            assert first.reports[name].payload == second.reports[name].payload

    def test_store_failure_is_warning(self, pipeline_config, sample_scan):
        """Test artifact store failures do not abort the run."""
        result = ReportPipeline(
            pipeline_config, StaticScanner(sample_scan), FailingStore(), environ={}
        ).run()

        assert len(result.warnings) == 4
        assert "disk full" in result.warnings[0]
        assert result.decision.process_exit_code == 1
        assert len(result.reports) == 4

    def test_comment_disabled(self, pipeline_config, sample_scan, poster):
        """Test no post when posting is disabled."""
        result = ReportPipeline(
            pipeline_config, StaticScanner(sample_scan), comment_poster=poster, environ={}
        ).run()

        poster.post.assert_not_called()
        assert result.comment_url is None
        assert result.warnings == ()
        assert result.reports["pr_comment"].content

    def test_comment_posted(self, pipeline_config, sample_scan, poster):
        """Test the PR comment rendering is posted when enabled."""
        config = replace(pipeline_config, post_pr_comment=True)
        result = ReportPipeline(
            config, StaticScanner(sample_scan), comment_poster=poster, environ={}
        ).run()

        poster.post.assert_called_once_with(result.reports["pr_comment"].content)
        assert result.comment_url == "https://github.com/octo/app/pull/7#c1"

    def test_comment_without_poster_is_warning(self, pipeline_config, sample_scan):
        """Test missing credentials skip posting with a warning."""
        config = replace(pipeline_config, post_pr_comment=True)
        result = ReportPipeline(config, StaticScanner(sample_scan), environ={}).run()

        assert result.comment_url is None
        assert len(result.warnings) == 1
        assert "Skipping PR comment" in result.warnings[0]
        assert result.decision.scan_status == ScanStatus.VULNERABILITIES_FOUND

    def test_comment_unavailable_reason(self, pipeline_config, sample_scan, poster):
        """Test the poster's reason is reported."""
        poster.is_available.return_value = False
        poster.unavailable_reason.return_value = "no GitHub token available"
        config = replace(pipeline_config, post_pr_comment=True)
        result = ReportPipeline(
            config, StaticScanner(sample_scan), comment_poster=poster, environ={}
        ).run()

        poster.post.assert_not_called()
        assert "no GitHub token available" in result.warnings[0]

    def test_comment_failure_is_warning(self, pipeline_config, sample_scan, poster):
        """Test posting failures do not abort the run."""
        poster.post.side_effect = IntegrationException("GitHub", "boom")
        config = replace(pipeline_config, post_pr_comment=True)
        result = ReportPipeline(
            config, StaticScanner(sample_scan), comment_poster=poster, environ={}
        ).run()

        assert result.comment_url is None
        assert "boom" in result.warnings[0]
        assert result.decision.process_exit_code == 1

    def test_step_outputs(self, pipeline_config, sample_scan, tmp_path):
        """Test pipeline outputs and job summary are written."""
        output_file = tmp_path / "output"
        summary_file = tmp_path / "summary.md"
        environ = {"GITHUB_OUTPUT": str(output_file), "GITHUB_STEP_SUMMARY": str(summary_file)}

        ReportPipeline(pipeline_config, StaticScanner(sample_scan), environ=environ).run()

        outputs = output_file.read_text().splitlines()
        assert "scan_status=vulnerabilities_found" in outputs
        assert "vulnerability_count=2" in outputs
        assert "artifact_name=vulnerability-reports" in outputs
        assert "retention_days=30" in outputs
        assert "Status: vulnerabilities_found" in summary_file.read_text()

    def test_step_output_failure_is_warning(self, pipeline_config, sample_scan, tmp_path):
        """Test unwritable output files become warnings."""
        environ = {"GITHUB_OUTPUT": str(tmp_path / "missing" / "output")}
        result = ReportPipeline(pipeline_config, StaticScanner(sample_scan), environ=environ).run()

        assert len(result.warnings) == 1
        assert result.decision.vulnerability_count == 2

    def test_scan_failure_propagates(self, pipeline_config):
        """Test executor failures are not turned into a report."""
        scanner = MagicMock(spec=ScanExecutor)
        scanner.is_available.return_value = True
        scanner.version.return_value = None
        scanner.scan.side_effect = ScanException("python:3.12", "registry unreachable")

        with pytest.raises(ScanException):
            ReportPipeline(pipeline_config, scanner, environ={}).run()

    def test_unavailable_scanner(self, pipeline_config, sample_scan):
        """Test an unavailable executor fails before scanning."""
        scanner = StaticScanner(sample_scan)
        scanner.is_available = lambda: False

        with pytest.raises(ScanException) as exc:
            ReportPipeline(pipeline_config, scanner, environ={}).run()
        assert "not available" in str(exc.value)
        assert scanner.calls == []

    def test_scanner_version_logged(self, pipeline_config, sample_scan, caplog):
        """Test the executor version is logged when known."""
        scanner = StaticScanner(sample_scan)
        scanner.version = lambda: "0.58.1"

        with caplog.at_level(logging.INFO):
            ReportPipeline(pipeline_config, scanner, environ={}).run()
        assert "Using static 0.58.1" in caplog.text

    def test_ignore_unfixed_drops_unfixed(self, pipeline_config, basic_spec):
        """Test unfixed CRITICAL finding is not counted with ignore_unfixed."""

        scan = ScanResult(
            image_ref="python:3.12",
            scanned_at=SCANNED_AT,
            findings=(
                make_finding("CVE-1", Severity.CRITICAL),
                make_finding("CVE-2", Severity.LOW, fixed_version="1.2"),
            ),
        )
        config = replace(
            pipeline_config,
            basic=replace(basic_spec, ignore_unfixed=True),
        )
        result = ReportPipeline(config, StaticScanner(scan), environ={}).run()

        assert result.decision.scan_status == ScanStatus.SUCCESS
        assert result.decision.process_exit_code == 0
