"""
Command-line interface for imagescan-report.

Scans a container image with Trivy (or reads a saved Trivy report),
writes table, detailed, summary and PR comment reports, optionally posts
the PR comment, and exits with the configured gating code.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from constants import CONFIGURATION_ERROR_EXIT_CODE, SCAN_ERROR_EXIT_CODE
from common import OUTPUT_CONFIGS
from core.config import PipelineConfig, load_config
from core.exceptions import ConfigurationException, ScanException, ValidationException
from core.orchestrator import ReportPipeline
from core.scanner_interface import ScanExecutor
from integrations.artifact_store import LocalArtifactStore
from integrations.github_comments import GitHubCommentPoster
from integrations.trivy_scanner import TrivyReportFile, TrivyScanner
from utils.logging_helpers import log_decision, log_error_section

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(args: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Flags default to None so that unset flags fall through to the config
    file, INPUT_* environment variables and built-in defaults.
    """
    parser = argparse.ArgumentParser(
        description="imagescan-report - Container Image Vulnerability Report Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    io_group = parser.add_argument_group("input/output")
    filter_group = parser.add_argument_group("severity filtering")
    gating_group = parser.add_argument_group("gating and publishing")

    # Input/Output arguments
    io_group.add_argument("image_ref", nargs="?", default=None, help="Image reference to scan.")
    io_group.add_argument("-i", "--input", type=str, default=None, help="Saved Trivy JSON report (skip scanning).")
    io_group.add_argument("--config", type=Path, default=None, help="YAML configuration file.")
    io_group.add_argument("--output-dir", type=str, default=None, help="Output directory.")
    io_group.add_argument("--artifact-name", type=str, default=None, help="Artifact bundle name.")
    io_group.add_argument("--retention-days", type=str, default=None, help="Artifact retention in days.")

    # Filtering options
    filter_group.add_argument("-s", "--severity", type=str, default=None, help="Severities counted for status (comma-separated).")
    filter_group.add_argument("--detailed-severity", type=str, default=None, help="Severities in the detailed report (comma-separated).")
    filter_group.add_argument("--ignore-unfixed", action="store_const", const="true", default=None, help="Ignore findings without a fix.")

    # Gating and publishing
    gating_group.add_argument("--exit-code", type=str, default=None, help="Exit code when vulnerabilities are found.")
    gating_group.add_argument("--post-pr-comment", action="store_const", const="true", default=None, help="Post the report as a PR comment.")
    gating_group.add_argument("--github-token", type=str, default=None, help="GitHub token for PR comments.")

    # Other options
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")

    return parser.parse_args(args)


def build_overrides(args: argparse.Namespace) -> dict[str, Optional[str]]:
    """Map CLI flags onto configuration input keys."""
    return {
        "image-ref": args.image_ref,
        "input": args.input,
        "output-dir": args.output_dir,
        "artifact-name": args.artifact_name,
        "retention-days": args.retention_days,
        "severity": args.severity,
        "detailed-severity": args.detailed_severity,
        "ignore-unfixed": args.ignore_unfixed,
        "exit-code": args.exit_code,
        "post-pr-comment": args.post_pr_comment,
        "github-token": args.github_token,
    }


def build_scanner(config: PipelineConfig) -> ScanExecutor:
    """Choose the scan executor for a configuration."""
    if config.input_file:
        return TrivyReportFile(config.input_file)
    return TrivyScanner()


def build_pipeline(config: PipelineConfig) -> ReportPipeline:
    """Wire the pipeline with its production collaborators."""
    comment_poster = None
    if config.post_pr_comment:
        comment_poster = GitHubCommentPoster.from_environment(config.github_token)

    return ReportPipeline(
        config=config,
        scanner=build_scanner(config),
        artifact_store=LocalArtifactStore(config.output_dir, config.artifact_name),
        comment_poster=comment_poster,
    )


def run(args: Optional[list[str]] = None) -> int:
    """
    Run the report pipeline and return the process exit code.

    Args:
        args: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code: the decision's exit code, 1 for scan failures, 2 for
        configuration errors
    """
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    try:
        config = load_config(build_overrides(parsed), parsed.config)
    except (ConfigurationException, ValidationException) as e:
        log_error_section(
            "Invalid configuration.",
            [str(e), "No reports were generated."],
            logger=logger,
        )
        return CONFIGURATION_ERROR_EXIT_CODE

    pipeline = build_pipeline(config)
    try:
        result = pipeline.run()
    except ScanException as e:
        log_error_section(
            "Scan failed.",
            [str(e), "Check that the image exists and registry credentials are configured."],
            logger=logger,
        )
        return SCAN_ERROR_EXIT_CODE

    for name, location in result.artifacts.items():
        logger.info(f"  - {OUTPUT_CONFIGS[name]['description']}: {location}")

    log_decision(result.decision, list(result.warnings), logger=logger)
    return result.decision.process_exit_code


def main():
    """Main entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
