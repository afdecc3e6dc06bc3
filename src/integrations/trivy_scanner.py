"""
Trivy scan executor implementations.

TrivyScanner runs Aqua Security Trivy against an image; TrivyReportFile
reads a Trivy JSON report produced by an earlier step. Both map Trivy's
JSON output onto a ScanResult.
"""

import json
import logging
import re
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from constants import TRIVY_TIMEOUT, VERSION_CHECK_TIMEOUT
from core.exceptions import ScanException
from core.models import Finding, ScanResult, Severity
from core.scanner_interface import ScanExecutor

logger = logging.getLogger(__name__)

# Go emits up to nanosecond precision; datetime accepts microseconds
_FRACTION_PATTERN = re.compile(r"(\.\d{6})\d+")


def parse_created_at(value: Optional[str]) -> Optional[datetime]:
    """
    Parse Trivy's CreatedAt timestamp.

    Args:
        value: RFC 3339 timestamp (e.g., "2025-05-17T13:51:07.592255-07:00")

    Returns:
        Timezone-aware datetime, or None if missing or unparseable
    """
    if not value or not isinstance(value, str):
        return None

    text = _FRACTION_PATTERN.sub(r"\1", value.strip())
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparseable Trivy CreatedAt: {value}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_finding(vuln: dict, target: str, image_ref: str) -> Optional[Finding]:
    """Map one Trivy vulnerability entry onto a Finding (None if unusable)."""
    vuln_id = vuln.get("VulnerabilityID")
    if not vuln_id or not isinstance(vuln_id, str):
        logger.warning(f"Skipping vulnerability without an id in {image_ref} ({target})")
        return None

    raw_severity = vuln.get("Severity")
    if not Severity.is_recognized(raw_severity):
        logger.warning(
            f"Unrecognized severity {raw_severity!r} for {vuln_id} in {image_ref}, treating as UNKNOWN"
        )

    return Finding(
        id=vuln_id,
        package_name=vuln.get("PkgName") or "",
        installed_version=vuln.get("InstalledVersion") or "",
        severity=Severity.parse(raw_severity),
        fixed_version=vuln.get("FixedVersion") or None,
        title=vuln.get("Title") or "",
        description=vuln.get("Description") or "",
        target=target,
        primary_url=vuln.get("PrimaryURL") or None,
        status=vuln.get("Status") or None,
    )


def parse_trivy_report(data: dict, image_ref: Optional[str] = None) -> ScanResult:
    """
    Parse Trivy JSON output (schema version 2) into a ScanResult.

    Findings keep Trivy's order: results in order, vulnerabilities in
    order within each result. Malformed entries are skipped or degraded
    with a warning rather than failing the whole report.

    Args:
        data: Parsed Trivy JSON
        image_ref: Image reference (defaults to the report's ArtifactName)

    Returns:
        ScanResult

    Raises:
        ScanException: If the report is not a Trivy report or names no image
    """
    if not isinstance(data, dict):
        raise ScanException(image_ref or "<unknown>", "Trivy report is not a JSON object")

    image_ref = image_ref or data.get("ArtifactName")
    if not image_ref:
        raise ScanException("<unknown>", "Trivy report has no ArtifactName and no image was given")

    results = data.get("Results") or []
    if not isinstance(results, list):
        logger.warning(f"Unexpected Trivy Results format for {image_ref}: {type(results)}")
        results = []

    findings = []
    for result in results:
        if not isinstance(result, dict):
            logger.warning(f"Malformed result entry in {image_ref}, skipping")
            continue

        target = result.get("Target") or ""
        for vuln in result.get("Vulnerabilities") or []:
            if not isinstance(vuln, dict):
                logger.warning(f"Malformed vulnerability entry in {image_ref} ({target}), skipping")
                continue
            finding = _parse_finding(vuln, target, image_ref)
            if finding is not None:
                findings.append(finding)

    scanned_at = parse_created_at(data.get("CreatedAt")) or datetime.now(timezone.utc)
    logger.debug(f"Parsed {len(findings)} findings for {image_ref}")

    return ScanResult(image_ref=image_ref, scanned_at=scanned_at, findings=tuple(findings))


class TrivyScanner(ScanExecutor):
    """
    Runs Trivy against an image.

    Trivy is asked for every severity the pipeline reports on but never
    given --ignore-unfixed, so unfixed handling stays with the pipeline's
    filters.
    """

    def __init__(self, trivy_command: str = "trivy", timeout: int = TRIVY_TIMEOUT):
        """
        Initialize Trivy scanner.

        Args:
            trivy_command: Trivy executable (default: "trivy")
            timeout: Scan timeout in seconds
        """
        self.trivy_command = trivy_command
        self.timeout = timeout

    def name(self) -> str:
        """Return executor name."""
        return "trivy"

    def is_available(self) -> bool:
        """Check if Trivy is available."""
        try:
            result = subprocess.run(
                [self.trivy_command, "--version"],
                capture_output=True,
                timeout=VERSION_CHECK_TIMEOUT,
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False

    def version(self) -> Optional[str]:
        """Get Trivy version."""
        try:
            result = subprocess.run(
                [self.trivy_command, "--version"],
                capture_output=True,
                text=True,
                timeout=VERSION_CHECK_TIMEOUT,
            )
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return None

        if result.returncode != 0:
            return None
        for line in result.stdout.strip().split("\n"):
            if line.lower().startswith("version"):
                return line.split(":", 1)[-1].strip()
        return None

    def build_command(self, image_ref: str, severities: frozenset[Severity]) -> list[str]:
        """Build the Trivy command line for an image."""
        ordered = [s.value for s in Severity.ordered() if s in severities]
        return [
            self.trivy_command,
            "image",
            "--format", "json",
            "--quiet",
            "--severity", ",".join(ordered),
            image_ref,
        ]

    def scan(
        self,
        image_ref: str,
        severities: frozenset[Severity],
        ignore_unfixed: bool = False,
    ) -> ScanResult:
        """
        Scan an image with Trivy.

        Args:
            image_ref: Image reference to scan
            severities: Severities to request from Trivy
            ignore_unfixed: Ignored here; the pipeline filters unfixed findings

        Returns:
            ScanResult

        Raises:
            ScanException: If Trivy fails, times out or emits invalid JSON
        """
        cmd = self.build_command(image_ref, severities)
        logger.info(f"Scanning {image_ref} with Trivy...")
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError:
            raise ScanException(image_ref, f"{self.trivy_command} is required but not found in PATH") from None
        except subprocess.TimeoutExpired:
            raise ScanException(image_ref, f"Trivy scan timed out after {self.timeout}s") from None
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise ScanException(image_ref, f"Trivy scan failed (exit {e.returncode}): {stderr}") from e

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ScanException(image_ref, f"Invalid Trivy output: {e}") from e

        return parse_trivy_report(data, image_ref)


class TrivyReportFile(ScanExecutor):
    """Reads a Trivy JSON report written by an earlier pipeline step."""

    def __init__(self, path: Path):
        """
        Initialize report file executor.

        Args:
            path: Trivy JSON report (trivy image --format json --output ...)
        """
        self.path = path

    def name(self) -> str:
        """Return executor name."""
        return "trivy-report-file"

    def is_available(self) -> bool:
        """Check the report file exists."""
        return self.path.is_file()

    def scan(
        self,
        image_ref: str,
        severities: frozenset[Severity],
        ignore_unfixed: bool = False,
    ) -> ScanResult:
        """
        Load the saved report.

        Args:
            image_ref: Image reference the report belongs to
            severities: Unused; the report is taken as-is
            ignore_unfixed: Unused; the pipeline filters unfixed findings

        Returns:
            ScanResult

        Raises:
            ScanException: If the file cannot be read or parsed
        """
        logger.info(f"Loading Trivy report from {self.path}")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ScanException(image_ref, f"Cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ScanException(image_ref, f"Invalid Trivy report {self.path}: {e}") from e

        return parse_trivy_report(data, image_ref)


__all__ = [
    "TrivyScanner",
    "TrivyReportFile",
    "parse_trivy_report",
    "parse_created_at",
]
