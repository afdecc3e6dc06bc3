"""
Pytest fixtures and configuration for imagescan-report tests.

Provides shared fixtures and test utilities across the test suite.
"""

import pytest
from datetime import datetime, timezone

from core.config import PipelineConfig
from core.models import (
    Finding,
    ScanResult,
    Severity,
    SeverityFilterSpec,
)


SCANNED_AT = datetime(2025, 5, 17, 20, 51, 7, tzinfo=timezone.utc)


def make_finding(
    vuln_id: str,
    severity: Severity,
    fixed_version=None,
    package_name: str = "openssl",
    title: str = "",
    target: str = "python:3.12 (debian 12.8)",
) -> Finding:
    """Build a finding with sensible defaults."""
    return Finding(
        id=vuln_id,
        package_name=package_name,
        installed_version="1.0.0",
        severity=severity,
        fixed_version=fixed_version,
        title=title,
        description=f"Description of {vuln_id}",
        target=target,
    )


@pytest.fixture
def sample_findings():
    """Mixed findings in scanner (unsorted) order."""
    return [
        make_finding("CVE-2024-0003", Severity.HIGH, fixed_version="3.0.16", title="Heap overflow"),
        make_finding("CVE-2024-0001", Severity.CRITICAL, title="Remote code execution"),
        make_finding("CVE-2024-0005", Severity.LOW, fixed_version="1.2", package_name="zlib"),
        make_finding("CVE-2024-0002", Severity.MEDIUM, package_name="curl"),
        make_finding("CVE-2024-0004", Severity.UNKNOWN, package_name="bash"),
    ]


@pytest.fixture
def sample_scan(sample_findings):
    """Scan result holding the sample findings."""
    return ScanResult(
        image_ref="python:3.12",
        scanned_at=SCANNED_AT,
        findings=tuple(sample_findings),
    )


@pytest.fixture
def empty_scan():
    """Scan result with no findings."""
    return ScanResult(image_ref="cgr.dev/chainguard/python:latest", scanned_at=SCANNED_AT)


@pytest.fixture
def basic_spec():
    """Basic filter: CRITICAL and HIGH."""
    return SeverityFilterSpec(frozenset({Severity.CRITICAL, Severity.HIGH}))


@pytest.fixture
def detailed_spec():
    """Detailed filter: every severity."""
    return SeverityFilterSpec(frozenset(Severity.ordered()))


@pytest.fixture
def pipeline_config(basic_spec, detailed_spec, tmp_path):
    """Configuration for pipeline tests."""
    return PipelineConfig(
        image_ref="python:3.12",
        basic=basic_spec,
        detailed=detailed_spec,
        requested_exit_code=1,
        post_pr_comment=False,
        output_dir=tmp_path,
    )


@pytest.fixture
def trivy_report():
    """Minimal Trivy JSON report (schema version 2)."""
    return {
        "SchemaVersion": 2,
        "CreatedAt": "2025-05-17T13:51:07.592255-07:00",
        "ArtifactName": "python:3.12",
        "ArtifactType": "container_image",
        "Results": [
            {
                "Target": "python:3.12 (debian 12.8)",
                "Class": "os-pkgs",
                "Type": "debian",
                "Vulnerabilities": [
                    {
                        "VulnerabilityID": "CVE-2024-99999",
                        "PkgName": "openssl",
                        "InstalledVersion": "3.0.15-1~deb12u1",
                        "FixedVersion": "3.0.16-1~deb12u1",
                        "Status": "fixed",
                        "PrimaryURL": "https://avd.aquasec.com/nvd/cve-2024-99999",
                        "Title": "Test vulnerability",
                        "Description": "A test vulnerability.",
                        "Severity": "HIGH",
                    },
                    {
                        "VulnerabilityID": "CVE-2024-88888",
                        "PkgName": "libc6",
                        "InstalledVersion": "2.36-9",
                        "FixedVersion": "",
                        "Status": "affected",
                        "Severity": "CRITICAL",
                    },
                ],
            },
            {
                "Target": "usr/local/lib/python3.12/site-packages",
                "Class": "lang-pkgs",
                "Type": "python-pkg",
                "Vulnerabilities": [
                    {
                        "VulnerabilityID": "GHSA-xxxx-yyyy-zzzz",
                        "PkgName": "requests",
                        "InstalledVersion": "2.31.0",
                        "FixedVersion": "2.32.0",
                        "Severity": "MEDIUM",
                    },
                ],
            },
        ],
    }
