"""
Domain models for vulnerability reporting.

This module defines the core data structures used throughout the application.
All models are immutable (frozen dataclasses) to prevent accidental mutation.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from core.exceptions import ConfigurationException, ValidationException


class Severity(str, Enum):
    """Vulnerability severity levels, highest first."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def ordered(cls) -> list["Severity"]:
        """Return severity levels in display order."""
        return [cls.CRITICAL, cls.HIGH, cls.MEDIUM, cls.LOW, cls.UNKNOWN]

    @classmethod
    def parse(cls, value: Optional[str]) -> "Severity":
        """
        Map a scanner severity string onto a Severity.

        Unrecognized or missing values become UNKNOWN so that a single bad
        record never blocks reporting on the rest.

        Args:
            value: Raw severity string (case-insensitive)

        Returns:
            Matching Severity, or Severity.UNKNOWN
        """
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def is_recognized(cls, value: Optional[str]) -> bool:
        """Check whether a raw severity string names a known level."""
        return isinstance(value, str) and value.strip().upper() in cls._value2member_map_

    @property
    def rank(self) -> int:
        """Sort key: 0 for CRITICAL up to 4 for UNKNOWN."""
        return Severity.ordered().index(self)


class ScanStatus(str, Enum):
    """Overall outcome of a run, exposed verbatim to the calling pipeline."""

    SUCCESS = "success"
    VULNERABILITIES_FOUND = "vulnerabilities_found"


@dataclass(frozen=True)
class Finding:
    """
    One reported vulnerability instance.

    Attributes:
        id: Vulnerability identifier (e.g., CVE-2024-1234)
        package_name: Affected package
        installed_version: Version found in the image
        severity: Severity level
        fixed_version: First fixed version, None when unfixed
        title: Short title (may be empty)
        description: Long description (may be empty)
        target: Scanned component or layer (e.g., "python:3.12 (debian 12.8)")
        primary_url: Advisory link (optional)
        status: Vendor fix status reported by the scanner (optional)
    """

    id: str
    package_name: str
    installed_version: str
    severity: Severity
    fixed_version: Optional[str] = None
    title: str = ""
    description: str = ""
    target: str = ""
    primary_url: Optional[str] = None
    status: Optional[str] = None

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValidationException("Vulnerability id cannot be empty", "id")
        # Raw severity strings are normalized; unrecognized ones become UNKNOWN
        if not isinstance(self.severity, Severity):
            object.__setattr__(self, "severity", Severity.parse(self.severity))

    @property
    def is_fixed(self) -> bool:
        """Whether a remediated package version is available."""
        return bool(self.fixed_version)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "severity": self.severity.value,
            "package_name": self.package_name,
            "installed_version": self.installed_version,
            "fixed_version": self.fixed_version,
            "title": self.title,
            "description": self.description,
            "target": self.target,
            "primary_url": self.primary_url,
            "status": self.status,
        }


@dataclass(frozen=True)
class ScanResult:
    """
    Full scanner output for one image reference.

    Attributes:
        image_ref: Scanned image reference
        scanned_at: When the scan was performed
        findings: Findings in scanner order (not sorted)
    """

    image_ref: str
    scanned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    findings: tuple[Finding, ...] = ()

    def __post_init__(self):
        if not self.image_ref or not self.image_ref.strip():
            raise ValidationException("Image reference cannot be empty", "image_ref")
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.findings, tuple):
            object.__setattr__(self, "findings", tuple(self.findings))


@dataclass(frozen=True)
class SeverityFilterSpec:
    """
    Which findings a report covers.

    Attributes:
        severities: Severities to keep (must be non-empty)
        ignore_unfixed: Drop findings without a fixed version
    """

    severities: frozenset[Severity]
    ignore_unfixed: bool = False

    def __post_init__(self):
        if not self.severities:
            raise ConfigurationException("At least one severity must be selected", "severity")
        if not isinstance(self.severities, frozenset):
            object.__setattr__(self, "severities", frozenset(self.severities))

    @classmethod
    def from_string(cls, value: str, ignore_unfixed: bool = False, key: str = "severity") -> "SeverityFilterSpec":
        """
        Parse a comma-separated severity list (e.g., "CRITICAL,HIGH").

        Args:
            value: Comma-separated severity names
            ignore_unfixed: Drop findings without a fixed version
            key: Configuration key for error messages

        Returns:
            SeverityFilterSpec

        Raises:
            ConfigurationException: If the list is empty or names an unknown severity
        """
        names = [part.strip() for part in (value or "").split(",") if part.strip()]
        if not names:
            raise ConfigurationException("At least one severity must be selected", key)

        unknown = [name for name in names if not Severity.is_recognized(name)]
        if unknown:
            raise ConfigurationException(
                f"Unknown severity: {', '.join(unknown)}. "
                f"Valid severities: {', '.join(s.value for s in Severity.ordered())}",
                key,
            )

        return cls(
            severities=frozenset(Severity.parse(name) for name in names),
            ignore_unfixed=ignore_unfixed,
        )

    def ordered_severities(self) -> list[Severity]:
        """Selected severities in display order."""
        return [s for s in Severity.ordered() if s in self.severities]

    def __str__(self) -> str:
        names = ",".join(s.value for s in self.ordered_severities())
        return f"{names} (ignore unfixed)" if self.ignore_unfixed else names


@dataclass(frozen=True)
class AggregationResult:
    """
    Counts derived from one filtered finding sequence.

    Attributes:
        counts_by_severity: Count per severity, every severity present
        total_count: Sum of all counts
        status: SUCCESS iff total_count is 0
    """

    counts_by_severity: dict[Severity, int]
    total_count: int
    status: ScanStatus

    def count(self, severity: Severity) -> int:
        """Count for one severity (0 when absent)."""
        return self.counts_by_severity.get(severity, 0)

    def to_dict(self) -> dict[str, int]:
        """Counts keyed by severity name, in display order."""
        return {s.value: self.count(s) for s in Severity.ordered()}


@dataclass(frozen=True)
class Decision:
    """
    What the calling pipeline sees at the end of a run.

    Attributes:
        scan_status: Outcome of the scan
        vulnerability_count: Number of findings counted towards the outcome
        process_exit_code: Exit code the process should terminate with
    """

    scan_status: ScanStatus
    vulnerability_count: int
    process_exit_code: int

    @property
    def failed(self) -> bool:
        """Whether the process should signal failure."""
        return self.process_exit_code != 0

    def to_outputs(self) -> dict[str, str]:
        """Pipeline output values as strings."""
        return {
            "scan_status": self.scan_status.value,
            "vulnerability_count": str(self.vulnerability_count),
        }
