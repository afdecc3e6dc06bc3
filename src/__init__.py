"""
imagescan-report - Container Image Vulnerability Report Tool

Turns a container image vulnerability scan into table, detailed, summary and
pull request comment reports, plus a pass/fail decision for CI pipelines.
"""

__version__ = "1.0.0"
__author__ = "imagescan-report contributors"

from core.models import (
    AggregationResult,
    Decision,
    Finding,
    ScanResult,
    ScanStatus,
    Severity,
    SeverityFilterSpec,
)

__all__ = [
    "AggregationResult",
    "Decision",
    "Finding",
    "ScanResult",
    "ScanStatus",
    "Severity",
    "SeverityFilterSpec",
]
