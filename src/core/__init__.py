"""Core business logic for filtering, aggregating and deciding on scan results."""

from core.models import (
    AggregationResult,
    Decision,
    Finding,
    ScanResult,
    ScanStatus,
    Severity,
    SeverityFilterSpec,
)
from core.filtering import filter_findings
from core.aggregation import aggregate
from core.decision import emit

__all__ = [
    "AggregationResult",
    "Decision",
    "Finding",
    "ScanResult",
    "ScanStatus",
    "Severity",
    "SeverityFilterSpec",
    "filter_findings",
    "aggregate",
    "emit",
]
