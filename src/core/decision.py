"""
Decision emitter: maps aggregation results onto pipeline outputs and an exit code.

What happened (scan_status, vulnerability_count) is reported identically
for strict and advisory gating; only process_exit_code differs.
"""

import logging

from constants import SUCCESS_EXIT_CODE
from core.models import AggregationResult, Decision, ScanStatus

logger = logging.getLogger(__name__)


def emit(aggregation: AggregationResult, requested_exit_code: int) -> Decision:
    """
    Build the final decision for a run.

    Args:
        aggregation: Counts and status for the basic-filtered findings
        requested_exit_code: Exit code the caller wants when vulnerabilities are found

    Returns:
        Decision whose exit code is the requested one only when
        vulnerabilities were found, and success otherwise
    """
    if aggregation.status == ScanStatus.VULNERABILITIES_FOUND:
        exit_code = requested_exit_code
    else:
        exit_code = SUCCESS_EXIT_CODE

    decision = Decision(
        scan_status=aggregation.status,
        vulnerability_count=aggregation.total_count,
        process_exit_code=exit_code,
    )
    logger.debug(
        f"Decision: status={decision.scan_status.value} "
        f"count={decision.vulnerability_count} exit_code={decision.process_exit_code}"
    )
    return decision


__all__ = ["emit"]
