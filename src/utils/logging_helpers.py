"""
Logging helper utilities for the imagescan-report CLI.

Provides consistent formatting for error messages, warnings, and the
end-of-run decision banner.
"""

import logging
from typing import List, Optional

from core.models import Decision


def _log_section(
    level: int,
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger],
    width: int,
) -> None:
    if logger is None:
        logger = logging.getLogger()

    logger.log(level, "=" * width)
    logger.log(level, title)
    for message in messages:
        logger.log(level, message or "")
    logger.log(level, "=" * width)


def log_error_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = 60
) -> None:
    """
    Log an error section with separator lines and multiple messages.

    Args:
        title: Title message for the error section
        messages: List of error messages to display
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters

    Examples:
        >>> log_error_section(
        ...     "Invalid configuration",
        ...     ["Invalid configuration for 'exit-code': ...", "Check the workflow inputs."]
        ... )
        ============================================================
        Invalid configuration
        Invalid configuration for 'exit-code': ...
        Check the workflow inputs.
        ============================================================
    """
    _log_section(logging.ERROR, title, messages, logger, width)


def log_warning_section(
    title: str,
    messages: List[str],
    logger: Optional[logging.Logger] = None,
    width: int = 60
) -> None:
    """
    Log a warning section with separator lines and multiple messages.

    Args:
        title: Title message for the warning section
        messages: List of warning messages to display
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters
    """
    _log_section(logging.WARNING, title, messages, logger, width)


def log_info_header(
    message: str,
    logger: Optional[logging.Logger] = None,
    width: int = 60,
    char: str = "="
) -> None:
    """
    Log an informational header with separator lines.

    Args:
        message: Header message to display
        logger: Logger instance (defaults to root logger if not provided)
        width: Width of separator line in characters
        char: Character to use for separator line
    """
    if logger is None:
        logger = logging.getLogger()

    logger.info(char * width)
    logger.info(message)
    logger.info(char * width)


def log_decision(
    decision: Decision,
    warnings: List[str],
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log the final run outcome, followed by any collaborator warnings.

    Args:
        decision: Final decision of the run
        warnings: Warnings raised by skipped or failed output paths
        logger: Logger instance (defaults to root logger if not provided)
    """
    if logger is None:
        logger = logging.getLogger()

    log_info_header(
        f"Scan status: {decision.scan_status.value} "
        f"({decision.vulnerability_count} vulnerabilities, exit code {decision.process_exit_code})",
        logger=logger,
    )
    if warnings:
        log_warning_section(
            f"Completed with {len(warnings)} warning(s):",
            [f"  - {w}" for w in warnings],
            logger=logger,
        )


__all__ = [
    "log_error_section",
    "log_warning_section",
    "log_info_header",
    "log_decision",
]
