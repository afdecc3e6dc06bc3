"""
GitHub Actions pipeline outputs.

Exposes step outputs through the GITHUB_OUTPUT file and appends to the
job summary through GITHUB_STEP_SUMMARY. Outside GitHub Actions both are
no-ops.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Mapping, Optional

from core.exceptions import IntegrationException

logger = logging.getLogger(__name__)


def _append(path: Path, text: str, what: str) -> None:
    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise IntegrationException("GitHub Actions", f"Cannot write {what} to {path}: {e}") from e


def format_output(name: str, value: str) -> str:
    """
    Format one step output in GITHUB_OUTPUT syntax.

    Multi-line values use the heredoc form with a random delimiter.

    Examples:
        >>> format_output("scan_status", "success")
        'scan_status=success\\n'
    """
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(outputs: Mapping[str, str], environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Write step outputs to the GITHUB_OUTPUT file.

    Args:
        outputs: Output names and values
        environ: Environment mapping (defaults to os.environ)

    Returns:
        True if written, False when not running in GitHub Actions

    Raises:
        IntegrationException: If the output file cannot be written
    """
    environ = os.environ if environ is None else environ
    output_path = environ.get("GITHUB_OUTPUT")
    if not output_path:
        logger.debug("GITHUB_OUTPUT not set, skipping step outputs")
        return False

    text = "".join(format_output(name, str(value)) for name, value in outputs.items())
    _append(Path(output_path), text, "step outputs")
    return True


def append_step_summary(markdown: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Append markdown to the job summary.

    Args:
        markdown: Markdown to append
        environ: Environment mapping (defaults to os.environ)

    Returns:
        True if written, False when not running in GitHub Actions

    Raises:
        IntegrationException: If the summary file cannot be written
    """
    environ = os.environ if environ is None else environ
    summary_path = environ.get("GITHUB_STEP_SUMMARY")
    if not summary_path:
        logger.debug("GITHUB_STEP_SUMMARY not set, skipping job summary")
        return False

    _append(Path(summary_path), markdown.rstrip("\n") + "\n", "job summary")
    return True


__all__ = ["format_output", "write_outputs", "append_step_summary"]
