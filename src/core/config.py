"""
Pipeline configuration.

Raw inputs are merged from defaults, GitHub Actions style INPUT_*
environment variables, an optional YAML file and command-line flags
(later sources win), then validated once into an immutable
PipelineConfig that is passed explicitly to the pipeline.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import yaml

from constants import (
    DEFAULT_ARTIFACT_NAME,
    DEFAULT_DETAILED_SEVERITIES,
    DEFAULT_EXIT_CODE,
    DEFAULT_IGNORE_UNFIXED,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RETENTION_DAYS,
    DEFAULT_SEVERITIES,
)
from core.exceptions import ConfigurationException, ValidationException
from core.models import SeverityFilterSpec
from utils.validation import (
    parse_bool,
    parse_exit_code,
    validate_artifact_name,
    validate_image_reference,
    validate_positive_number,
)

logger = logging.getLogger(__name__)

INPUT_DEFAULTS = {
    "image-ref": None,
    "input": None,
    "severity": DEFAULT_SEVERITIES,
    "detailed-severity": DEFAULT_DETAILED_SEVERITIES,
    "ignore-unfixed": str(DEFAULT_IGNORE_UNFIXED).lower(),
    "exit-code": str(DEFAULT_EXIT_CODE),
    "post-pr-comment": "false",
    "github-token": None,
    "artifact-name": DEFAULT_ARTIFACT_NAME,
    "retention-days": str(DEFAULT_RETENTION_DAYS),
    "output-dir": DEFAULT_OUTPUT_DIR,
}
"""Recognized input keys and their defaults (as raw strings)."""


@dataclass(frozen=True)
class PipelineConfig:
    """
    Validated, immutable configuration for one pipeline run.

    Attributes:
        image_ref: Image reference to scan/report on
        basic: Filter driving counts, status, table and summary
        detailed: Filter driving the detailed report
        requested_exit_code: Exit code to use when vulnerabilities are found
        post_pr_comment: Whether to post the PR comment
        artifact_name: Artifact bundle name (pass-through)
        retention_days: Artifact retention (pass-through)
        output_dir: Directory the artifact bundle is written under
        input_file: Saved Trivy JSON report to read instead of scanning
        github_token: Token for posting the PR comment
    """

    image_ref: str
    basic: SeverityFilterSpec
    detailed: SeverityFilterSpec
    requested_exit_code: int = DEFAULT_EXIT_CODE
    post_pr_comment: bool = False
    artifact_name: str = DEFAULT_ARTIFACT_NAME
    retention_days: int = DEFAULT_RETENTION_DAYS
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    input_file: Optional[Path] = None
    github_token: Optional[str] = field(default=None, repr=False)

    @property
    def detailed_covers_basic(self) -> bool:
        """Whether every basic severity is also in the detailed report."""
        return self.basic.severities <= self.detailed.severities

    @classmethod
    def from_inputs(cls, inputs: Mapping[str, Optional[str]]) -> "PipelineConfig":
        """
        Validate raw inputs into a PipelineConfig.

        Args:
            inputs: Raw input values keyed as in INPUT_DEFAULTS

        Returns:
            PipelineConfig

        Raises:
            ConfigurationException: If any input is missing or invalid
        """
        raw = dict(INPUT_DEFAULTS)
        raw.update({k: v for k, v in inputs.items() if v is not None})

        unknown = set(raw) - set(INPUT_DEFAULTS)
        if unknown:
            raise ConfigurationException(f"Unknown input(s): {', '.join(sorted(unknown))}")

        try:
            ignore_unfixed = parse_bool(raw["ignore-unfixed"], "ignore-unfixed")
            image_ref = validate_image_reference(raw["image-ref"] or "", "image-ref")
            config = cls(
                image_ref=image_ref,
                basic=SeverityFilterSpec.from_string(raw["severity"], ignore_unfixed, key="severity"),
                detailed=SeverityFilterSpec.from_string(
                    raw["detailed-severity"], ignore_unfixed, key="detailed-severity"
                ),
                requested_exit_code=parse_exit_code(raw["exit-code"], "exit-code"),
                post_pr_comment=parse_bool(raw["post-pr-comment"], "post-pr-comment"),
                artifact_name=validate_artifact_name(raw["artifact-name"]),
                retention_days=validate_positive_number(
                    raw["retention-days"], "retention-days", min_value=1, max_value=90
                ),
                output_dir=Path(raw["output-dir"]),
                input_file=Path(raw["input"]) if raw["input"] else None,
                github_token=raw["github-token"] or None,
            )
        except ValidationException as e:
            raise ConfigurationException(str(e), e.field) from e

        if not config.detailed_covers_basic:
            logger.warning(
                f"Detailed severities ({config.detailed}) do not include every "
                f"basic severity ({config.basic}); the detailed report will not "
                f"contain all counted findings"
            )
        return config


def _normalize_key(key: str) -> str:
    return key.strip().lower().replace("_", "-")


def inputs_from_environment(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """
    Read GitHub Actions style inputs (INPUT_IMAGE-REF, INPUT_EXIT_CODE, ...).

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Raw inputs keyed as in INPUT_DEFAULTS; unrelated INPUT_* variables are ignored
    """
    environ = os.environ if environ is None else environ
    inputs = {}
    for name, value in environ.items():
        if not name.startswith("INPUT_"):
            continue
        key = _normalize_key(name[len("INPUT_"):])
        if key in INPUT_DEFAULTS and value != "":
            inputs[key] = value

    if "github-token" not in inputs and environ.get("GITHUB_TOKEN"):
        inputs["github-token"] = environ["GITHUB_TOKEN"]
    return inputs


def inputs_from_yaml(path: Path) -> dict[str, str]:
    """
    Read inputs from a YAML configuration file.

    Example file:
        image-ref: python:3.12
        severity: [CRITICAL, HIGH]
        ignore-unfixed: true
        exit-code: 1

    Args:
        path: YAML file path

    Returns:
        Raw inputs keyed as in INPUT_DEFAULTS (lists are joined with commas)

    Raises:
        ConfigurationException: If the file is missing, unparseable or has unknown keys
    """
    if not path.exists():
        raise ConfigurationException(f"Config file not found: {path}", "config")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationException(f"Failed to parse {path}: {e}", "config") from e

    if not isinstance(data, dict):
        raise ConfigurationException(f"Expected a mapping at the top of {path}", "config")

    inputs = {}
    for key, value in data.items():
        normalized = _normalize_key(str(key))
        if normalized not in INPUT_DEFAULTS:
            raise ConfigurationException(f"Unknown key '{key}' in {path}", "config")
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        elif isinstance(value, bool):
            value = str(value).lower()
        inputs[normalized] = str(value)
    return inputs


def load_config(
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PipelineConfig:
    """
    Merge all configuration sources and validate them.

    Precedence, lowest first: defaults, environment, YAML file, overrides.

    Args:
        overrides: Explicit values (typically from CLI flags); None values are ignored
        config_file: Optional YAML configuration file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        PipelineConfig

    Raises:
        ConfigurationException: If the merged configuration is invalid
    """
    inputs = inputs_from_environment(environ)
    if config_file:
        inputs.update(inputs_from_yaml(config_file))
    if overrides:
        inputs.update({k: v for k, v in overrides.items() if v is not None})
    return PipelineConfig.from_inputs(inputs)


__all__ = [
    "INPUT_DEFAULTS",
    "PipelineConfig",
    "inputs_from_environment",
    "inputs_from_yaml",
    "load_config",
]
