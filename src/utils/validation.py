"""
Input validation utilities for imagescan-report.

Provides validation functions for image references, exit codes, boolean
flags and other raw configuration inputs.
"""

import re
from typing import Union

from constants import MAX_EXIT_CODE
from core.exceptions import ValidationException

TRUE_VALUES = {"true", "yes", "1", "on"}
FALSE_VALUES = {"false", "no", "0", "off", ""}


def validate_image_reference(image: str, field_name: str = "image-ref") -> str:
    """
    Validate and normalize container image reference.

    Args:
        image: Image reference to validate
        field_name: Field name for error messages

    Returns:
        Normalized image reference

    Raises:
        ValidationException: If image reference is invalid

    Examples:
        >>> validate_image_reference("python:3.12")
        'python:3.12'
        >>> validate_image_reference("ghcr.io/org/app@sha256:abc123")
        'ghcr.io/org/app@sha256:abc123'
        >>> validate_image_reference("invalid image!")
        ValidationException: ...
    """
    if not image or not image.strip():
        raise ValidationException("Image reference cannot be empty", field_name)

    image = image.strip()

    # Image refs end up on a subprocess command line
    if any(char in image for char in ['"', "'", ";", "&", "|", "$", "`", " ", "\n", "\r"]):
        raise ValidationException(
            f"Image reference contains invalid characters: {image}",
            field_name
        )

    # registry[:port]/repo[:tag][@digest]
    pattern = (
        r'^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*(:[0-9]+)?'
        r'(\/[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*)*'
        r'(:[a-zA-Z0-9\._\-]+)?'
        r'(@[a-z0-9]+:[a-fA-F0-9]+)?$'
    )
    if not re.match(pattern, image, re.IGNORECASE):
        raise ValidationException(
            f"Invalid image reference format: {image}",
            field_name
        )

    return image


def parse_exit_code(value: Union[str, int], field_name: str = "exit-code") -> int:
    """
    Parse an exit code given as text or integer.

    Args:
        value: Raw exit code (e.g., "1")
        field_name: Field name for error messages

    Returns:
        Exit code between 0 and 255

    Raises:
        ValidationException: If value is not an integer in range
    """
    if isinstance(value, bool):
        raise ValidationException(f"Exit code must be an integer, got {value!r}", field_name)

    try:
        code = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationException(f"Exit code must be an integer, got {value!r}", field_name)

    if code < 0 or code > MAX_EXIT_CODE:
        raise ValidationException(
            f"Exit code must be between 0 and {MAX_EXIT_CODE}, got {code}",
            field_name
        )
    return code


def parse_bool(value: Union[str, bool, None], field_name: str) -> bool:
    """
    Parse a boolean flag given as text (as workflow inputs are).

    Args:
        value: Raw value ("true", "false", "1", "0", ...)
        field_name: Field name for error messages

    Returns:
        Parsed boolean

    Raises:
        ValidationException: If value is not a recognized boolean
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False

    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValidationException(f"Expected true or false, got {value!r}", field_name)


def validate_positive_number(
    value: Union[str, int],
    field_name: str,
    min_value: int = 1,
    max_value: int = None,
) -> int:
    """
    Validate an integer value is within acceptable range.

    Args:
        value: Value to validate
        field_name: Field name for error messages
        min_value: Minimum acceptable value
        max_value: Maximum acceptable value (optional)

    Returns:
        Validated value

    Raises:
        ValidationException: If value is not an integer or out of range
    """
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationException(f"Expected an integer, got {value!r}", field_name)

    if number < min_value:
        raise ValidationException(
            f"Value must be >= {min_value}, got {number}",
            field_name
        )

    if max_value is not None and number > max_value:
        raise ValidationException(
            f"Value must be <= {max_value}, got {number}",
            field_name
        )

    return number


def validate_artifact_name(name: str) -> str:
    """
    Validate and normalize an artifact name.

    Args:
        name: Artifact name to validate

    Returns:
        Normalized artifact name

    Raises:
        ValidationException: If name is invalid
    """
    if not name or not name.strip():
        raise ValidationException("Artifact name cannot be empty", "artifact-name")

    name = name.strip()

    # Artifact names become directory names
    if any(char in name for char in ["/", "\\", "<", ">", ":", '"', "|", "?", "*"]) or name in (".", ".."):
        raise ValidationException(
            "Artifact name contains invalid characters",
            "artifact-name"
        )

    if len(name) > 100:
        raise ValidationException(
            "Artifact name too long (max 100 characters)",
            "artifact-name"
        )

    return name


__all__ = [
    "validate_image_reference",
    "parse_exit_code",
    "parse_bool",
    "validate_positive_number",
    "validate_artifact_name",
]
