"""
Exception hierarchy for imagescan-report.

Provides a standardized exception hierarchy for consistent error handling
across the application. All exceptions inherit from ImageScanException.
"""


class ImageScanException(Exception):
    """Base exception for all imagescan-report errors."""
    pass


class ScanException(ImageScanException):
    """Scan executor could not produce a result."""

    def __init__(self, image: str, reason: str):
        """
        Initialize scan exception.

        Args:
            image: Image reference that failed to scan
            reason: Reason for failure
        """
        self.image = image
        self.reason = reason
        super().__init__(f"Failed to scan {image}: {reason}")


class ValidationException(ImageScanException):
    """Input validation failed."""

    def __init__(self, message: str, field: str = None):
        """
        Initialize validation exception.

        Args:
            message: Validation error message
            field: Field that failed validation (optional)
        """
        self.field = field
        if field:
            super().__init__(f"Validation failed for {field}: {message}")
        else:
            super().__init__(f"Validation failed: {message}")


class ConfigurationException(ImageScanException):
    """Configuration is invalid or missing."""

    def __init__(self, message: str, key: str = None):
        """
        Initialize configuration exception.

        Args:
            message: What is wrong with the configuration
            key: Configuration key at fault (optional)
        """
        self.key = key
        if key:
            super().__init__(f"Invalid configuration for '{key}': {message}")
        else:
            super().__init__(f"Invalid configuration: {message}")


class IntegrationException(ImageScanException):
    """External integration/API failed."""

    def __init__(self, service: str, reason: str):
        """
        Initialize integration exception.

        Args:
            service: Service name that failed
            reason: Reason for failure
        """
        self.service = service
        self.reason = reason
        super().__init__(f"{service} integration failed: {reason}")


class OutputException(ImageScanException):
    """Report could not be persisted."""

    def __init__(self, report: str, reason: str):
        """
        Initialize output exception.

        Args:
            report: Report name (table, detailed, etc.)
            reason: Reason for failure
        """
        self.report = report
        self.reason = reason
        super().__init__(f"Failed to store {report} report: {reason}")


__all__ = [
    "ImageScanException",
    "ScanException",
    "ValidationException",
    "ConfigurationException",
    "IntegrationException",
    "OutputException",
]
