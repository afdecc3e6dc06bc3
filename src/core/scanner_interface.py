"""
Scanner plugin interface for scan executors.

Defines the contract for anything that can produce a ScanResult for an
image (a Trivy run, a saved Trivy report, a test double).
"""

from abc import ABC, abstractmethod
from typing import Optional

from core.models import ScanResult, Severity


class ScanExecutor(ABC):
    """
    Abstract base class for scan executors.

    Executors are opaque producers: registry login, retries and the
    vulnerability database are their own concern.
    """

    @abstractmethod
    def name(self) -> str:
        """
        Return the executor name.

        Returns:
            Executor identifier (e.g., "trivy", "trivy-report-file")
        """
        pass

    @abstractmethod
    def scan(
        self,
        image_ref: str,
        severities: frozenset[Severity],
        ignore_unfixed: bool = False,
    ) -> ScanResult:
        """
        Produce the scan result for an image.

        Args:
            image_ref: Image reference to scan
            severities: Severities the pipeline will report on (a hint;
                executors may return more)
            ignore_unfixed: Whether the pipeline will drop unfixed findings
                (a hint; the pipeline filters regardless)

        Returns:
            ScanResult with findings in scanner order

        Raises:
            ScanException: If no result can be produced
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this executor can run.

        Returns:
            True if executor can be used, False otherwise
        """
        pass

    def version(self) -> Optional[str]:
        """
        Get executor version (optional).

        Returns:
            Version string if available, None otherwise
        """
        return None


__all__ = ["ScanExecutor"]
