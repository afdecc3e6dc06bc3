"""
Rendered report value and output capability interfaces.

Renderers are plain functions producing RenderedReport values; the
capabilities below receive them. Capabilities are injected into the
pipeline so it can run without network or filesystem access in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from common import OUTPUT_CONFIGS


@dataclass(frozen=True)
class RenderedReport:
    """
    One rendered report body.

    Attributes:
        name: Report key (see common.OUTPUT_CONFIGS)
        filename: File name used when persisting the report
        content: Report text
        content_type: MIME type of the content
    """

    name: str
    filename: str
    content: str
    content_type: str = "text/plain"

    @property
    def payload(self) -> bytes:
        """Report content as UTF-8 bytes."""
        return self.content.encode("utf-8")

    @classmethod
    def for_output(cls, name: str, content: str) -> "RenderedReport":
        """Build a report using the file name and type registered for `name`."""
        config = OUTPUT_CONFIGS[name]
        return cls(
            name=name,
            filename=config["filename"],
            content=content,
            content_type=config["content_type"],
        )


class ArtifactStore(ABC):
    """
    Receives rendered reports for persistence.

    The store decides location and retention; the pipeline only supplies
    content.
    """

    @abstractmethod
    def store(self, report: RenderedReport) -> str:
        """
        Persist one report.

        Args:
            report: Report to persist

        Returns:
            Location of the stored report (path or URL)

        Raises:
            OutputException: If the report cannot be stored
        """
        pass


class CommentPoster(ABC):
    """Posts the PR comment rendering to a code review platform."""

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check whether posting can be attempted.

        Returns:
            True when credentials and a target pull request are known
        """
        pass

    def unavailable_reason(self) -> Optional[str]:
        """
        Explain why posting cannot be attempted (optional).

        Returns:
            Human-readable reason, or None
        """
        return None

    @abstractmethod
    def post(self, body: str) -> str:
        """
        Post (or update) the comment.

        Args:
            body: Markdown comment body

        Returns:
            URL of the posted comment

        Raises:
            IntegrationException: If posting fails
        """
        pass


__all__ = [
    "RenderedReport",
    "ArtifactStore",
    "CommentPoster",
]
