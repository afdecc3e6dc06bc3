"""
Local directory artifact store.

Writes each rendered report into one directory per artifact bundle so a
later workflow step (e.g., actions/upload-artifact) can upload it with the
configured name and retention.
"""

import logging
from pathlib import Path

from core.exceptions import OutputException
from outputs.base import ArtifactStore, RenderedReport

logger = logging.getLogger(__name__)


class LocalArtifactStore(ArtifactStore):
    """Stores reports as files under <output_dir>/<artifact_name>/."""

    def __init__(self, output_dir: Path, artifact_name: str):
        """
        Initialize local artifact store.

        Args:
            output_dir: Base output directory
            artifact_name: Bundle name, used as the directory name
        """
        self.output_dir = Path(output_dir)
        self.artifact_name = artifact_name

    @property
    def bundle_dir(self) -> Path:
        """Directory holding this run's reports."""
        return self.output_dir / self.artifact_name

    def store(self, report: RenderedReport) -> str:
        """
        Write a report to the bundle directory.

        Args:
            report: Report to persist

        Returns:
            Path of the written file

        Raises:
            OutputException: If the file cannot be written
        """
        path = self.bundle_dir / report.filename
        try:
            self.bundle_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(report.payload)
        except OSError as e:
            raise OutputException(report.name, f"Cannot write {path}: {e}") from e

        logger.debug(f"Wrote {report.name} report to {path}")
        return str(path)


__all__ = ["LocalArtifactStore"]
