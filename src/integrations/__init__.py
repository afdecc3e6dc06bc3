"""Integrations with external services."""

from integrations.trivy_scanner import TrivyScanner, TrivyReportFile
from integrations.github_comments import GitHubCommentPoster
from integrations.artifact_store import LocalArtifactStore

__all__ = [
    "TrivyScanner",
    "TrivyReportFile",
    "GitHubCommentPoster",
    "LocalArtifactStore",
]
