"""
GitHub pull request comment integration.

Posts the PR comment rendering to the pull request that triggered the
workflow, updating the previous report comment in place when one exists.
"""

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional

import requests

from constants import (
    API_REQUEST_TIMEOUT,
    GITHUB_API_URL,
    GITHUB_CLI_TIMEOUT,
    PR_COMMENT_MARKER,
)
from core.exceptions import IntegrationException
from outputs.base import CommentPoster

logger = logging.getLogger(__name__)


def get_github_token_from_gh_cli() -> Optional[str]:
    """
    Attempt to get GitHub token from gh CLI.

    Returns:
        GitHub token if gh CLI is installed and authenticated, None otherwise
    """
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=GITHUB_CLI_TIMEOUT,
        )
        if result.returncode == 0:
            token = result.stdout.strip()
            if token:
                logger.debug("Using GitHub token from gh CLI")
                return token
    except FileNotFoundError:
        logger.debug("gh CLI not found")
    except subprocess.TimeoutExpired:
        logger.debug("gh CLI token fetch timed out")

    return None


def pull_request_number_from_event(event_path: Optional[str]) -> Optional[int]:
    """
    Read the pull request number from a workflow event payload.

    Args:
        event_path: Path to the event JSON (GITHUB_EVENT_PATH)

    Returns:
        Pull request number, or None outside a pull request context
    """
    if not event_path:
        return None

    try:
        with open(Path(event_path), "r", encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug(f"Could not read event payload {event_path}: {e}")
        return None

    pull_request = event.get("pull_request") or {}
    number = pull_request.get("number")
    if number is None and "pull_request" in (event.get("issue") or {}):
        number = event["issue"].get("number")
    return number if isinstance(number, int) else None


class GitHubCommentPoster(CommentPoster):
    """Posts a single, updatable report comment on a GitHub pull request."""

    def __init__(
        self,
        repository: Optional[str],
        pr_number: Optional[int],
        github_token: Optional[str] = None,
        api_url: str = GITHUB_API_URL,
        marker: str = PR_COMMENT_MARKER,
    ):
        """
        Initialize GitHub comment poster.

        Args:
            repository: "owner/name" of the repository
            pr_number: Pull request number
            github_token: Token with pull request write access
            api_url: GitHub REST API base URL
            marker: Hidden marker identifying our earlier comment
        """
        self.repository = repository
        self.pr_number = pr_number
        self.token = github_token
        self.api_url = api_url.rstrip("/")
        self.marker = marker

        self.headers = {
            "Accept": "application/vnd.github+json",
        }
        if self.token:
            self.headers["Authorization"] = f"token {self.token}"

    @classmethod
    def from_environment(
        cls,
        github_token: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "GitHubCommentPoster":
        """
        Build a poster from the workflow environment.

        The token falls back to GITHUB_TOKEN, then the gh CLI.

        Args:
            github_token: Explicit token (takes precedence)
            environ: Environment mapping (defaults to os.environ)

        Returns:
            GitHubCommentPoster (possibly unavailable; check is_available())
        """
        environ = os.environ if environ is None else environ
        token = github_token or environ.get("GITHUB_TOKEN") or get_github_token_from_gh_cli()
        return cls(
            repository=environ.get("GITHUB_REPOSITORY"),
            pr_number=pull_request_number_from_event(environ.get("GITHUB_EVENT_PATH")),
            github_token=token,
            api_url=environ.get("GITHUB_API_URL") or GITHUB_API_URL,
        )

    def is_available(self) -> bool:
        """Check for a token, a repository and a pull request number."""
        return bool(self.token and self.repository and self.pr_number)

    def unavailable_reason(self) -> Optional[str]:
        """Explain why posting cannot be attempted (None when available)."""
        if not self.token:
            return "no GitHub token available"
        if not self.repository:
            return "GITHUB_REPOSITORY is not set"
        if not self.pr_number:
            return "not running for a pull request"
        return None

    def _comments_url(self) -> str:
        return f"{self.api_url}/repos/{self.repository}/issues/{self.pr_number}/comments"

    def find_existing_comment(self) -> Optional[int]:
        """
        Find the id of an earlier report comment on the pull request.

        Only the first page (100 comments) is searched.

        Returns:
            Comment id, or None if there is none

        Raises:
            IntegrationException: If the comments cannot be listed
        """
        try:
            response = requests.get(
                self._comments_url(),
                headers=self.headers,
                params={"per_page": 100},
                timeout=API_REQUEST_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise IntegrationException("GitHub", f"Failed to list comments on PR #{self.pr_number}: {e}") from e

        for comment in response.json():
            if self.marker in (comment.get("body") or ""):
                return comment.get("id")
        return None

    def post(self, body: str) -> str:
        """
        Create or update the report comment.

        Args:
            body: Markdown comment body

        Returns:
            URL of the comment

        Raises:
            IntegrationException: If posting is not possible or the API call fails
        """
        reason = self.unavailable_reason()
        if reason:
            raise IntegrationException("GitHub", reason)

        existing_id = self.find_existing_comment()
        try:
            if existing_id is not None:
                logger.info(f"Updating report comment {existing_id} on PR #{self.pr_number}")
                response = requests.patch(
                    f"{self.api_url}/repos/{self.repository}/issues/comments/{existing_id}",
                    headers=self.headers,
                    json={"body": body},
                    timeout=API_REQUEST_TIMEOUT,
                )
            else:
                logger.info(f"Posting report comment on PR #{self.pr_number}")
                response = requests.post(
                    self._comments_url(),
                    headers=self.headers,
                    json={"body": body},
                    timeout=API_REQUEST_TIMEOUT,
                )
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            if status == 403:
                raise IntegrationException(
                    "GitHub",
                    f"Forbidden (403) commenting on {self.repository}#{self.pr_number}. "
                    f"The token needs 'pull-requests: write' permission.",
                ) from e
            raise IntegrationException("GitHub", f"GitHub API error ({status}): {e}") from e
        except requests.RequestException as e:
            raise IntegrationException("GitHub", f"Failed to post comment: {e}") from e

        return response.json().get("html_url", "")


__all__ = [
    "GitHubCommentPoster",
    "get_github_token_from_gh_cli",
    "pull_request_number_from_event",
]
