"""
Centralized configuration constants for imagescan-report.

This module provides a single source of truth for configuration values
that are used across multiple modules, making them easier to update
and maintain.
"""

# ============================================================================
# Severity Selection Defaults
# ============================================================================

DEFAULT_SEVERITIES = "CRITICAL,HIGH"
"""Default severities counted towards scan status, table and summary."""

DEFAULT_DETAILED_SEVERITIES = "CRITICAL,HIGH,MEDIUM,LOW,UNKNOWN"
"""Default severities included in the detailed (archival) report."""

DEFAULT_IGNORE_UNFIXED = False
"""Whether findings without a fixed version are dropped by default."""

# ============================================================================
# Decision Defaults
# ============================================================================

DEFAULT_EXIT_CODE = 1
"""Exit code requested when vulnerabilities are found."""

SUCCESS_EXIT_CODE = 0
"""Exit code for a clean scan, or for advisory-only gating."""

CONFIGURATION_ERROR_EXIT_CODE = 2
"""Exit code for invalid configuration (mirrors argparse usage errors)."""

SCAN_ERROR_EXIT_CODE = 1
"""Exit code when the scan executor could not produce a result."""

MAX_EXIT_CODE = 255
"""Largest exit code a process can report."""

# ============================================================================
# Artifact Defaults (pass-through values)
# ============================================================================

DEFAULT_ARTIFACT_NAME = "vulnerability-reports"
"""Default name of the artifact bundle holding the rendered reports."""

DEFAULT_RETENTION_DAYS = 30
"""Default artifact retention handed to the upload step."""

DEFAULT_OUTPUT_DIR = "."
"""Default directory under which the artifact bundle is written."""

# ============================================================================
# Renderer Limits
# ============================================================================

NO_VULNERABILITIES_MARKER = "No vulnerabilities found"
"""Literal line emitted by the table report when nothing matched."""

FIXED_VERSION_PLACEHOLDER = "-"
"""Table/comment cell value for findings without a fixed version."""

TABLE_MAX_CELL_WIDTH = 60
"""Table cells longer than this are truncated."""

PR_COMMENT_MAX_FINDINGS = 10
"""Maximum number of individual findings listed in the PR comment."""

PR_COMMENT_TITLE_WIDTH = 80
"""PR comment finding titles longer than this are truncated."""

MAX_COMMENT_SIZE = 60000
"""
Upper bound on the PR comment body, in characters.

GitHub rejects comments above 65,536 bytes; the bound leaves headroom
for multi-byte characters in titles.
"""

PR_COMMENT_MARKER = "<!-- imagescan-report -->"
"""Hidden marker used to find and update an earlier comment."""

# ============================================================================
# Timeouts (in seconds)
# ============================================================================

TRIVY_TIMEOUT = 600
"""Timeout for Trivy image scanning (10 minutes)."""

VERSION_CHECK_TIMEOUT = 5
"""Timeout for tool version checks (5 seconds)."""

API_REQUEST_TIMEOUT = 30
"""Timeout for GitHub API requests (30 seconds)."""

GITHUB_CLI_TIMEOUT = 10
"""Timeout for GitHub CLI operations (10 seconds)."""

# ============================================================================
# External Service URLs
# ============================================================================

GITHUB_API_URL = "https://api.github.com"
"""Default GitHub REST API base URL (overridden by GITHUB_API_URL)."""
