"""
Common constants shared across the imagescan-report application.
"""

# Output configuration for all report types
OUTPUT_CONFIGS = {
    "table": {
        "description": "Vulnerability Table (TXT)",
        "filename": "vulnerability-table.txt",
        "content_type": "text/plain",
    },
    "detailed": {
        "description": "Detailed Vulnerability Report (JSON)",
        "filename": "vulnerability-report.json",
        "content_type": "application/json",
    },
    "summary": {
        "description": "Scan Summary (TXT)",
        "filename": "vulnerability-summary.txt",
        "content_type": "text/plain",
    },
    "pr_comment": {
        "description": "Pull Request Comment (Markdown)",
        "filename": "pr-comment.md",
        "content_type": "text/markdown",
    },
}
