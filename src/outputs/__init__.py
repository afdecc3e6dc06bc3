"""Report renderers and output capability interfaces."""

from outputs.base import ArtifactStore, CommentPoster, RenderedReport
from outputs.table_report import render_table
from outputs.detailed_report import render_detailed
from outputs.summary_report import render_summary
from outputs.pr_comment import render_pr_comment

__all__ = [
    "ArtifactStore",
    "CommentPoster",
    "RenderedReport",
    "render_table",
    "render_detailed",
    "render_summary",
    "render_pr_comment",
]
