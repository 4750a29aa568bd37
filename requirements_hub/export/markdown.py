"""Render a GitHub issue and its comments as a requirement markdown document."""

import re
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from ..github_client.models import GitHubComment, GitHubIssue, GitHubUser

PREVIEW_EMPTY_BODY = "No description provided."
COMMENTS_HEADING = "## Comments"
UNKNOWN_AUTHOR = "unknown"

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize_text(text: str | None) -> str:
    """Convert CRLF to LF and collapse runs of blank lines to one."""
    if not text:
        return ""
    return _EXCESS_NEWLINES.sub("\n\n", text.replace("\r\n", "\n"))


def format_short_date(value: datetime) -> str:
    """Format as M/D/YYYY."""
    return f"{value.month}/{value.day}/{value.year}"


def format_short_datetime(value: datetime) -> str:
    """Format as M/D/YYYY, h:MM:SS AM."""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{format_short_date(value)}, "
        f"{hour}:{value.minute:02d}:{value.second:02d} {meridiem}"
    )


def _login(user: GitHubUser | None) -> str:
    return user.login if user and user.login else UNKNOWN_AUTHOR


def format_requirement_markdown(
    issue: GitHubIssue | dict[str, Any] | None,
    comments: Iterable[GitHubComment | dict[str, Any]] | None = None,
    *,
    empty_body: str = "",
) -> str:
    """Format a GitHub issue as a requirement markdown document.

    Titles, bodies and logins are interpolated as-is; markdown in user
    content is not escaped. Output only depends on the arguments, so the
    same issue and comments always render byte-identical documents.

    Args:
        issue: The issue, as a model or as upstream JSON
        comments: Comments in the order they should appear
        empty_body: Text used when the issue has no body

    Returns:
        The markdown document

    Raises:
        ValueError: If issue is None
    """
    if issue is None:
        raise ValueError("An issue is required to format a requirement")
    if not isinstance(issue, GitHubIssue):
        issue = GitHubIssue.model_validate(issue)

    parsed_comments = [
        c if isinstance(c, GitHubComment) else GitHubComment.model_validate(c)
        for c in comments or []
    ]

    markdown = f"# {issue.title}\n\n"
    markdown += (
        f"> **Issue #{issue.number}** | Created by {_login(issue.user)} "
        f"on {format_short_date(issue.created_at)}\n\n"
    )

    markdown += f"**Status:** {issue.state}\n"
    if issue.labels:
        markdown += f"**Labels:** {', '.join(label.name for label in issue.labels)}\n"
    markdown += "\n---\n\n"

    markdown += normalize_text(issue.body) or empty_body

    if parsed_comments:
        markdown += f"\n\n{COMMENTS_HEADING}\n\n"
        for comment in parsed_comments:
            markdown += (
                f"### {_login(comment.user)} "
                f"_({format_short_datetime(comment.created_at)})_\n\n"
            )
            markdown += f"{normalize_text(comment.body)}\n\n"
            markdown += "---\n\n"

    if not markdown.endswith("\n"):
        markdown += "\n"
    return markdown
