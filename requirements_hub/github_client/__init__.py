"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import (
    CommentCreate,
    CommentUpdate,
    DownloadRequest,
    ExportRecord,
    ExportResult,
    GitHubComment,
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    IssueCreate,
    IssueUpdate,
)

__all__ = [
    "GitHubClient",
    "GitHubUser",
    "GitHubLabel",
    "GitHubComment",
    "GitHubIssue",
    "IssueCreate",
    "IssueUpdate",
    "CommentCreate",
    "CommentUpdate",
    "DownloadRequest",
    "ExportRecord",
    "ExportResult",
]
