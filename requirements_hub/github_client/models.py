"""Pydantic models for GitHub data structures and API request bodies.

The read models map to GitHub's REST API v3 response structures and are used
wherever the service reads fields out of upstream JSON (export, preview).
The proxy routes still pass the upstream JSON through unchanged.
API Reference: https://docs.github.com/en/rest/issues
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int | None = Field(None, description="Unique user identifier (integer)")
    avatar_url: str | None = Field(None, description="URL of the user's avatar")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str = Field(
        ..., description="Hexadecimal color code without leading # (string)"
    )
    description: str | None = Field(
        None, description="Short description of the label (string, max 100 characters)"
    )


class GitHubComment(BaseModel):
    """GitHub comment model representing issue comments.

    Maps to GitHub REST API Issue Comment object.
    API Reference: https://docs.github.com/en/rest/issues/comments
    """

    id: int = Field(..., description="Unique comment identifier (integer)")
    user: GitHubUser | None = Field(None, description="Comment author details")
    body: str | None = Field(None, description="Text content of the comment (string)")
    created_at: datetime = Field(
        ..., description="Timestamp of comment creation (ISO 8601)"
    )
    updated_at: datetime | None = Field(
        None, description="Timestamp of last comment update (ISO 8601)"
    )


class GitHubIssue(BaseModel):
    """GitHub issue model representing repository issues.

    Maps to GitHub REST API Issue object.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field(..., description="Short description/title of the issue (string)")
    body: str | None = Field(
        None, description="Detailed description of the issue in markdown (string)"
    )
    state: Literal["open", "closed"] = Field(
        ..., description="Current state: 'open', 'closed' (string)"
    )
    labels: list[GitHubLabel] = Field(
        default_factory=list, description="Array of labels attached to the issue"
    )
    user: GitHubUser | None = Field(None, description="Creator/author of the issue")
    created_at: datetime = Field(
        ..., description="Timestamp of issue creation (ISO 8601)"
    )
    updated_at: datetime | None = Field(
        None, description="Timestamp of last issue update (ISO 8601)"
    )


class IssueCreate(BaseModel):
    """Body of a create-issue request."""

    title: str = Field(..., min_length=1)
    body: str | None = None
    labels: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Issue title is required")
        return value


class IssueUpdate(BaseModel):
    """Body of an update-issue request; only provided fields are sent upstream."""

    title: str | None = None
    body: str | None = None
    state: Literal["open", "closed"] | None = None
    labels: list[str] | None = None

    def changes(self) -> dict[str, object]:
        """Return the fields the caller actually set."""
        return self.model_dump(exclude_unset=True)


class CommentCreate(BaseModel):
    """Body of a create-comment request."""

    body: str = Field(..., description="Markdown text of the new comment")

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Comment body is required")
        return value


class CommentUpdate(CommentCreate):
    """Body of an edit-comment request."""


class RepoRef(BaseModel):
    """Repository reference as sent by the bulk download variant."""

    owner: str | None = None
    name: str


class DownloadRequest(BaseModel):
    """Body of a download (export) request.

    Accepts both shapes in use: a single ``issueNumber`` with ``owner`` and a
    string ``repo``, or ``issueNumbers`` with ``repo`` given as
    ``{"owner": ..., "name": ...}``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    owner: str | None = None
    repo: str | RepoRef
    issue_number: int | None = None
    issue_numbers: list[int] = Field(default_factory=list)
    include_comments: bool = True
    destination: str = "docs/requirements"
    token: str | None = None

    @model_validator(mode="after")
    def require_issue_numbers(self) -> "DownloadRequest":
        if self.issue_number is None and not self.issue_numbers:
            raise ValueError("Missing required parameters: issueNumber or issueNumbers")
        if not self.repo_name:
            raise ValueError("Missing required parameters: repo")
        return self

    @property
    def repo_name(self) -> str:
        return self.repo.name if isinstance(self.repo, RepoRef) else self.repo

    @property
    def repo_owner(self) -> str | None:
        if self.owner:
            return self.owner
        if isinstance(self.repo, RepoRef):
            return self.repo.owner
        return None

    @property
    def all_issue_numbers(self) -> list[int]:
        numbers = list(self.issue_numbers)
        if self.issue_number is not None and self.issue_number not in numbers:
            numbers.insert(0, self.issue_number)
        return numbers


class ExportRecord(BaseModel):
    """One markdown file written by the exporter."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    issue_number: int
    filename: str
    path: str
    generated_at: datetime = Field(exclude=True)


class ExportResult(BaseModel):
    """Outcome of a download request."""

    success: bool = True
    message: str
    path: str = Field(..., description="Directory the files were written to")
    files: list[ExportRecord] = Field(default_factory=list)
