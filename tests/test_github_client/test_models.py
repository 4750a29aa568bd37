"""Tests for GitHub client models."""

from datetime import datetime, timezone
from typing import Any

import pytest
from pydantic import ValidationError

from requirements_hub.github_client.models import (
    CommentCreate,
    DownloadRequest,
    ExportRecord,
    GitHubComment,
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    IssueCreate,
    IssueUpdate,
    RepoRef,
)


class TestGitHubIssue:
    """Test GitHubIssue model."""

    def test_from_upstream_json(self, issue_data: dict[str, Any]) -> None:
        """Test parsing issue JSON ignores fields the service does not read."""
        issue = GitHubIssue.model_validate(issue_data)

        assert issue.number == 42
        assert issue.user == GitHubUser(
            login="alice", id=7, avatar_url="https://avatars.example.com/u/7"
        )
        assert issue.labels[0] == GitHubLabel(
            name="bug", color="d73a4a", description="Something is broken"
        )
        assert issue.created_at == datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)

    def test_nullable_fields(self) -> None:
        """Test body and user may be null upstream."""
        issue = GitHubIssue.model_validate(
            {
                "number": 1,
                "title": "Ghost",
                "body": None,
                "state": "closed",
                "user": None,
                "created_at": "2024-01-01T00:00:00Z",
            }
        )
        assert issue.body is None
        assert issue.user is None
        assert issue.labels == []

    def test_invalid_state(self, issue_data: dict[str, Any]) -> None:
        """Test state is restricted to open or closed."""
        with pytest.raises(ValidationError):
            GitHubIssue.model_validate({**issue_data, "state": "merged"})


class TestGitHubComment:
    """Test GitHubComment model."""

    def test_null_body(self) -> None:
        comment = GitHubComment.model_validate(
            {"id": 1, "body": None, "user": None, "created_at": "2024-01-01T00:00:00Z"}
        )
        assert comment.body is None


class TestRequestBodies:
    """Test request body validation."""

    def test_issue_create_requires_title(self) -> None:
        with pytest.raises(ValidationError):
            IssueCreate.model_validate({"body": "no title"})
        with pytest.raises(ValidationError, match="Issue title is required"):
            IssueCreate(title="   ")

    def test_issue_create_defaults(self) -> None:
        payload = IssueCreate(title="Login")
        assert payload.model_dump() == {"title": "Login", "body": None, "labels": []}

    def test_issue_update_changes(self) -> None:
        """Test only explicitly provided fields count as changes."""
        assert IssueUpdate.model_validate({"state": "closed"}).changes() == {
            "state": "closed"
        }
        assert IssueUpdate.model_validate({"body": None}).changes() == {"body": None}
        assert IssueUpdate().changes() == {}

    def test_comment_create_rejects_blank(self) -> None:
        with pytest.raises(ValidationError, match="Comment body is required"):
            CommentCreate(body=" \n ")
        with pytest.raises(ValidationError):
            CommentCreate.model_validate({})


class TestDownloadRequest:
    """Test the two download request shapes."""

    def test_single_issue_shape(self) -> None:
        request = DownloadRequest.model_validate(
            {"owner": "acme", "repo": "widgets", "issueNumber": 42}
        )

        assert request.repo_owner == "acme"
        assert request.repo_name == "widgets"
        assert request.all_issue_numbers == [42]
        assert request.include_comments is True
        assert request.destination == "docs/requirements"

    def test_bulk_shape(self) -> None:
        request = DownloadRequest.model_validate(
            {
                "repo": {"owner": "acme", "name": "widgets"},
                "issueNumbers": [3, 5],
                "includeComments": False,
                "token": "abc",
            }
        )

        assert request.repo == RepoRef(owner="acme", name="widgets")
        assert request.repo_owner == "acme"
        assert request.repo_name == "widgets"
        assert request.all_issue_numbers == [3, 5]
        assert request.include_comments is False
        assert request.token == "abc"

    def test_explicit_owner_wins(self) -> None:
        request = DownloadRequest.model_validate(
            {"owner": "other", "repo": {"owner": "acme", "name": "w"}, "issueNumber": 1}
        )
        assert request.repo_owner == "other"

    def test_requires_issue_number(self) -> None:
        with pytest.raises(ValidationError, match="Missing required parameters"):
            DownloadRequest.model_validate({"owner": "acme", "repo": "widgets"})
        with pytest.raises(ValidationError, match="Missing required parameters"):
            DownloadRequest.model_validate(
                {"owner": "acme", "repo": "widgets", "issueNumbers": []}
            )

    def test_requires_repo(self) -> None:
        with pytest.raises(ValidationError):
            DownloadRequest.model_validate({"owner": "acme", "issueNumber": 1})
        with pytest.raises(ValidationError, match="Missing required parameters"):
            DownloadRequest.model_validate({"owner": "acme", "repo": "", "issueNumber": 1})


def test_export_record_wire_format() -> None:
    """Test records serialize with camelCase keys and without the timestamp."""
    record = ExportRecord(
        issue_number=42,
        filename="42 Fix login bug.md",
        path="/tmp/widgets/docs/requirements/42 Fix login bug.md",
        generated_at=datetime(2024, 1, 1),
    )

    assert record.model_dump(by_alias=True) == {
        "issueNumber": 42,
        "filename": "42 Fix login bug.md",
        "path": "/tmp/widgets/docs/requirements/42 Fix login bug.md",
    }
