"""Issue and comment endpoints proxied to GitHub."""

from typing import Any, Literal

from fastapi import APIRouter, Depends, Query, Response, status

from ...github_client.client import GitHubClient
from ...github_client.models import (
    CommentCreate,
    CommentUpdate,
    IssueCreate,
    IssueUpdate,
)
from ..dependencies import get_github_client

router = APIRouter(prefix="/issues", tags=["issues"])


@router.get("/{owner}/{repo}")
def list_issues(
    owner: str,
    repo: str,
    state: Literal["open", "closed", "all"] = Query("all"),
    page: int | None = Query(None, ge=1),
    per_page: int | None = Query(None, ge=1, le=100),
    client: GitHubClient = Depends(get_github_client),
) -> list[dict[str, Any]]:
    """List issues of a repository (all states by default)."""
    return client.list_issues(owner, repo, state=state, page=page, per_page=per_page)


@router.post("/{owner}/{repo}")
def create_issue(
    owner: str,
    repo: str,
    payload: IssueCreate,
    client: GitHubClient = Depends(get_github_client),
) -> dict[str, Any]:
    """Create an issue."""
    return client.create_issue(owner, repo, payload.model_dump())


@router.get("/{owner}/{repo}/{issue_number}")
def get_issue(
    owner: str,
    repo: str,
    issue_number: int,
    client: GitHubClient = Depends(get_github_client),
) -> dict[str, Any]:
    """Get a single issue."""
    return client.get_issue(owner, repo, issue_number)


@router.patch("/{owner}/{repo}/{issue_number}")
def update_issue(
    owner: str,
    repo: str,
    issue_number: int,
    payload: IssueUpdate,
    client: GitHubClient = Depends(get_github_client),
) -> dict[str, Any]:
    """Update the provided fields of an issue."""
    return client.update_issue(owner, repo, issue_number, payload.changes())


@router.get("/{owner}/{repo}/{issue_number}/comments")
def list_comments(
    owner: str,
    repo: str,
    issue_number: int,
    client: GitHubClient = Depends(get_github_client),
) -> list[dict[str, Any]]:
    """List the comments of an issue."""
    return client.list_comments(owner, repo, issue_number)


@router.post("/{owner}/{repo}/{issue_number}/comments")
def create_comment(
    owner: str,
    repo: str,
    issue_number: int,
    payload: CommentCreate,
    client: GitHubClient = Depends(get_github_client),
) -> dict[str, Any]:
    """Post a comment on an issue."""
    return client.create_comment(owner, repo, issue_number, payload.body)


@router.patch("/{owner}/{repo}/comments/{comment_id}")
def update_comment(
    owner: str,
    repo: str,
    comment_id: int,
    payload: CommentUpdate,
    client: GitHubClient = Depends(get_github_client),
) -> dict[str, Any]:
    """Edit the body of a comment."""
    return client.update_comment(owner, repo, comment_id, payload.body)


@router.delete(
    "/{owner}/{repo}/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_comment(
    owner: str,
    repo: str,
    comment_id: int,
    client: GitHubClient = Depends(get_github_client),
) -> Response:
    """Delete a comment."""
    client.delete_comment(owner, repo, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
