"""GitHub API client using PyGitHub."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from github import Auth, Github
from github.GithubException import GithubException, RateLimitExceededException
from requests.exceptions import RequestException

from ..config import Settings, get_settings
from ..errors import AuthRequiredError, InvalidRequestError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON = dict[str, Any]


class GitHubClient:
    """GitHub Issues API adapter with a single retry/timeout policy.

    Every call returns the upstream JSON as parsed by PyGitHub's requester,
    without renaming or filtering fields. Reads work without a token (subject
    to upstream rate limits); writes require one and fail before any network
    call when it is missing.
    """

    def __init__(self, token: str | None = None, settings: Settings | None = None):
        """Initialize GitHub client.

        Args:
            token: GitHub personal access token. If None, uses the
                GITHUB_TOKEN setting.
            settings: Settings providing base URL, timeout and retry count.
        """
        self.settings = settings or get_settings()
        self.token = token or self.settings.github_token

        self.github = Github(
            auth=Auth.Token(self.token) if self.token else None,
            base_url=self.settings.github_api_url,
            timeout=self.settings.github_timeout,
            retry=self.settings.github_retry_count,
        )

    def with_token(self, token: str | None) -> "GitHubClient":
        """Return a client sharing this policy but using another token."""
        if not token or token == self.token:
            return self
        return GitHubClient(token=token, settings=self.settings)

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def _require_token(self, action: str) -> None:
        if not self.token:
            raise AuthRequiredError(f"GitHub token required to {action}")

    def _call(
        self, operation: str, context: dict[str, Any], request: Callable[[], T]
    ) -> T:
        """Run one upstream request and translate its failures."""
        try:
            return request()
        except RateLimitExceededException as e:
            logger.warning("GitHub rate limit hit while trying to %s", operation)
            raise UpstreamError(
                f"Rate limit exceeded while trying to {operation}",
                status_code=e.status,
                context=context,
            ) from e
        except GithubException as e:
            logger.error(
                "GitHub API error %s while trying to %s %s", e.status, operation, context
            )
            raise UpstreamError(
                f"Failed to {operation}", status_code=e.status, context=context
            ) from e
        except RequestException as e:
            logger.error("Transport error while trying to %s: %s", operation, e)
            raise TransportError(str(e)) from e

    def _request(
        self,
        verb: str,
        path: str,
        parameters: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        _, data = self.github.requester.requestJsonAndCheck(
            verb, path, parameters=parameters, input=body
        )
        return data

    def list_issues(
        self,
        owner: str,
        repo: str,
        state: str = "all",
        page: int | None = None,
        per_page: int | None = None,
    ) -> list[JSON]:
        """List issues of a repository.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name
            state: Issue state (open, closed, all)
            page: Page number for upstream pagination
            per_page: Page size for upstream pagination

        Returns:
            Issue objects exactly as returned by GitHub
        """
        parameters: dict[str, Any] = {"state": state}
        if page is not None:
            parameters["page"] = page
        if per_page is not None:
            parameters["per_page"] = per_page

        logger.info("Fetching issues for %s/%s", owner, repo)
        issues = self._call(
            f"fetch issues for {owner}/{repo}",
            {"owner": owner, "repo": repo},
            lambda: self._request("GET", f"/repos/{owner}/{repo}/issues", parameters),
        )
        logger.info("Fetched %d issues for %s/%s", len(issues), owner, repo)
        return issues

    def get_issue(self, owner: str, repo: str, issue_number: int) -> JSON:
        """Get a specific issue."""
        logger.info("Fetching issue %s/%s#%s", owner, repo, issue_number)
        return self._call(
            f"fetch issue #{issue_number} from {owner}/{repo}",
            {"owner": owner, "repo": repo, "issue_number": issue_number},
            lambda: self._request("GET", f"/repos/{owner}/{repo}/issues/{issue_number}"),
        )

    def create_issue(self, owner: str, repo: str, payload: dict[str, Any]) -> JSON:
        """Create an issue. Not idempotent: each call opens a new issue."""
        if not payload.get("title"):
            raise InvalidRequestError("Issue title is required")
        self._require_token("create issues")

        body = {
            "title": payload["title"],
            "body": payload.get("body"),
            "labels": payload.get("labels") or [],
        }
        logger.info("Creating issue in %s/%s: %s", owner, repo, body["title"])
        issue = self._call(
            f"create issue in {owner}/{repo}",
            {"owner": owner, "repo": repo},
            lambda: self._request("POST", f"/repos/{owner}/{repo}/issues", body=body),
        )
        logger.info("Created issue #%s in %s/%s", issue.get("number"), owner, repo)
        return issue

    def update_issue(
        self, owner: str, repo: str, issue_number: int, payload: dict[str, Any]
    ) -> JSON:
        """Update the fields of an issue present in ``payload``."""
        self._require_token("update issues")

        body = {
            key: payload[key]
            for key in ("title", "body", "state", "labels")
            if key in payload
        }
        logger.info("Updating issue %s/%s#%s", owner, repo, issue_number)
        return self._call(
            f"update issue #{issue_number} in {owner}/{repo}",
            {"owner": owner, "repo": repo, "issue_number": issue_number},
            lambda: self._request(
                "PATCH", f"/repos/{owner}/{repo}/issues/{issue_number}", body=body
            ),
        )

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[JSON]:
        """List the comments of an issue in upstream order."""
        logger.info("Fetching comments for %s/%s#%s", owner, repo, issue_number)
        comments = self._call(
            f"fetch comments for issue #{issue_number}",
            {"owner": owner, "repo": repo, "issue_number": issue_number},
            lambda: self._request(
                "GET", f"/repos/{owner}/{repo}/issues/{issue_number}/comments"
            ),
        )
        logger.info("Retrieved %d comments for #%s", len(comments), issue_number)
        return comments

    def create_comment(
        self, owner: str, repo: str, issue_number: int, body: str | None
    ) -> JSON:
        """Post a comment. Not idempotent: each call adds a new comment."""
        if body is None or not body.strip():
            raise InvalidRequestError("Comment body is required")
        self._require_token("post comments")

        logger.info("Creating comment on %s/%s#%s", owner, repo, issue_number)
        return self._call(
            f"create comment on issue #{issue_number}",
            {"owner": owner, "repo": repo, "issue_number": issue_number},
            lambda: self._request(
                "POST",
                f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
                body={"body": body},
            ),
        )

    def update_comment(
        self, owner: str, repo: str, comment_id: int, body: str | None
    ) -> JSON:
        """Replace the body of an existing comment."""
        if body is None or not body.strip():
            raise InvalidRequestError("Comment body is required")
        self._require_token("edit comments")

        logger.info("Updating comment %s in %s/%s", comment_id, owner, repo)
        return self._call(
            f"update comment {comment_id} in {owner}/{repo}",
            {"owner": owner, "repo": repo, "comment_id": comment_id},
            lambda: self._request(
                "PATCH",
                f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
                body={"body": body},
            ),
        )

    def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        """Delete a comment."""
        self._require_token("delete comments")

        logger.info("Deleting comment %s in %s/%s", comment_id, owner, repo)
        self._call(
            f"delete comment {comment_id} in {owner}/{repo}",
            {"owner": owner, "repo": repo, "comment_id": comment_id},
            lambda: self._request(
                "DELETE", f"/repos/{owner}/{repo}/issues/comments/{comment_id}"
            ),
        )
        logger.info("Deleted comment %s", comment_id)
