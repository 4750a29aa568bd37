"""HTTP client for the requirements-hub API."""

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from ..config import DEFAULT_DESTINATION, get_settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


class ApiClientError(Exception):
    """The requirements-hub API answered with an error envelope."""

    def __init__(self, status_code: int, error: str, message: str | None = None):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(f"HTTP error {status_code}: {message or error}")


class RequirementsApiClient:
    """Calls the local server's REST surface instead of GitHub directly."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize API client.

        Args:
            base_url: API root such as ``http://localhost:3001/api``. If None,
                uses the REQUIREMENTS_API_URL setting.
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (base_url or get_settings().api_url).rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "RequirementsApiClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @staticmethod
    def _issues_path(owner: str, repo: str, *rest: int | str) -> str:
        parts = ["github", "issues", owner, repo, *map(str, rest)]
        return "/" + "/".join(quote(part, safe="") for part in parts)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("API request %s %s", method, path)
        response = self._http.request(method, path, params=params, json=json)
        if response.is_error:
            try:
                envelope = response.json()
            except ValueError:
                envelope = {}
            if not isinstance(envelope, dict):
                envelope = {}
            error = envelope.get("error") or response.reason_phrase
            message = envelope.get("message")
            logger.error(
                "API error %s on %s %s: %s",
                response.status_code,
                method,
                path,
                message or error,
            )
            raise ApiClientError(response.status_code, error, message)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def get_config(self) -> dict[str, Any]:
        """Fetch the default organization."""
        return self._request("GET", "/github/config")

    def fetch_issues(
        self,
        owner: str,
        repo: str,
        state: str = "all",
        page: int | None = None,
        per_page: int | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch issues from a repository."""
        params: dict[str, Any] = {"state": state}
        if page is not None:
            params["page"] = page
        if per_page is not None:
            params["per_page"] = per_page

        issues = self._request("GET", self._issues_path(owner, repo), params=params)
        logger.info("Retrieved %d issues for %s/%s", len(issues), owner, repo)
        return issues

    def fetch_issue_details(
        self, owner: str, repo: str, issue_number: int
    ) -> dict[str, Any]:
        """Fetch a specific issue."""
        return self._request("GET", self._issues_path(owner, repo, issue_number))

    def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
    ) -> dict[str, Any]:
        """Create a new issue in the repository."""
        payload = {"title": title, "body": body, "labels": labels or []}
        return self._request("POST", self._issues_path(owner, repo), json=payload)

    def update_issue(
        self, owner: str, repo: str, issue_number: int, **changes: Any
    ) -> dict[str, Any]:
        """Update an issue; only the keyword arguments given are sent."""
        return self._request(
            "PATCH", self._issues_path(owner, repo, issue_number), json=changes
        )

    def fetch_comments(
        self, owner: str, repo: str, issue_number: int
    ) -> list[dict[str, Any]]:
        """Fetch comments for a specific issue."""
        comments = self._request(
            "GET", self._issues_path(owner, repo, issue_number, "comments")
        )
        logger.info("Retrieved %d comments for #%s", len(comments), issue_number)
        return comments

    def create_comment(
        self, owner: str, repo: str, issue_number: int, body: str
    ) -> dict[str, Any]:
        """Create a new comment on an issue."""
        return self._request(
            "POST",
            self._issues_path(owner, repo, issue_number, "comments"),
            json={"body": body},
        )

    def update_comment(
        self, owner: str, repo: str, comment_id: int, body: str
    ) -> dict[str, Any]:
        """Edit the body of a comment."""
        return self._request(
            "PATCH",
            self._issues_path(owner, repo, "comments", comment_id),
            json={"body": body},
        )

    def delete_comment(self, owner: str, repo: str, comment_id: int) -> None:
        """Delete a comment."""
        self._request("DELETE", self._issues_path(owner, repo, "comments", comment_id))
        logger.info("Comment deleted: %s", comment_id)

    def download_issue(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        include_comments: bool = True,
        destination: str = DEFAULT_DESTINATION,
    ) -> dict[str, Any]:
        """Ask the server to export one issue to a markdown file."""
        logger.info("Starting requirement download for #%s", issue_number)
        result = self._request(
            "POST",
            "/github/download-issue",
            json={
                "owner": owner,
                "repo": repo,
                "issueNumber": issue_number,
                "includeComments": include_comments,
                "destination": destination,
            },
        )
        logger.info("Download successful: %s", result.get("path"))
        return result

    def download_issues(
        self,
        owner: str,
        repo: str,
        issue_numbers: list[int],
        include_comments: bool = True,
        destination: str = DEFAULT_DESTINATION,
        token: str | None = None,
    ) -> dict[str, Any]:
        """Ask the server to export several issues."""
        if not issue_numbers:
            raise ValueError("No issues selected for download")

        payload: dict[str, Any] = {
            "repo": {"owner": owner, "name": repo},
            "issueNumbers": list(issue_numbers),
            "includeComments": include_comments,
            "destination": destination,
        }
        if token:
            payload["token"] = token
        result = self._request("POST", "/github/download-issues", json=payload)
        logger.info(
            "Downloaded %d issues to %s", len(result.get("files", [])), result.get("path")
        )
        return result
