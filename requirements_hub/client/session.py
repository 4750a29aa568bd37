"""Client-side flow: repo selection, issue list, issue detail, comments.

The session is the only writer of these keys; list, detail and comment
consumers read them from the store (subscribe or poll) without referencing
each other.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..config import DEFAULT_DESTINATION, get_settings
from ..export.markdown import PREVIEW_EMPTY_BODY, format_requirement_markdown
from ..store.external import ActionKey, ExternalStore, StoreKey, default_store
from .services import RequirementsApiClient

logger = logging.getLogger(__name__)

ORGANIZATION: StoreKey[str] = StoreKey("organization")
CURRENT_REPO: StoreKey[dict[str, str]] = StoreKey("currentRepo")
ISSUES: StoreKey[list[dict[str, Any]]] = StoreKey("issues")
SELECTED_ISSUE: StoreKey[dict[str, Any]] = StoreKey("selectedIssue")
ISSUE_COMMENTS: StoreKey[list[dict[str, Any]]] = StoreKey("issueComments")
REPOSITORIES: StoreKey[list[dict[str, str]]] = StoreKey("repositories")
REPO_STATS: StoreKey[dict[str, int]] = StoreKey("repoStats")
LAST_DOWNLOAD: StoreKey[dict[str, Any]] = StoreKey("lastDownload")

REPO_SELECTED = ActionKey("REPO_SELECTED")
ISSUE_SELECTED = ActionKey("ISSUE_SELECTED")
COMMENT_ADDED = ActionKey("COMMENT_ADDED")
COMMENT_UPDATED = ActionKey("COMMENT_UPDATED")
COMMENT_DELETED = ActionKey("COMMENT_DELETED")
ISSUE_SAVED = ActionKey("ISSUE_SAVED")


class RequirementsSession:
    """Drives the API client and publishes results to the store."""

    def __init__(
        self, api: RequirementsApiClient, store: ExternalStore | None = None
    ):
        self.api = api
        self.store = store if store is not None else default_store

    def _current_repo(self) -> dict[str, str]:
        repo = self.store.get_var(CURRENT_REPO)
        if not repo:
            raise RuntimeError("No repository selected")
        return repo

    def _selected_issue(self) -> dict[str, Any]:
        issue = self.store.get_var(SELECTED_ISSUE)
        if not issue:
            raise RuntimeError("No issue selected")
        return issue

    def load_config(self) -> str:
        organization = self.api.get_config()["organization"]
        self.store.set_var(ORGANIZATION, organization)
        return organization

    def available_repos(
        self, repositories: list[str] | None = None
    ) -> list[dict[str, str]]:
        """List the repositories users pick from.

        Entries are ``name`` (owned by the organization) or ``owner/name``.
        Defaults to the GITHUB_REPOS setting.
        """
        if repositories is None:
            repositories = get_settings().repositories
        organization = self.store.get_var(ORGANIZATION)
        if not organization and any("/" not in entry for entry in repositories):
            organization = self.load_config()

        repos = []
        for entry in repositories:
            owner, _, name = entry.rpartition("/")
            repos.append({"owner": owner or organization, "name": name})
        self.store.set_var(REPOSITORIES, repos)
        return repos

    def select_repo(self, owner: str, name: str) -> list[dict[str, Any]]:
        """Make ``owner/name`` the current repository and load its issues."""
        logger.info("Repository selected: %s/%s", owner, name)
        self.store.set_var(CURRENT_REPO, {"owner": owner, "name": name})
        self.store.trigger_action(REPO_SELECTED)
        return self.refresh_issues()

    def refresh_issues(self) -> list[dict[str, Any]]:
        repo = self._current_repo()
        issues = self.api.fetch_issues(repo["owner"], repo["name"])
        self.store.set_var(ISSUES, issues)
        return issues

    def repo_stats(self) -> dict[str, int]:
        """Count open, closed and total issues of the loaded list."""
        issues = self.store.get_var(ISSUES) or []
        stats = {
            "open": sum(1 for issue in issues if issue.get("state") == "open"),
            "closed": sum(1 for issue in issues if issue.get("state") == "closed"),
            "total": len(issues),
        }
        self.store.set_var(REPO_STATS, stats)
        return stats

    def select_issue(self, issue_number: int) -> dict[str, Any]:
        """Load an issue and its comments in parallel and publish both."""
        repo = self._current_repo()
        with ThreadPoolExecutor(max_workers=2) as pool:
            issue_future = pool.submit(
                self.api.fetch_issue_details, repo["owner"], repo["name"], issue_number
            )
            comments_future = pool.submit(
                self.api.fetch_comments, repo["owner"], repo["name"], issue_number
            )
            issue = issue_future.result()
            comments = comments_future.result()

        self.store.set_vars({SELECTED_ISSUE: issue, ISSUE_COMMENTS: comments})
        self.store.trigger_action(ISSUE_SELECTED)
        return issue

    def add_comment(self, body: str) -> dict[str, Any]:
        """Comment on the selected issue and refresh its comments."""
        repo = self._current_repo()
        issue = self._selected_issue()
        comment = self.api.create_comment(
            repo["owner"], repo["name"], issue["number"], body
        )
        self._refresh_comments()
        self.store.trigger_action(COMMENT_ADDED)
        return comment

    def _refresh_comments(self) -> list[dict[str, Any]]:
        repo = self._current_repo()
        issue = self._selected_issue()
        comments = self.api.fetch_comments(repo["owner"], repo["name"], issue["number"])
        self.store.set_var(ISSUE_COMMENTS, comments)
        return comments

    def edit_comment(self, comment_id: int, body: str) -> dict[str, Any]:
        """Edit a comment of the selected issue and refresh its comments."""
        repo = self._current_repo()
        self._selected_issue()
        comment = self.api.update_comment(repo["owner"], repo["name"], comment_id, body)
        self._refresh_comments()
        self.store.trigger_action(COMMENT_UPDATED)
        return comment

    def delete_comment(self, comment_id: int) -> None:
        """Delete a comment of the selected issue and refresh its comments."""
        repo = self._current_repo()
        self._selected_issue()
        self.api.delete_comment(repo["owner"], repo["name"], comment_id)
        self._refresh_comments()
        self.store.trigger_action(COMMENT_DELETED)

    def save_requirement(
        self,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
        issue_number: int | None = None,
    ) -> dict[str, Any]:
        """Create a requirement, or update it when ``issue_number`` is given."""
        repo = self._current_repo()
        if issue_number is None:
            issue = self.api.create_issue(
                repo["owner"], repo["name"], title, body, labels
            )
        else:
            changes: dict[str, Any] = {"title": title}
            if body is not None:
                changes["body"] = body
            if labels is not None:
                changes["labels"] = labels
            issue = self.api.update_issue(
                repo["owner"], repo["name"], issue_number, **changes
            )

        self.store.trigger_action(ISSUE_SAVED)
        self.refresh_issues()
        selected = self.store.get_var(SELECTED_ISSUE)
        if selected and selected.get("number") == issue.get("number"):
            self.store.set_var(SELECTED_ISSUE, issue)
        return issue

    def preview_markdown(self) -> str:
        """Render the selected issue the way it would be exported."""
        issue = self._selected_issue()
        comments = self.store.get_var(ISSUE_COMMENTS) or []
        return format_requirement_markdown(
            issue, comments, empty_body=PREVIEW_EMPTY_BODY
        )

    def download_selected(
        self,
        include_comments: bool = True,
        destination: str = DEFAULT_DESTINATION,
    ) -> dict[str, Any]:
        """Export the selected issue through the server."""
        repo = self._current_repo()
        issue = self._selected_issue()
        result = self.api.download_issue(
            repo["owner"],
            repo["name"],
            issue["number"],
            include_comments=include_comments,
            destination=destination,
        )
        self.store.set_var(LAST_DOWNLOAD, result)
        return result
