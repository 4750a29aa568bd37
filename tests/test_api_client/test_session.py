"""Tests for the client session flow."""

from typing import Any
from unittest.mock import Mock

import pytest

from requirements_hub.client import session as flow
from requirements_hub.client.services import RequirementsApiClient
from requirements_hub.client.session import RequirementsSession
from requirements_hub.store.external import ExternalStore
from requirements_hub.store.poller import VarPoller


@pytest.fixture
def store() -> ExternalStore:
    return ExternalStore()


@pytest.fixture
def api(issue_data: dict[str, Any], comments_data: list[dict[str, Any]]) -> Mock:
    api = Mock(spec=RequirementsApiClient)
    api.get_config.return_value = {"organization": "acme"}
    api.fetch_issues.return_value = [issue_data]
    api.fetch_issue_details.return_value = issue_data
    api.fetch_comments.return_value = comments_data
    return api


@pytest.fixture
def session(api: Mock, store: ExternalStore) -> RequirementsSession:
    return RequirementsSession(api, store=store)


class TestSelection:
    """Test repository and issue selection."""

    def test_load_config(
        self, session: RequirementsSession, store: ExternalStore
    ) -> None:
        assert session.load_config() == "acme"
        assert store.get_var(flow.ORGANIZATION) == "acme"

    def test_select_repo(
        self,
        session: RequirementsSession,
        store: ExternalStore,
        api: Mock,
        issue_data: dict[str, Any],
    ) -> None:
        issues = session.select_repo("acme", "widgets")

        assert issues == [issue_data]
        assert store.get_var("currentRepo") == {"owner": "acme", "name": "widgets"}
        assert store.get_var(flow.ISSUES) == [issue_data]
        assert store.get_action_value(flow.REPO_SELECTED) is not None
        api.fetch_issues.assert_called_once_with("acme", "widgets")

    def test_select_issue(
        self,
        session: RequirementsSession,
        store: ExternalStore,
        api: Mock,
        issue_data: dict[str, Any],
        comments_data: list[dict[str, Any]],
    ) -> None:
        session.select_repo("acme", "widgets")

        session.select_issue(42)

        assert store.get_var("selectedIssue") == issue_data
        assert store.get_var("issueComments") == comments_data
        api.fetch_issue_details.assert_called_once_with("acme", "widgets", 42)
        api.fetch_comments.assert_called_once_with("acme", "widgets", 42)

    def test_pollers_see_selection(
        self, session: RequirementsSession, store: ExternalStore
    ) -> None:
        """Test detail and comment consumers observe the published state."""
        detail = VarPoller(flow.SELECTED_ISSUE, store=store)
        comments = VarPoller(flow.ISSUE_COMMENTS, default=[], store=store)
        session.select_repo("acme", "widgets")

        session.select_issue(42)

        assert detail.poll_once() is True
        assert detail.value["number"] == 42
        assert comments.poll_once() is True
        assert len(comments.value) == 2

    def test_subscriber_sees_selection(
        self, session: RequirementsSession, store: ExternalStore
    ) -> None:
        listener = Mock()
        store.subscribe(flow.ISSUE_SELECTED, listener)
        session.select_repo("acme", "widgets")

        session.select_issue(42)

        listener.assert_called_once()

    def test_repo_stats(
        self, session: RequirementsSession, store: ExternalStore, api: Mock
    ) -> None:
        api.fetch_issues.return_value = [
            {"number": 1, "state": "open"},
            {"number": 2, "state": "closed"},
            {"number": 3, "state": "open"},
        ]
        session.select_repo("acme", "widgets")

        assert session.repo_stats() == {"open": 2, "closed": 1, "total": 3}
        assert store.get_var(flow.REPO_STATS)["total"] == 3

    def test_repo_stats_without_issues(self, session: RequirementsSession) -> None:
        assert session.repo_stats() == {"open": 0, "closed": 0, "total": 0}

    def test_available_repos(
        self, session: RequirementsSession, store: ExternalStore, api: Mock
    ) -> None:
        """Test bare names belong to the organization from the server config."""
        repos = session.available_repos(["wf-client", "other/wf-hub"])

        assert repos == [
            {"owner": "acme", "name": "wf-client"},
            {"owner": "other", "name": "wf-hub"},
        ]
        assert store.get_var(flow.REPOSITORIES) == repos
        api.get_config.assert_called_once()

    def test_available_repos_from_settings(
        self, session: RequirementsSession, api: Mock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_REPOS", "acme/wf-server, acme/wf-analyzer")

        repos = session.available_repos()

        assert [repo["name"] for repo in repos] == ["wf-server", "wf-analyzer"]
        api.get_config.assert_not_called()

    def test_requires_repo(self, session: RequirementsSession) -> None:
        with pytest.raises(RuntimeError, match="No repository selected"):
            session.select_issue(42)

    def test_requires_issue(self, session: RequirementsSession) -> None:
        session.select_repo("acme", "widgets")

        with pytest.raises(RuntimeError, match="No issue selected"):
            session.add_comment("Hello")


class TestWrites:
    """Test comment, save and download flows."""

    @pytest.fixture(autouse=True)
    def selected(self, session: RequirementsSession) -> None:
        session.select_repo("acme", "widgets")
        session.select_issue(42)

    def test_add_comment(
        self, session: RequirementsSession, store: ExternalStore, api: Mock
    ) -> None:
        refreshed = [{"id": 1, "body": "new"}]
        api.create_comment.return_value = {"id": 1, "body": "new"}
        api.fetch_comments.return_value = refreshed

        session.add_comment("new")

        api.create_comment.assert_called_once_with("acme", "widgets", 42, "new")
        assert store.get_var(flow.ISSUE_COMMENTS) == refreshed
        assert store.get_action_value(flow.COMMENT_ADDED) is not None

    def test_edit_comment(
        self, session: RequirementsSession, store: ExternalStore, api: Mock
    ) -> None:
        refreshed = [{"id": 501, "body": "Edited"}]
        api.update_comment.return_value = {"id": 501, "body": "Edited"}
        api.fetch_comments.return_value = refreshed

        session.edit_comment(501, "Edited")

        api.update_comment.assert_called_once_with("acme", "widgets", 501, "Edited")
        assert store.get_var(flow.ISSUE_COMMENTS) == refreshed
        assert store.get_action_value(flow.COMMENT_UPDATED) is not None

    def test_delete_comment(
        self, session: RequirementsSession, store: ExternalStore, api: Mock
    ) -> None:
        api.fetch_comments.return_value = []

        session.delete_comment(501)

        api.delete_comment.assert_called_once_with("acme", "widgets", 501)
        assert store.get_var(flow.ISSUE_COMMENTS) == []
        assert store.get_action_value(flow.COMMENT_DELETED) is not None

    def test_create_requirement(
        self, session: RequirementsSession, store: ExternalStore, api: Mock
    ) -> None:
        api.create_issue.return_value = {"number": 77, "title": "New"}

        session.save_requirement("New", "Body", ["requirement"])

        api.create_issue.assert_called_once_with(
            "acme", "widgets", "New", "Body", ["requirement"]
        )
        assert api.fetch_issues.call_count == 2
        assert store.get_var(flow.SELECTED_ISSUE)["number"] == 42
        assert store.get_action_value(flow.ISSUE_SAVED) is not None

    def test_update_selected_requirement(
        self,
        session: RequirementsSession,
        store: ExternalStore,
        api: Mock,
        issue_data: dict[str, Any],
    ) -> None:
        updated = {**issue_data, "title": "Renamed"}
        api.update_issue.return_value = updated

        session.save_requirement("Renamed", issue_number=42)

        api.update_issue.assert_called_once_with(
            "acme", "widgets", 42, title="Renamed"
        )
        assert store.get_var(flow.SELECTED_ISSUE) == updated

    def test_preview_markdown(
        self, session: RequirementsSession, store: ExternalStore
    ) -> None:
        issue = store.get_var(flow.SELECTED_ISSUE)
        store.set_var(flow.SELECTED_ISSUE, {**issue, "body": None})

        preview = session.preview_markdown()

        assert preview.startswith("# Fix login bug\n")
        assert "No description provided." in preview
        assert "## Comments" in preview

    def test_download_selected(
        self, session: RequirementsSession, store: ExternalStore, api: Mock
    ) -> None:
        result = {"success": True, "message": "Downloaded", "path": "/x", "files": []}
        api.download_issue.return_value = result

        assert session.download_selected(include_comments=False) == result

        api.download_issue.assert_called_once_with(
            "acme",
            "widgets",
            42,
            include_comments=False,
            destination="docs/requirements",
        )
        assert store.get_var(flow.LAST_DOWNLOAD) == result
