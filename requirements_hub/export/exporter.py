"""Export GitHub issues to requirement markdown files."""

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path, PurePath

from ..config import DEFAULT_DESTINATION
from ..errors import (
    CommentsFetchError,
    ExportWriteError,
    InvalidRequestError,
    IssueFetchError,
    UpstreamError,
)
from ..github_client.client import GitHubClient
from ..github_client.models import ExportRecord, ExportResult, GitHubIssue
from .filenames import requirement_filename
from .markdown import format_requirement_markdown

logger = logging.getLogger(__name__)


class RequirementExporter:
    """Writes GitHub issues, with their discussion, as markdown files.

    Files land at ``<base_path>/<repo>/<destination>/<number> <title>.md``.
    Re-exporting an issue overwrites its file. Nothing guards two concurrent
    exports of the same issue from writing the same path.
    """

    def __init__(self, client: GitHubClient, base_path: str | Path = "."):
        """Initialize exporter.

        Args:
            client: GitHub adapter used to fetch issues and comments
            base_path: Root directory containing one folder per repository
        """
        self.client = client
        self.base_path = Path(base_path)

    def _get_target_dir(self, repo: str, destination: str) -> Path:
        """Get the directory an issue of ``repo`` is exported to.

        Args:
            repo: Repository name
            destination: Directory relative to the repository folder

        Returns:
            Path object for the target directory
        """
        if PurePath(destination).is_absolute():
            raise InvalidRequestError(
                f"Destination must be a relative path, got {destination!r}"
            )
        target_dir = self.base_path / repo / destination
        root = self.base_path.resolve()
        if not target_dir.resolve().is_relative_to(root):
            logger.warning(
                "Rejected export outside %s: repo=%r destination=%r",
                root,
                repo,
                destination,
            )
            raise InvalidRequestError(
                f"Export path must stay inside the export root, got {repo}/{destination}"
            )
        return target_dir

    def get_file_path(
        self,
        repo: str,
        issue_number: int,
        title: str,
        destination: str = DEFAULT_DESTINATION,
    ) -> Path:
        """Get the full path an issue is exported to."""
        return self._get_target_dir(repo, destination) / requirement_filename(
            issue_number, title
        )

    def export_issue(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        include_comments: bool = True,
        destination: str = DEFAULT_DESTINATION,
    ) -> ExportRecord:
        """Export one issue to a markdown file.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue number
            include_comments: Append the issue's comments to the document
            destination: Directory relative to ``<base_path>/<repo>``

        Returns:
            Record describing the written file

        Raises:
            InvalidRequestError: If owner, repo or issue number is missing
            IssueFetchError: If the issue could not be fetched
            CommentsFetchError: If the comments could not be fetched
            ExportWriteError: If the directory or file could not be written
        """
        if not owner or not repo or not issue_number:
            logger.warning(
                "Missing required parameters for export: owner=%s repo=%s issue=%s",
                owner,
                repo,
                issue_number,
            )
            raise InvalidRequestError("Missing required parameters")

        target_dir = self._get_target_dir(repo, destination or DEFAULT_DESTINATION)
        logger.info("Exporting requirement %s/%s#%s", owner, repo, issue_number)

        try:
            issue_data = self.client.get_issue(owner, repo, issue_number)
        except UpstreamError as e:
            raise IssueFetchError(
                f"Failed to fetch issue #{issue_number} from {owner}/{repo}",
                status_code=e.upstream_status,
                context=e.context,
            ) from e
        issue = GitHubIssue.model_validate(issue_data)
        logger.debug("Fetched issue #%s for export: %s", issue.number, issue.title)

        filename = requirement_filename(issue_number, issue.title)

        comments = []
        if include_comments:
            try:
                comments = self.client.list_comments(owner, repo, issue_number)
            except UpstreamError as e:
                raise CommentsFetchError(
                    f"Failed to fetch comments for issue #{issue_number}",
                    status_code=e.upstream_status,
                    context=e.context,
                ) from e
            logger.debug("Fetched %d comments for export", len(comments))

        markdown = format_requirement_markdown(issue, comments)

        file_path = target_dir / filename
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_text(markdown, encoding="utf-8")
        except OSError as e:
            logger.error("Error writing requirement #%s: %s", issue_number, e)
            raise ExportWriteError(str(e)) from e

        logger.info("Requirement file created: %s", file_path)
        return ExportRecord(
            issue_number=issue_number,
            filename=filename,
            path=str(file_path),
            generated_at=datetime.now(),
        )

    def export_issues(
        self,
        owner: str,
        repo: str,
        issue_numbers: Sequence[int],
        include_comments: bool = True,
        destination: str = DEFAULT_DESTINATION,
    ) -> ExportResult:
        """Export several issues in order, stopping at the first failure.

        Returns:
            Result listing every written file and the target directory
        """
        if not issue_numbers:
            raise InvalidRequestError("Missing required parameters")

        destination = destination or DEFAULT_DESTINATION
        records = [
            self.export_issue(owner, repo, number, include_comments, destination)
            for number in issue_numbers
        ]
        target_dir = self._get_target_dir(repo, destination)

        if len(records) == 1:
            record = records[0]
            message = f"Downloaded requirement #{record.issue_number} to {record.path}"
        else:
            message = f"Downloaded {len(records)} requirements to {target_dir}"
        logger.info(message)

        return ExportResult(
            success=True, message=message, path=str(target_dir), files=records
        )
