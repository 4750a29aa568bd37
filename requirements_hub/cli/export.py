"""CLI command exporting GitHub issues to requirement markdown files."""

import typer
from rich.console import Console
from rich.table import Table

from ..config import get_settings
from ..errors import RequirementsHubError
from ..export.exporter import RequirementExporter
from ..github_client.client import GitHubClient
from .options import (
    BASE_PATH_OPTION,
    DESTINATION_OPTION,
    INCLUDE_COMMENTS_OPTION,
    ISSUE_NUMBERS_OPTION,
    ORG_OPTION,
    REPO_OPTION,
    TOKEN_OPTION,
)

console = Console()


def export(
    repo: str = REPO_OPTION,
    issue_numbers: list[int] = ISSUE_NUMBERS_OPTION,
    org: str | None = ORG_OPTION,
    destination: str = DESTINATION_OPTION,
    include_comments: bool = INCLUDE_COMMENTS_OPTION,
    base_path: str | None = BASE_PATH_OPTION,
    token: str | None = TOKEN_OPTION,
) -> None:
    """Export GitHub issues as markdown requirement files.

    Files are written to <base-path>/<repo>/<destination>/<number> <title>.md,
    overwriting earlier exports of the same issue.

    Examples:
        requirements-hub export --org acme --repo widgets -i 42
        requirements-hub export -o acme -r widgets -i 42 -i 43 --no-comments
    """
    settings = get_settings()
    owner = org or settings.github_org
    if not owner:
        console.print("❌ Error: --org is required when GITHUB_ORG is not set")
        raise typer.Exit(1)

    exporter = RequirementExporter(
        GitHubClient(token=token, settings=settings),
        base_path=base_path or settings.export_base_path,
    )

    console.print(
        f"📄 Exporting {len(issue_numbers)} issue(s) from {owner}/{repo}"
    )
    try:
        result = exporter.export_issues(
            owner,
            repo,
            issue_numbers,
            include_comments=include_comments,
            destination=destination,
        )
    except RequirementsHubError as e:
        console.print(f"❌ Error during export: {e.message}")
        raise typer.Exit(1)

    table = Table(title=f"Exported to {result.path}")
    table.add_column("Issue", justify="right")
    table.add_column("File")
    for record in result.files:
        table.add_row(f"#{record.issue_number}", record.filename)
    console.print(table)
    console.print(f"✅ {result.message}")
