"""Standardized CLI option definitions for consistent shorthand mappings."""

import typer

from ..config import DEFAULT_DESTINATION

ORG_OPTION = typer.Option(
    None, "--org", "-o", help="Repository owner (defaults to GITHUB_ORG)"
)

REPO_OPTION = typer.Option(..., "--repo", "-r", help="GitHub repository name")

ISSUE_NUMBERS_OPTION = typer.Option(
    ..., "--issue-number", "-i", help="Issue number to export (can be used multiple times)"
)

DESTINATION_OPTION = typer.Option(
    DEFAULT_DESTINATION,
    "--destination",
    "-d",
    help="Directory relative to <base-path>/<repo>",
)

INCLUDE_COMMENTS_OPTION = typer.Option(
    True, "--include-comments/--no-comments", help="Append the issue's comments"
)

BASE_PATH_OPTION = typer.Option(
    None, "--base-path", help="Export root (defaults to BASE_PATH or REPOS_DIR)"
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

HOST_OPTION = typer.Option(None, "--host", help="Interface to bind (defaults to HOST)")

PORT_OPTION = typer.Option(None, "--port", "-p", help="Port to listen on (defaults to PORT)")

RELOAD_OPTION = typer.Option(False, "--reload", help="Reload on code changes")
