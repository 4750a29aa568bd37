"""Export endpoints writing issues to markdown files on the server."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...config import Settings, get_settings
from ...errors import InvalidRequestError, UpstreamError
from ...export.exporter import RequirementExporter
from ...github_client.client import GitHubClient
from ...github_client.models import DownloadRequest, ExportResult
from ..dependencies import get_github_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["downloads"])


@router.post(
    "/download-issue",
    response_model=ExportResult,
    response_model_by_alias=True,
)
@router.post(
    "/download-issues",
    response_model=ExportResult,
    response_model_by_alias=True,
)
def download_issues(
    request: DownloadRequest,
    client: GitHubClient = Depends(get_github_client),
    settings: Settings = Depends(get_settings),
) -> ExportResult | JSONResponse:
    """Export one or more issues of a repository to markdown files."""
    owner = request.repo_owner or settings.github_org
    if not owner:
        raise InvalidRequestError("Missing required parameters: owner")

    exporter = RequirementExporter(
        client.with_token(request.token), base_path=settings.export_base_path
    )
    try:
        return exporter.export_issues(
            owner,
            request.repo_name,
            request.all_issue_numbers,
            include_comments=request.include_comments,
            destination=request.destination,
        )
    except UpstreamError as e:
        logger.error("Error downloading requirement: %s", e.message)
        return JSONResponse(status_code=500, content=e.to_envelope())
