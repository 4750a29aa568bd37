"""GitHub configuration exposed to clients."""

import logging

from fastapi import APIRouter, Depends

from ...config import Settings, get_settings
from ...errors import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["config"])


@router.get("/config")
def get_github_config(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Return the default organization shown to users."""
    if not settings.github_org:
        raise ConfigurationError(
            "No GitHub organization configured. Set GITHUB_ORG or GITHUB_ORGANIZATION."
        )
    logger.info("Serving GitHub config")
    return {"organization": settings.github_org}
