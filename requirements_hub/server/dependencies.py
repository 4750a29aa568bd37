"""Request-scoped dependencies, overridable in tests."""

from fastapi import Depends

from ..config import Settings, get_settings
from ..github_client.client import GitHubClient


def get_github_client(settings: Settings = Depends(get_settings)) -> GitHubClient:
    return GitHubClient(settings=settings)
