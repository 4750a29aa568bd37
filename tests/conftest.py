"""Test configuration and fixtures."""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from requirements_hub.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_settings() -> Any:
    """Build Settings from an explicit environment."""

    def _make(**env: str) -> Settings:
        with patch.dict(os.environ, env, clear=True):
            return Settings()

    return _make


@pytest.fixture
def export_root(tmp_path: Path) -> Path:
    """Create temporary export root directory."""
    root = tmp_path / "projects"
    root.mkdir()
    return root


@pytest.fixture
def issue_data() -> dict[str, Any]:
    """Issue JSON as returned by GitHub."""
    return {
        "id": 1001,
        "number": 42,
        "title": "Fix login bug",
        "body": "Users cannot log in.\r\n\r\n\r\n\r\nSteps below.",
        "state": "open",
        "user": {
            "login": "alice",
            "id": 7,
            "avatar_url": "https://avatars.example.com/u/7",
        },
        "labels": [
            {"name": "bug", "color": "d73a4a", "description": "Something is broken"},
            {"name": "auth", "color": "0e8a16", "description": None},
        ],
        "created_at": "2024-03-05T14:30:00Z",
        "updated_at": "2024-03-06T09:00:00Z",
        "html_url": "https://github.com/acme/widgets/issues/42",
    }


@pytest.fixture
def comments_data() -> list[dict[str, Any]]:
    """Comment JSON as returned by GitHub, oldest first."""
    return [
        {
            "id": 501,
            "body": "Reproduced on staging.",
            "user": {"login": "bob", "id": 8},
            "created_at": "2024-03-05T15:04:05Z",
            "updated_at": "2024-03-05T15:04:05Z",
        },
        {
            "id": 502,
            "body": "Fixed in #43.\r\n\r\n\r\nClosing soon.",
            "user": {"login": "carol", "id": 9},
            "created_at": "2024-03-06T00:15:00Z",
            "updated_at": "2024-03-06T00:15:00Z",
        },
    ]
