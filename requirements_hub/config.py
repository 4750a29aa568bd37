"""Environment-driven configuration."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_DESTINATION = "docs/requirements"
DEFAULT_PORT = 3001


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}")


class Settings:
    """Configuration for the GitHub proxy, the exporter and the API client."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        self.github_token: Optional[str] = os.getenv("GITHUB_TOKEN") or None
        self.github_org: Optional[str] = (
            os.getenv("GITHUB_ORG") or os.getenv("GITHUB_ORGANIZATION") or None
        )
        self.github_api_url: str = (
            os.getenv("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL
        ).rstrip("/")
        self.github_timeout: int = _int_env("GITHUB_TIMEOUT", 15)
        self.github_retry_count: int = _int_env("GITHUB_RETRY_COUNT", 3)

        self.base_path: Optional[str] = os.getenv("BASE_PATH") or None
        self.repos_dir: Optional[str] = os.getenv("REPOS_DIR") or None
        self.repositories: list[str] = [
            name.strip()
            for name in os.getenv("GITHUB_REPOS", "").split(",")
            if name.strip()
        ]

        self.host: str = os.getenv("HOST", "127.0.0.1")
        self.port: int = _int_env("PORT", DEFAULT_PORT)
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        self.api_url: str = (
            os.getenv("REQUIREMENTS_API_URL") or f"http://localhost:{self.port}/api"
        ).rstrip("/")

    @property
    def export_base_path(self) -> Path:
        """Root directory that exported requirement files are written under."""
        return Path(self.base_path or self.repos_dir or ".")

    @property
    def has_token(self) -> bool:
        """Check if a GitHub token is configured."""
        return self.github_token is not None


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process, reading ``.env`` first."""
    load_dotenv()
    return Settings()
