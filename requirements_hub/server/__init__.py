"""HTTP API exposing the GitHub proxy and the requirement export."""

from .app import create_app

__all__ = ["create_app"]
