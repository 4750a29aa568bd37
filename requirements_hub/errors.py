"""Error taxonomy shared by the adapter, the export pipeline and the server.

Each error carries the HTTP status it maps to and renders itself as the
JSON envelope ``{"error": ..., "message": ...}`` returned by the API.
"""

from typing import Any


class RequirementsHubError(Exception):
    """Base class for all errors raised by requirements-hub."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_envelope(self) -> dict[str, Any]:
        """Render the error as the API's JSON error envelope."""
        envelope: dict[str, Any] = {"error": self.error}
        if self.message and self.message != self.error:
            envelope["message"] = self.message
        return envelope


class InvalidRequestError(RequirementsHubError):
    """Required input is missing or malformed."""

    status_code = 400
    error = "Invalid request"


class AuthRequiredError(RequirementsHubError):
    """A write operation was attempted without a GitHub token."""

    status_code = 401
    error = "GitHub token required"


class ConfigurationError(RequirementsHubError):
    """The server is missing a configuration value it needs."""

    error = "Configuration error"


class UpstreamError(RequirementsHubError):
    """GitHub answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, status_code=status_code or 500)
        self.upstream_status = status_code
        self.context = context or {}

    @property
    def error(self) -> str:  # type: ignore[override]
        if self.upstream_status:
            return f"GitHub API error: {self.upstream_status}"
        return "GitHub API error"


class IssueFetchError(UpstreamError):
    """Fetching the issue itself failed during an export."""


class CommentsFetchError(UpstreamError):
    """Fetching the comments of an issue failed during an export."""


class TransportError(RequirementsHubError):
    """The request never got an HTTP answer (DNS, timeout, reset)."""

    error = "Network error"


class ExportWriteError(RequirementsHubError):
    """Creating the export directory or writing the file failed."""

    error = "Export write failed"
