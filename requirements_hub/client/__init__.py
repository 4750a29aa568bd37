"""Python client for the requirements-hub API."""

from .services import ApiClientError, RequirementsApiClient
from .session import RequirementsSession

__all__ = ["ApiClientError", "RequirementsApiClient", "RequirementsSession"]
