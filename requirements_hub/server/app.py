"""FastAPI application factory."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, FastAPI, Request, Response

from .. import __version__
from .error_handlers import register_exception_handlers
from .routes import config, downloads, issues

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the API: GitHub proxy routes under ``/api/github``."""
    app = FastAPI(
        title="Requirements Hub",
        version=__version__,
        description="GitHub Issues as requirements: browse, edit, comment, export",
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s -> unhandled error (%.1f ms)",
                request.method,
                request.url.path,
                (time.perf_counter() - start) * 1000,
            )
            raise
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    register_exception_handlers(app)

    github = APIRouter(prefix="/api/github")
    github.include_router(config.router)
    github.include_router(issues.router)
    github.include_router(downloads.router)
    app.include_router(github)

    @app.get("/api/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
