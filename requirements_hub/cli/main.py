"""Main CLI entry point."""

import typer
import uvicorn
from dotenv import load_dotenv
from rich.console import Console

from ..config import get_settings
from ..utils.log_setup import configure_logging
from .export import export
from .options import HOST_OPTION, PORT_OPTION, RELOAD_OPTION

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="requirements-hub",
    help="Browse, edit and export GitHub issues used as requirements",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="export", context_settings={"help_option_names": ["-h", "--help"]})(
    export
)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to LOG_LEVEL or INFO)"
    ),
) -> None:
    configure_logging(log_level or get_settings().log_level)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def serve(
    host: str | None = HOST_OPTION,
    port: int | None = PORT_OPTION,
    reload: bool = RELOAD_OPTION,
) -> None:
    """Start the HTTP API server."""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"🚀 Serving requirements-hub on http://{host}:{port}/api")
    if not settings.has_token:
        console.print(
            "⚠️  GITHUB_TOKEN is not set: reads may be rate limited, writes will fail"
        )

    uvicorn.run(
        "requirements_hub.server.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from requirements_hub import __version__

    console.print(f"Requirements Hub v{__version__}")


if __name__ == "__main__":
    app()
