"""``defect-insight serve``: HTTP API for detection, batches and history."""

import logging

import typer

from . import app
from ._common import console, get_config

logger = logging.getLogger(__name__)


@app.command()
def serve(
    ctx: typer.Context,
    port: int = typer.Option(8765, help="Port to listen on"),
    host: str = typer.Option("127.0.0.1", help="Host to bind to"),
) -> None:
    """Start the HTTP API (user taken from the X-User-Id header)."""
    try:
        from ..server import _check_deps

        _check_deps()
    except ImportError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    import uvicorn

    from ..server.app import create_app

    config = get_config(ctx)
    asgi_app = create_app(config)

    url = f"http://{host}:{port}"
    console.print(f"[bold]API[/bold] → [link={url}]{url}[/link]")
    console.print(f"[dim]Results stored in {config.db_path}. Press Ctrl+C to stop[/dim]")

    try:
        uvicorn.run(
            asgi_app,
            host=host,
            port=port,
            log_level="info" if config.verbosity == "verbose" else "warning",
        )
    except KeyboardInterrupt:
        pass
    finally:
        console.print("\n[dim]Stopped.[/dim]")
