"""Server CLI commands."""

import typer
from rich.panel import Panel

from .utils import console

APP_IMPORT_PATH = "src.user_api.api.http.app:app"


def serve(
    host: str | None = typer.Option(
        None, help="Host to bind the server to (defaults to app.host)"
    ),
    port: int | None = typer.Option(
        None, help="Port to bind the server to (defaults to app.port)"
    ),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    Start the API server with uvicorn.
    """
    import uvicorn

    from src.user_api.runtime.context import get_config

    app_config = get_config().app
    if host is None:
        host = app_config.host
    if port is None:
        port = app_config.port

    console.print(
        Panel.fit(
            "[bold green]Starting User API Server[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        APP_IMPORT_PATH,
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
        log_level=log_level,
        access_log=False,  # Request logging middleware covers access logs
    )
