"""Database CLI commands."""

import typer
from rich.panel import Panel
from sqlalchemy.exc import SQLAlchemyError

from .utils import console

db_app = typer.Typer(help="Database management commands")


@db_app.command(name="init")
def init(
    drop: bool = typer.Option(
        False, "--drop", help="Drop existing tables before creating them"
    ),
) -> None:
    """
    Create the database tables.
    """
    from src.user_api.runtime.context import get_config
    from src.user_api.runtime.init_db import init_db

    console.print(
        Panel.fit("[bold blue]Initializing Database[/bold blue]", border_style="blue")
    )
    if drop and not typer.confirm("This will delete all users. Continue?"):
        raise typer.Abort()

    try:
        init_db(drop_existing=drop)
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Database initialization failed: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        f"[green]✅ Tables ready at {get_config().database.url}[/green]"
    )
