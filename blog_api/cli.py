"""Command-line interface for running and maintaining the API."""

import typer
from rich.console import Console
from rich.panel import Panel
from sqlalchemy.exc import SQLAlchemyError

from blog_api.core.services import DbSessionService, MigrationRunner
from blog_api.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="Blog API - server and database management",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _runner() -> MigrationRunner:
    return MigrationRunner(DbSessionService().engine)


@app.command()
def migrate(
    target: int | None = typer.Option(
        None, "--target", help="Stop after this version (default: latest)"
    ),
) -> None:
    """Apply pending schema migrations."""
    try:
        applied = _runner().upgrade(target=target)
    except SQLAlchemyError as e:
        console.print(f"[red]Migration failed: {type(e).__name__}: {e}[/red]")
        raise typer.Exit(1) from e

    if applied:
        versions = ", ".join(str(v) for v in applied)
        console.print(f"[green]Applied migrations: {versions}[/green]")
    else:
        console.print("[green]Database schema already up to date[/green]")


@app.command(name="db-version")
def db_version() -> None:
    """Show the current and latest schema versions."""
    runner = _runner()
    try:
        current = runner.current_version()
    except SQLAlchemyError as e:
        console.print(f"[red]Could not read schema version: {type(e).__name__}: {e}[/red]")
        raise typer.Exit(1) from e

    head = runner.head_version()
    style = "green" if current >= head else "yellow"
    console.print(f"[{style}]Schema version {current} (latest {head})[/{style}]")


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: config)"),
    port: int | None = typer.Option(None, help="Port to bind (default: config)"),
    migrate_first: bool = typer.Option(
        True, "--migrate/--no-migrate", help="Apply pending migrations before serving"
    ),
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    if migrate_first:
        migrate(target=None)

    console.print(
        Panel.fit(
            f"[bold green]Blog API on http://{host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(
        "blog_api.api.http.app:app",
        host=host,
        port=port,
        access_log=False,  # The request middleware logs every request
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
