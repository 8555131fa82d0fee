#!/usr/bin/env python3
"""CLI interface for catalog development utilities.

Manages the local database (schema creation, fake data) and runs the API
server.
"""

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.context import get_config
from src.catalog.runtime.seed import seed_books

# Initialize Rich console for colored output
console = Console()

app = typer.Typer(
    name="catalog-dev",
    help="Book Catalog Development CLI - Manage the database and run the API",
    rich_markup_mode="rich",
)


@app.command(name="init-db")
def init_db(
    drop: bool = typer.Option(
        False, "--drop", help="Drop existing tables before creating them"
    ),
) -> None:
    """🗄️ Create the catalog tables."""
    database_service = DbSessionService()
    manager = DbManageService(database_service.engine)
    if drop:
        manager.drop_all()
        console.print("[yellow]Dropped existing tables[/yellow]")
    manager.create_all()
    console.print(
        f"[green]✅ Tables ready on {get_config().database.backend} database[/green]"
    )


@app.command()
def seed(
    count: int = typer.Option(20, "--count", "-n", min=1, help="Books to create"),
) -> None:
    """🌱 Insert fake books into the catalog."""
    database_service = DbSessionService()
    DbManageService(database_service.engine).create_all()

    with database_service.session_scope() as session:
        books = seed_books(session, count)

    table = Table(title=f"Seeded {len(books)} books")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Year", justify="right")
    table.add_column("ISBN", style="magenta")
    for book in books:
        table.add_row(
            str(book.id), book.title, book.author, str(book.published_year), book.isbn
        )
    console.print(table)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind the server to"),
    port: int | None = typer.Option(None, help="Port to bind the server to"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """🚀 Start the API server."""
    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting Book Catalog API[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{bind_host}:{bind_port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,  # We handle access logging in middleware
    )


if __name__ == "__main__":
    app()
