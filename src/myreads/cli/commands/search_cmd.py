# ABOUTME: The `myreads search` command for live Google Books searches.
# ABOUTME: Shows matching volumes and warms the local book cache with them.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myreads.catalog.googlebooks import MAX_RESULTS_LIMIT
from myreads.cli.options import api_key_option, db_option
from myreads.cli.session import library_session

console = Console()


@click.command("search")
@click.argument("query")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.option(
    "--limit",
    type=click.IntRange(1, MAX_RESULTS_LIMIT),
    default=20,
    show_default=True,
    help="Results per page.",
)
@db_option
@api_key_option
def search(
    query: str, page: int, limit: int, db_path: Path | None, api_key: str | None
) -> None:
    """Search the book catalog by title, author, or ISBN."""
    if not query.strip():
        raise click.BadParameter("Search query is required", param_hint="QUERY")

    with library_session(db_path, api_key, console=console) as library:
        results = library.search_books(query, page=page, limit=limit)

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)

    for book in results:
        table.add_row(book.id, book.title, book.author, book.published_year or "")

    console.print(table)
    console.print(f"\n[dim]{len(results)} result(s), page {page}[/dim]")
