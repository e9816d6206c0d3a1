# ABOUTME: The `myreads ls` command for listing the user's library.
# ABOUTME: Displays entries newest first, optionally filtered to one shelf.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myreads.cli.options import STATUS_CHOICES, db_option, user_option
from myreads.cli.session import library_session
from myreads.db.mapping import ReadingStatus

console = Console()


@click.command("ls")
@click.option(
    "--status",
    "status_filter",
    type=click.Choice(STATUS_CHOICES),
    default=None,
    help="Only show books on this shelf.",
)
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Show at most N books.")
@db_option
@user_option
def ls(status_filter: str | None, limit: int | None, db_path: Path | None, user_id: int) -> None:
    """List the books in your library."""
    status = ReadingStatus(status_filter) if status_filter else None
    with library_session(db_path, console=console) as library:
        entries = library.get_user_books(user_id, status, limit=limit)

    if not entries:
        console.print("[yellow]No books in your library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Status")
    table.add_column("Rating", width=6)

    for entry in entries:
        if entry.book is None:
            title, author = "[red]missing metadata[/red]", ""
        else:
            title, author = entry.book.title, entry.book.author
        table.add_row(
            entry.book_id,
            title,
            author,
            entry.status.label,
            f"{entry.rating}/5" if entry.rating else "",
        )

    console.print(table)
    console.print(f"\n[dim]{len(entries)} book(s)[/dim]")
