# ABOUTME: The `myreads show` command for displaying a book and the user's entry for it.
# ABOUTME: Resolves metadata through the cache and looks up the entry separately.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myreads.cli.options import api_key_option, db_option, user_option
from myreads.cli.session import library_session

console = Console()


@click.command("show")
@click.argument("book_id")
@db_option
@user_option
@api_key_option
def show(book_id: str, db_path: Path | None, user_id: int, api_key: str | None) -> None:
    """Show details for a book and your reading info for it."""
    with library_session(db_path, api_key, console=console) as library:
        book = library.get_book_details(book_id)
        entry = library.get_book_entry(user_id, book_id)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", book.id)
    table.add_row("Title", book.title)
    table.add_row("Author", book.author)
    if book.publisher:
        table.add_row("Publisher", book.publisher)
    if book.published_date:
        table.add_row("Published", book.published_date)
    if book.page_count:
        table.add_row("Pages", str(book.page_count))
    table.add_row("Language", book.language)
    if book.description:
        table.add_row("Description", book.description)
    if book.cover_image_url:
        table.add_row("Cover", book.cover_image_url)

    console.print(table)

    if entry is None:
        console.print("\n[dim]Not in your library.[/dim]")
        return

    info = Table(title="Your Reading Info", show_header=False, box=None, pad_edge=False)
    info.add_column("Field", style="bold", width=14)
    info.add_column("Value")
    info.add_row("Status", entry.status.label)
    if entry.rating is not None:
        info.add_row("Rating", f"{entry.rating}/5")
    if entry.start_date:
        info.add_row("Started", entry.start_date)
    if entry.finish_date:
        info.add_row("Finished", entry.finish_date)
    if entry.tags:
        info.add_row("Tags", ", ".join(entry.tags))
    if entry.review:
        info.add_row("Review", entry.review)
    info.add_row("Added", entry.created_at)

    console.print()
    console.print(info)
