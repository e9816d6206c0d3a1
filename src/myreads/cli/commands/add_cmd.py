# ABOUTME: The `myreads add` command for putting a catalog book on one of the user's shelves.
# ABOUTME: Caches the book's metadata first, then creates the library entry.

from pathlib import Path

import click
from rich.console import Console

from myreads.cli.options import STATUS_CHOICES, api_key_option, db_option, user_option
from myreads.cli.session import library_session
from myreads.core.library import ExistingPolicy
from myreads.db.mapping import ReadingStatus

console = Console()


@click.command("add")
@click.argument("book_id")
@click.option(
    "--status",
    type=click.Choice(STATUS_CHOICES),
    default=ReadingStatus.WANT_TO_READ.value,
    show_default=True,
)
@click.option(
    "--update-existing",
    is_flag=True,
    help="If the book is already in the library, change its status instead of failing.",
)
@db_option
@user_option
@api_key_option
def add(
    book_id: str,
    status: str,
    update_existing: bool,
    db_path: Path | None,
    user_id: int,
    api_key: str | None,
) -> None:
    """Add a book to your library by its catalog id."""
    if not book_id.strip():
        raise click.BadParameter("Book ID is required", param_hint="BOOK_ID")

    policy = ExistingPolicy.UPDATE_STATUS if update_existing else ExistingPolicy.REJECT

    with library_session(db_path, api_key, console=console) as library:
        entry = library.add_book(user_id, book_id, ReadingStatus(status), on_existing=policy)

    title = entry.book.title if entry.book else book_id
    console.print(f"Added [bold]{title}[/bold] to [cyan]{entry.status.label}[/cyan].")
