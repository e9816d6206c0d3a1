# ABOUTME: The `myreads rm` command for removing a book from the user's library.
# ABOUTME: Deletes only the user's entry; cached book metadata is kept.

from pathlib import Path

import click
from rich.console import Console

from myreads.cli.options import db_option, user_option
from myreads.cli.session import library_session

console = Console()


@click.command("rm")
@click.argument("book_id")
@db_option
@user_option
def rm(book_id: str, db_path: Path | None, user_id: int) -> None:
    """Remove a book from your library."""
    with library_session(db_path, console=console) as library:
        library.remove_book(user_id, book_id)

    console.print(f"Removed {book_id} from your library.")
