# ABOUTME: The `myreads stats` command for a summary of the user's library.
# ABOUTME: Shelf counts, average rating, and books finished this year.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myreads.cli.options import db_option, user_option
from myreads.cli.session import library_session

console = Console()


@click.command("stats")
@db_option
@user_option
def stats(db_path: Path | None, user_id: int) -> None:
    """Show reading statistics."""
    with library_session(db_path, console=console) as library:
        summary = library.get_stats(user_id)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Stat", style="bold", width=20)
    table.add_column("Value", justify="right")
    table.add_row("Total books", str(summary.total))
    table.add_row("Want to read", str(summary.want_to_read))
    table.add_row("Currently reading", str(summary.reading))
    table.add_row("Read", str(summary.read))
    table.add_row("Finished this year", str(summary.finished_this_year))
    if summary.average_rating is not None:
        table.add_row("Average rating", f"{summary.average_rating:.1f}")

    console.print(table)
