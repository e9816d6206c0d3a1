# ABOUTME: The `myreads tags` command for listing the tags used in the user's library.
# ABOUTME: Shows each tag with the number of entries carrying it.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myreads.cli.options import db_option, user_option
from myreads.cli.session import library_session

console = Console()


@click.command("tags")
@db_option
@user_option
def tags(db_path: Path | None, user_id: int) -> None:
    """List all tags with book counts."""
    with library_session(db_path, console=console) as library:
        tag_counts = library.list_tags(user_id)

    if not tag_counts:
        console.print("[yellow]No tags in your library.[/yellow]")
        return

    table = Table()
    table.add_column("Tag", style="cyan")
    table.add_column("Books", style="dim", justify="right")

    for name, count in tag_counts:
        table.add_row(name, str(count))

    console.print(table)
