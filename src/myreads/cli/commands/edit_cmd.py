# ABOUTME: The `myreads edit` command for updating the user's entry for a book.
# ABOUTME: Builds an EntryPatch from only the options that were given.

from datetime import datetime
from pathlib import Path

import click
from rich.console import Console

from myreads.cli.options import STATUS_CHOICES, db_option, user_option
from myreads.cli.session import library_session
from myreads.db.mapping import EntryPatch, ReadingStatus

console = Console()

MAX_REVIEW_LENGTH = 5000

_DATE = click.DateTime(formats=["%Y-%m-%d"])
_CLEARABLE = ["rating", "review", "start", "finish", "tags"]


def _validate_review(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> str | None:
    if value is not None and len(value) > MAX_REVIEW_LENGTH:
        raise click.BadParameter(f"must be at most {MAX_REVIEW_LENGTH} characters")
    return value


def _split_tags(value: str) -> list[str]:
    return [t.strip() for t in value.split(",") if t.strip()]


def _as_date(value: datetime | None) -> str | None:
    return value.date().isoformat() if value is not None else None


@click.command("edit")
@click.argument("book_id")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default=None)
@click.option("--rating", type=click.IntRange(1, 5), default=None)
@click.option("--review", default=None, callback=_validate_review)
@click.option("--start", "start_date", type=_DATE, default=None, help="YYYY-MM-DD")
@click.option("--finish", "finish_date", type=_DATE, default=None, help="YYYY-MM-DD")
@click.option("--tags", default=None, help="Comma-separated tags; replaces existing tags.")
@click.option(
    "--clear",
    "clear_fields",
    type=click.Choice(_CLEARABLE),
    multiple=True,
    help="Clear a field. May be repeated.",
)
@db_option
@user_option
def edit(
    book_id: str,
    status: str | None,
    rating: int | None,
    review: str | None,
    start_date: datetime | None,
    finish_date: datetime | None,
    tags: str | None,
    clear_fields: tuple[str, ...],
    db_path: Path | None,
    user_id: int,
) -> None:
    """Update status, rating, review, dates, or tags for a book in your library."""
    given = {
        "rating": rating,
        "review": review,
        "start": start_date,
        "finish": finish_date,
        "tags": tags,
    }
    conflicts = sorted(name for name in set(clear_fields) if given[name] is not None)
    if conflicts:
        raise click.UsageError(f"Cannot both set and clear: {', '.join(conflicts)}")

    patch = EntryPatch()
    if status is not None:
        patch.status = ReadingStatus(status)
    if rating is not None:
        patch.rating = rating
    if review is not None:
        patch.review = review
    if start_date is not None:
        patch.start_date = _as_date(start_date)
    if finish_date is not None:
        patch.finish_date = _as_date(finish_date)
    if tags is not None:
        patch.tags = _split_tags(tags)

    for name in clear_fields:
        if name == "tags":
            patch.tags = []
        elif name in ("start", "finish"):
            setattr(patch, f"{name}_date", None)
        else:
            setattr(patch, name, None)

    if patch.is_empty:
        console.print("[yellow]Nothing to update.[/yellow]")
        raise SystemExit(1)

    with library_session(db_path, console=console) as library:
        entry = library.update_book_entry(user_id, book_id, patch)

    title = entry.book.title if entry.book else book_id
    console.print(f"Updated [bold]{title}[/bold].")
