# ABOUTME: Shared Click options for MyReads CLI commands.
# ABOUTME: Reusable decorators for the database path, user id, and catalog API key.

from pathlib import Path

import click

from myreads.db.connection import DEFAULT_DB_PATH
from myreads.db.mapping import ReadingStatus

STATUS_CHOICES = [status.value for status in ReadingStatus]

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    envvar="MYREADS_DB",
    default=None,
    help=f"Path to library database (default: {DEFAULT_DB_PATH})",
)

user_option = click.option(
    "--user",
    "user_id",
    type=click.IntRange(min=1),
    envvar="MYREADS_USER",
    default=1,
    show_default=True,
    help="Id of the user whose library to use.",
)

api_key_option = click.option(
    "--api-key",
    "api_key",
    envvar="GOOGLE_BOOKS_API_KEY",
    default=None,
    help="Google Books API key (optional; unauthenticated quota without one).",
)
