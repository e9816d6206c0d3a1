# ABOUTME: Builds a LibraryService for one CLI invocation and tears it down afterwards.
# ABOUTME: Opens the database, wires the Google Books client, and maps errors to exit codes.

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console

from myreads.catalog.googlebooks import GoogleBooksClient
from myreads.catalog.http import CatalogHttpClient, HttpClient
from myreads.catalog.provider import CatalogClient
from myreads.core.library import LibraryService
from myreads.core.resolver import CacheAsideResolver
from myreads.db.books import BookCache
from myreads.db.connection import DEFAULT_DB_PATH, open_database
from myreads.db.entries import LibraryEntries
from myreads.errors import (
    AlreadyExistsError,
    MyReadsError,
    NotFoundError,
    UpstreamUnavailableError,
)


def _create_catalog(http_client: HttpClient, api_key: str | None) -> CatalogClient:
    """Build the catalog client used by CLI commands."""
    return GoogleBooksClient(http_client, api_key=api_key)


@contextmanager
def library_session(
    db_path: Path | None,
    api_key: str | None = None,
    *,
    console: Console,
) -> Iterator[LibraryService]:
    """Yield a LibraryService backed by a fresh connection and HTTP client.

    MyReads errors raised inside the block are printed and turned into
    exit code 1. The connection and HTTP client are always closed.
    """
    conn = open_database(db_path or DEFAULT_DB_PATH)
    http_client = CatalogHttpClient()
    try:
        books = BookCache(conn)
        resolver = CacheAsideResolver(books, _create_catalog(http_client, api_key))
        yield LibraryService(resolver, LibraryEntries(conn), books)
    except NotFoundError as exc:
        console.print(f"[red]{exc}.[/red]")
        raise SystemExit(1) from exc
    except AlreadyExistsError as exc:
        console.print(f"[yellow]{exc}.[/yellow]")
        raise SystemExit(1) from exc
    except UpstreamUnavailableError as exc:
        console.print(f"[red]Catalog unavailable, try again later:[/red] {exc}")
        raise SystemExit(1) from exc
    except MyReadsError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc
    finally:
        http_client.close()
        conn.close()
