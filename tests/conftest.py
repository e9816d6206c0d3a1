# ABOUTME: Shared pytest fixtures for MyReads tests.
# ABOUTME: Provides temp databases, stores, a fake catalog, and a wired LibraryService.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from myreads.catalog.types import Book
from myreads.core.library import LibraryService
from myreads.core.resolver import CacheAsideResolver
from myreads.db.books import BookCache
from myreads.db.connection import open_database
from myreads.db.entries import LibraryEntries
from tests.fixtures.fake_catalog import FakeCatalog


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path to a temporary library database."""
    return tmp_path / "library.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An open connection to a freshly created database."""
    connection = open_database(db_path)
    yield connection
    connection.close()


@pytest.fixture
def book_cache(conn: sqlite3.Connection) -> BookCache:
    return BookCache(conn)


@pytest.fixture
def entries(conn: sqlite3.Connection) -> LibraryEntries:
    return LibraryEntries(conn)


@pytest.fixture
def rose() -> Book:
    """A fully-populated Book."""
    return Book(
        id="B1",
        title="The Name of the Rose",
        author="Umberto Eco",
        description="A mystery in a medieval monastery.",
        cover_image_url="https://books.google.com/rose.jpg",
        page_count=536,
        published_date="1980",
        publisher="Harcourt",
        language="en",
    )


@pytest.fixture
def catalog_books(rose: Book) -> list[Book]:
    """Books known to the fake catalog."""
    return [
        rose,
        Book(id="B2", title="Dune", author="Frank Herbert", published_date="1965"),
        Book(id="B3", title="Neuromancer", author="William Gibson", published_date="1984"),
    ]


@pytest.fixture
def catalog(catalog_books: list[Book]) -> FakeCatalog:
    return FakeCatalog(catalog_books)


@pytest.fixture
def resolver(book_cache: BookCache, catalog: FakeCatalog) -> CacheAsideResolver:
    return CacheAsideResolver(book_cache, catalog)


@pytest.fixture
def library(
    resolver: CacheAsideResolver, entries: LibraryEntries, book_cache: BookCache
) -> LibraryService:
    """A LibraryService over a temp database and the fake catalog."""
    return LibraryService(resolver, entries, book_cache)
