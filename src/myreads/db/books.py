# ABOUTME: Book cache store: the shared, catalog-sourced books table.
# ABOUTME: Point lookup and idempotent upsert keyed by the provider's volume id.

import logging
import sqlite3

from myreads.catalog.types import Book
from myreads.db.mapping import BOOK_COLUMNS, book_to_row, row_to_book

logger = logging.getLogger(__name__)

_UPDATABLE = [c for c in BOOK_COLUMNS if c != "id"]

_UPSERT_SQL = (
    f"INSERT INTO books ({', '.join(BOOK_COLUMNS)}) "
    f"VALUES ({', '.join('?' for _ in BOOK_COLUMNS)}) "
    "ON CONFLICT(id) DO UPDATE SET "
    + ", ".join(f"{c} = excluded.{c}" for c in _UPDATABLE)
    + ", updated_at = strftime('%Y-%m-%dT%H:%M:%S', 'now')"
)


class BookCache:
    """Wraps a sqlite3 connection and provides typed access to the books table.

    Rows are never deleted through this class: removing a book from a
    user's library only touches book_entries. There is no TTL; a cached
    row is trusted until a later fetch of the same id replaces it.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, book_id: str) -> Book | None:
        """Retrieve a cached book by its catalog id."""
        cursor = self._conn.execute("SELECT * FROM books WHERE id = ?", (book_id,))
        row = cursor.fetchone()
        return row_to_book(row) if row else None

    def get_many(self, book_ids: list[str]) -> dict[str, Book]:
        """Retrieve several cached books at once, keyed by id. Missing ids are absent."""
        if not book_ids:
            return {}
        placeholders = ", ".join("?" for _ in book_ids)
        cursor = self._conn.execute(
            f"SELECT * FROM books WHERE id IN ({placeholders})", list(book_ids)
        )
        return {row["id"]: row_to_book(row) for row in cursor.fetchall()}

    def upsert(self, book: Book) -> Book:
        """Insert a book or fully replace the cached fields of an existing one.

        Every field except id and created_at takes the new value (no merge
        with the prior row); updated_at is refreshed. A single statement, so
        concurrent upserts of the same id leave exactly one row holding the
        last writer's data.

        Returns:
            The book as stored, with timestamps.
        """
        row = book_to_row(book)
        with self._conn:
            self._conn.execute(_UPSERT_SQL, list(row.values()))
        stored = self.get(book.id)
        return stored if stored is not None else book

    def upsert_many(self, books: list[Book]) -> int:
        """Upsert a batch of books in one transaction. Returns the number written."""
        if not books:
            return 0
        with self._conn:
            self._conn.executemany(
                _UPSERT_SQL, [list(book_to_row(book).values()) for book in books]
            )
        logger.debug("Warmed cache with %d book(s)", len(books))
        return len(books)

    def count(self) -> int:
        """Number of cached books."""
        return self._conn.execute("SELECT COUNT(*) FROM books").fetchone()[0]
