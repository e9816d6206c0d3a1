# ABOUTME: Library overlay store: per-user entries layered on the shared book cache.
# ABOUTME: Create, read, patch, delete, and list entries; at most one entry per (user, book).

import logging
import sqlite3
from collections import defaultdict

from myreads.db.mapping import (
    EntryPatch,
    LibraryEntry,
    ReadingStatus,
    UNSET,
    row_to_entry,
)
from myreads.errors import AlreadyExistsError, BookNotFoundError, EntryNotFoundError

logger = logging.getLogger(__name__)

_NOW = "strftime('%Y-%m-%dT%H:%M:%S', 'now')"


def normalize_tags(tags: list[str]) -> list[str]:
    """Strip whitespace, drop empty names, and de-duplicate case-insensitively.

    The first spelling of a name wins and input order is kept.
    """
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        name = tag.strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        result.append(name)
    return result


class LibraryEntries:
    """Wraps a sqlite3 connection and provides typed CRUD for book_entries.

    Every operation is scoped by user_id; one user can never see or change
    another user's entries. Uniqueness of (user_id, book_id) is enforced by
    the table constraint, so concurrent creates cannot double-insert.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self, user_id: int, book_id: str) -> LibraryEntry | None:
        """Retrieve the user's entry for a book, with its tags."""
        cursor = self._conn.execute(
            "SELECT * FROM book_entries WHERE user_id = ? AND book_id = ?",
            (user_id, book_id),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return row_to_entry(row, self._tags_for_entry(row["id"]))

    def create(self, user_id: int, book_id: str, status: ReadingStatus) -> LibraryEntry:
        """Create an entry for a book the user does not have yet.

        Raises:
            AlreadyExistsError: If the user already has an entry for book_id.
            BookNotFoundError: If book_id is not in the book cache.
        """
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT INTO book_entries (user_id, book_id, status) VALUES (?, ?, ?)",
                    (user_id, book_id, ReadingStatus(status).value),
                )
        except sqlite3.IntegrityError as exc:
            message = str(exc)
            if "UNIQUE constraint failed: book_entries.user_id, book_entries.book_id" in message:
                raise AlreadyExistsError(user_id, book_id) from exc
            if "FOREIGN KEY constraint failed" in message:
                raise BookNotFoundError(book_id) from exc
            raise

        entry = self.get(user_id, book_id)
        if entry is None:
            # Deleted by a concurrent request between insert and read-back.
            raise EntryNotFoundError(user_id, book_id)
        return entry

    def update(self, user_id: int, book_id: str, patch: EntryPatch) -> LibraryEntry:
        """Apply a partial update to the user's entry for a book.

        Only fields supplied on the patch change. Column changes and the tag
        replacement commit together.

        Raises:
            EntryNotFoundError: If the user has no entry for book_id.
        """
        values = patch.column_values()
        set_clause = ", ".join(f"{k} = ?" for k in values)
        set_clause = f"{set_clause}, updated_at = {_NOW}" if set_clause else f"updated_at = {_NOW}"

        with self._conn:
            cursor = self._conn.execute(
                f"UPDATE book_entries SET {set_clause} WHERE user_id = ? AND book_id = ?",
                [*values.values(), user_id, book_id],
            )
            if cursor.rowcount == 0:
                raise EntryNotFoundError(user_id, book_id)

            if patch.tags is not UNSET:
                entry_id = self._conn.execute(
                    "SELECT id FROM book_entries WHERE user_id = ? AND book_id = ?",
                    (user_id, book_id),
                ).fetchone()[0]
                self._replace_tags(entry_id, patch.tags or [])

        entry = self.get(user_id, book_id)
        if entry is None:
            raise EntryNotFoundError(user_id, book_id)
        return entry

    def delete(self, user_id: int, book_id: str) -> None:
        """Hard-delete the user's entry for a book. The cached book row is kept.

        Raises:
            EntryNotFoundError: If the user has no entry for book_id.
        """
        with self._conn:
            cursor = self._conn.execute(
                "DELETE FROM book_entries WHERE user_id = ? AND book_id = ?",
                (user_id, book_id),
            )
        if cursor.rowcount == 0:
            raise EntryNotFoundError(user_id, book_id)

    def list_for_user(
        self,
        user_id: int,
        status: ReadingStatus | None = None,
        *,
        newest_first: bool = True,
        limit: int | None = None,
    ) -> list[LibraryEntry]:
        """List the user's entries, optionally on one shelf, ordered by creation time."""
        sql = "SELECT * FROM book_entries WHERE user_id = ?"
        params: list[object] = [user_id]
        if status is not None:
            sql += " AND status = ?"
            params.append(ReadingStatus(status).value)
        direction = "DESC" if newest_first else "ASC"
        sql += f" ORDER BY created_at {direction}, id {direction}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        rows = self._conn.execute(sql, params).fetchall()
        tags = self._tags_for_entries([row["id"] for row in rows])
        return [row_to_entry(row, tags.get(row["id"])) for row in rows]

    def list_tags(self, user_id: int) -> list[tuple[str, int]]:
        """Tags used on the user's entries with their entry counts, alphabetically."""
        cursor = self._conn.execute(
            "SELECT t.name, COUNT(et.entry_id) AS entry_count "
            "FROM tags t "
            "JOIN book_entry_tags et ON t.id = et.tag_id "
            "JOIN book_entries e ON e.id = et.entry_id "
            "WHERE e.user_id = ? "
            "GROUP BY t.id "
            "ORDER BY t.name COLLATE NOCASE",
            (user_id,),
        )
        return [(row[0], row[1]) for row in cursor.fetchall()]

    def status_counts(self, user_id: int) -> dict[ReadingStatus, int]:
        """Number of the user's entries on each shelf (zero for empty shelves)."""
        counts = {status: 0 for status in ReadingStatus}
        cursor = self._conn.execute(
            "SELECT status, COUNT(*) FROM book_entries WHERE user_id = ? GROUP BY status",
            (user_id,),
        )
        for status, count in cursor.fetchall():
            counts[ReadingStatus(status)] = count
        return counts

    def average_rating(self, user_id: int) -> float | None:
        """Mean rating over the user's rated entries, or None if none are rated."""
        row = self._conn.execute(
            "SELECT AVG(rating) FROM book_entries WHERE user_id = ? AND rating IS NOT NULL",
            (user_id,),
        ).fetchone()
        return row[0]

    def count_finished_in_year(self, user_id: int, year: int) -> int:
        """Number of entries marked read whose finish_date falls in the given year."""
        row = self._conn.execute(
            "SELECT COUNT(*) FROM book_entries "
            "WHERE user_id = ? AND status = 'read' AND substr(finish_date, 1, 4) = ?",
            (user_id, f"{year:04d}"),
        ).fetchone()
        return row[0]

    def _replace_tags(self, entry_id: int, tags: list[str]) -> None:
        """Replace an entry's tag set. Caller owns the transaction."""
        self._conn.execute("DELETE FROM book_entry_tags WHERE entry_id = ?", (entry_id,))
        for name in normalize_tags(tags):
            self._conn.execute("INSERT OR IGNORE INTO tags (name) VALUES (?)", (name,))
            self._conn.execute(
                "INSERT OR IGNORE INTO book_entry_tags (entry_id, tag_id) "
                "SELECT ?, id FROM tags WHERE name = ?",
                (entry_id, name),
            )

    def _tags_for_entry(self, entry_id: int) -> list[str]:
        return self._tags_for_entries([entry_id]).get(entry_id, [])

    def _tags_for_entries(self, entry_ids: list[int]) -> dict[int, list[str]]:
        """Tag names per entry id, alphabetically sorted."""
        if not entry_ids:
            return {}
        placeholders = ", ".join("?" for _ in entry_ids)
        cursor = self._conn.execute(
            "SELECT et.entry_id, t.name FROM book_entry_tags et "
            "JOIN tags t ON t.id = et.tag_id "
            f"WHERE et.entry_id IN ({placeholders}) "
            "ORDER BY t.name COLLATE NOCASE",
            entry_ids,
        )
        result: dict[int, list[str]] = defaultdict(list)
        for entry_id, name in cursor.fetchall():
            result[entry_id].append(name)
        return dict(result)
