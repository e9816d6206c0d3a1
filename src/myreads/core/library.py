# ABOUTME: Library service orchestrating the cache-aside resolver and the library entry store.
# ABOUTME: Add, update, remove, and list a user's books joined with cached metadata.

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from myreads.catalog.types import Book
from myreads.core.resolver import CacheAsideResolver
from myreads.db.books import BookCache
from myreads.db.entries import LibraryEntries
from myreads.db.mapping import EntryPatch, LibraryEntry, ReadingStatus
from myreads.errors import AlreadyExistsError, BookNotFoundError

logger = logging.getLogger(__name__)


class ExistingPolicy(Enum):
    """What add_book does when the user already has an entry for the book."""

    REJECT = "reject"
    UPDATE_STATUS = "update_status"


@dataclass
class LibraryStats:
    """Summary counts for a user's library."""

    total: int = 0
    want_to_read: int = 0
    reading: int = 0
    read: int = 0
    average_rating: float | None = None
    finished_this_year: int = 0


class LibraryService:
    """Public entry point for library operations.

    Book metadata and user entries are fetched with separate calls so that
    "book missing" and "entry missing" stay independently observable.
    Input shapes (rating range, review length, dates) are validated by the
    caller before anything reaches this class.
    """

    def __init__(
        self,
        resolver: CacheAsideResolver,
        entries: LibraryEntries,
        books: BookCache,
    ) -> None:
        self._resolver = resolver
        self._entries = entries
        self._books = books

    def get_book_details(self, book_id: str) -> Book:
        """Metadata for a book, from the cache or the catalog.

        Raises:
            BookNotFoundError: If the catalog has no such book.
            UpstreamUnavailableError: If the book is not cached and the catalog fails.
        """
        book = self._resolver.resolve(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def get_book_entry(self, user_id: int, book_id: str) -> LibraryEntry | None:
        """The user's entry for a book, or None if it is not in their library."""
        return self._entries.get(user_id, book_id)

    def add_book(
        self,
        user_id: int,
        book_id: str,
        status: ReadingStatus,
        *,
        on_existing: ExistingPolicy = ExistingPolicy.REJECT,
    ) -> LibraryEntry:
        """Add a book to the user's library.

        The book is resolved (and cached) before the entry is written, so an
        entry never references a book row that does not exist.

        Raises:
            BookNotFoundError: If the catalog has no such book. No entry is created.
            UpstreamUnavailableError: If the catalog fails. No entry is created.
            AlreadyExistsError: If the book is already in the library and
                on_existing is REJECT.
        """
        book = self.get_book_details(book_id)

        try:
            entry = self._entries.create(user_id, book_id, status)
        except AlreadyExistsError:
            if on_existing is ExistingPolicy.REJECT:
                raise
            logger.debug("Book %s already in library of user %s, updating status", book_id, user_id)
            entry = self._entries.update(user_id, book_id, EntryPatch(status=ReadingStatus(status)))

        entry.book = book
        return entry

    def update_book_entry(
        self, user_id: int, book_id: str, patch: EntryPatch
    ) -> LibraryEntry:
        """Apply a partial update to the user's entry.

        Raises:
            EntryNotFoundError: If the book is not in the user's library.
        """
        entry = self._entries.update(user_id, book_id, patch)
        entry.book = self._books.get(book_id)
        return entry

    def remove_book(self, user_id: int, book_id: str) -> None:
        """Remove a book from the user's library. The cached metadata stays.

        Raises:
            EntryNotFoundError: If the book is not in the user's library.
        """
        self._entries.delete(user_id, book_id)

    def get_user_books(
        self,
        user_id: int,
        status: ReadingStatus | None = None,
        *,
        limit: int | None = None,
    ) -> list[LibraryEntry]:
        """The user's entries, newest first, each joined with its cached book.

        An entry whose book row is missing is still returned, with book=None,
        and the inconsistency is logged.
        """
        entries = self._entries.list_for_user(user_id, status, limit=limit)
        books = self._books.get_many([entry.book_id for entry in entries])
        for entry in entries:
            entry.book = books.get(entry.book_id)
            if entry.book is None:
                logger.warning(
                    "Data integrity: entry %d of user %s references missing book %s",
                    entry.id,
                    user_id,
                    entry.book_id,
                )
        return entries

    def search_books(self, query: str, *, page: int = 1, limit: int = 20) -> list[Book]:
        """Live catalog search; results also warm the book cache.

        Raises:
            UpstreamUnavailableError: If the catalog fails.
        """
        start_index = (max(page, 1) - 1) * limit
        return self._resolver.search(query, start_index=start_index, max_results=limit)

    def get_stats(self, user_id: int, *, today: date | None = None) -> LibraryStats:
        """Shelf counts, average rating, and books finished in the current year."""
        counts = self._entries.status_counts(user_id)
        year = (today or date.today()).year
        return LibraryStats(
            total=sum(counts.values()),
            want_to_read=counts[ReadingStatus.WANT_TO_READ],
            reading=counts[ReadingStatus.READING],
            read=counts[ReadingStatus.READ],
            average_rating=self._entries.average_rating(user_id),
            finished_this_year=self._entries.count_finished_in_year(user_id, year),
        )

    def list_tags(self, user_id: int) -> list[tuple[str, int]]:
        """Tags on the user's entries with counts."""
        return self._entries.list_tags(user_id)
