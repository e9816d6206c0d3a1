# ABOUTME: Public API for the MyReads database layer.
# ABOUTME: Exports connection management, the book cache, the library entry store, and types.

from myreads.db.books import BookCache
from myreads.db.connection import DEFAULT_DB_PATH, open_database
from myreads.db.entries import LibraryEntries
from myreads.db.mapping import UNSET, EntryPatch, LibraryEntry, ReadingStatus

__all__ = [
    "DEFAULT_DB_PATH",
    "UNSET",
    "BookCache",
    "EntryPatch",
    "LibraryEntries",
    "LibraryEntry",
    "ReadingStatus",
    "open_database",
]
