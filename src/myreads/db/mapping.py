# ABOUTME: Library entry types and conversions between dataclasses and SQLite rows.
# ABOUTME: Defines ReadingStatus, LibraryEntry, and the EntryPatch partial-update structure.

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from myreads.catalog.types import DEFAULT_LANGUAGE, Book


class ReadingStatus(str, Enum):
    """Shelf a library entry sits on."""

    WANT_TO_READ = "want_to_read"
    READING = "reading"
    READ = "read"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    ReadingStatus.WANT_TO_READ: "Want to Read",
    ReadingStatus.READING: "Currently Reading",
    ReadingStatus.READ: "Read",
}


class _Unset:
    """Sentinel type for patch fields the caller did not supply."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class LibraryEntry:
    """A user's private state for one cached book.

    book is filled in by the library service when listing; it stays None
    when the referenced cache row is missing.
    """

    id: int
    user_id: int
    book_id: str
    status: ReadingStatus
    rating: int | None = None
    review: str | None = None
    start_date: str | None = None
    finish_date: str | None = None
    tags: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    book: Book | None = None


@dataclass
class EntryPatch:
    """Explicit partial update for a library entry.

    Fields left as UNSET keep their stored value. Setting rating, review,
    start_date, or finish_date to None clears it. tags, when supplied,
    replaces the entry's whole tag set.
    """

    status: ReadingStatus | Any = UNSET
    rating: int | None | Any = UNSET
    review: str | None | Any = UNSET
    start_date: str | None | Any = UNSET
    finish_date: str | None | Any = UNSET
    tags: list[str] | Any = UNSET

    def column_values(self) -> dict[str, Any]:
        """Supplied column fields (everything but tags) as a column -> value dict."""
        values: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "tags":
                continue
            value = getattr(self, f.name)
            if value is UNSET:
                continue
            if isinstance(value, ReadingStatus):
                value = value.value
            values[f.name] = value
        return values

    @property
    def is_empty(self) -> bool:
        return not self.column_values() and self.tags is UNSET


BOOK_COLUMNS = (
    "id",
    "title",
    "author",
    "description",
    "cover_image_url",
    "page_count",
    "published_date",
    "publisher",
    "language",
)


def book_to_row(book: Book) -> dict[str, Any]:
    """Convert a Book to a dict suitable for the cache upsert.

    Timestamps are left to the database.
    """
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "description": book.description,
        "cover_image_url": book.cover_image_url,
        "page_count": book.page_count,
        "published_date": book.published_date,
        "publisher": book.publisher,
        "language": book.language or DEFAULT_LANGUAGE,
    }


def row_to_book(row: Any) -> Book:
    """Convert a books table row back to a Book."""
    return Book(
        id=row["id"],
        title=row["title"],
        author=row["author"],
        description=row["description"],
        cover_image_url=row["cover_image_url"],
        page_count=row["page_count"],
        published_date=row["published_date"],
        publisher=row["publisher"],
        language=row["language"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_entry(row: Any, tags: list[str] | None = None) -> LibraryEntry:
    """Convert a book_entries row (plus its tag names) to a LibraryEntry."""
    return LibraryEntry(
        id=row["id"],
        user_id=row["user_id"],
        book_id=row["book_id"],
        status=ReadingStatus(row["status"]),
        rating=row["rating"],
        review=row["review"],
        start_date=row["start_date"],
        finish_date=row["finish_date"],
        tags=list(tags or []),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
