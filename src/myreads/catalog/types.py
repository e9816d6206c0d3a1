# ABOUTME: Core book data structure returned by the catalog and held in the local cache.
# ABOUTME: Book is the interchange format between the catalog client, cache, and library.

from dataclasses import dataclass

DEFAULT_LANGUAGE = "en"
UNKNOWN_AUTHOR = "Unknown"


@dataclass
class Book:
    """Normalized metadata for a single catalog volume.

    The id is assigned by the catalog provider and is the cache's primary key.
    Timestamps are None until the book has been written to the cache.
    """

    id: str
    title: str
    author: str = UNKNOWN_AUTHOR
    description: str | None = None
    cover_image_url: str | None = None
    page_count: int | None = None
    published_date: str | None = None
    publisher: str | None = None
    language: str = DEFAULT_LANGUAGE
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def published_year(self) -> str | None:
        """Leading four-digit year of published_date, if it has one."""
        if self.published_date and self.published_date[:4].isdigit():
            return self.published_date[:4]
        return None
