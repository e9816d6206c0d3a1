# ABOUTME: Parsing functions for Google Books API JSON responses.
# ABOUTME: Converts volume resources into normalized Book instances.

from typing import Any

from myreads.catalog.types import DEFAULT_LANGUAGE, UNKNOWN_AUTHOR, Book

# Largest first; Google only includes the sizes it has for a volume.
_IMAGE_SIZES = ("extraLarge", "large", "medium", "small", "thumbnail", "smallThumbnail")


def select_cover_url(image_links: dict[str, Any] | None) -> str | None:
    """Pick the largest available cover image and force it onto https."""
    if not image_links:
        return None
    for size in _IMAGE_SIZES:
        url = image_links.get(size)
        if url:
            if url.startswith("http:"):
                url = "https:" + url[len("http:"):]
            return url
    return None


def parse_volume(item: dict[str, Any]) -> Book:
    """Parse a single Google Books volume resource into a Book.

    Works for both the volume endpoint and the items of a search response.
    Raises KeyError if the volume has no id.
    """
    info = item.get("volumeInfo") or {}

    authors = info.get("authors") or []
    page_count = info.get("pageCount")

    return Book(
        id=item["id"],
        title=info.get("title") or "Unknown",
        author=", ".join(authors) if authors else UNKNOWN_AUTHOR,
        description=info.get("description") or None,
        cover_image_url=select_cover_url(info.get("imageLinks")),
        page_count=page_count if isinstance(page_count, int) and page_count > 0 else None,
        published_date=info.get("publishedDate") or None,
        publisher=info.get("publisher") or None,
        language=info.get("language") or DEFAULT_LANGUAGE,
    )


def parse_search_response(data: dict[str, Any]) -> list[Book]:
    """Parse a Google Books volumes search response into a list of Books.

    A response with no matches omits "items" entirely. Items without an id
    cannot be cached and are skipped.
    """
    results: list[Book] = []
    for item in data.get("items") or []:
        if not item.get("id"):
            continue
        results.append(parse_volume(item))
    return results
