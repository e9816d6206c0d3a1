# ABOUTME: Integration tests for the library workflow over the real Google Books client.
# ABOUTME: Uses httpx.MockTransport so the full HTTP, parsing, cache, and overlay stack runs.

import sqlite3
from collections.abc import Iterator

import httpx
import pytest

from myreads.catalog.googlebooks import GoogleBooksClient
from myreads.catalog.http import CatalogHttpClient
from myreads.core.library import LibraryService
from myreads.core.resolver import CacheAsideResolver
from myreads.db.books import BookCache
from myreads.db.entries import LibraryEntries
from myreads.db.mapping import EntryPatch, ReadingStatus
from myreads.errors import BookNotFoundError, UpstreamUnavailableError
from tests.fixtures.googlebooks_responses import SEARCH_RESPONSE, VOLUME_RESPONSE


class GoogleBooksStub:
    """Minimal Google Books API: search, one known volume, everything else 404."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.down = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            return httpx.Response(500, json={"error": {"code": 500}})
        path = request.url.path
        if path == "/books/v1/volumes":
            return httpx.Response(200, json=SEARCH_RESPONSE)
        if path == f"/books/v1/volumes/{VOLUME_RESPONSE['id']}":
            return httpx.Response(200, json=VOLUME_RESPONSE)
        return httpx.Response(404, json={"error": {"code": 404}})


@pytest.fixture
def stub() -> GoogleBooksStub:
    return GoogleBooksStub()


@pytest.fixture
def service(conn: sqlite3.Connection, stub: GoogleBooksStub) -> Iterator[LibraryService]:
    http_client = CatalogHttpClient(
        min_request_interval=0.0,
        max_retries=1,
        retry_delay=0.0,
        transport=httpx.MockTransport(stub),
    )
    books = BookCache(conn)
    catalog = GoogleBooksClient(http_client, api_key="k")
    yield LibraryService(CacheAsideResolver(books, catalog), LibraryEntries(conn), books)
    http_client.close()


class TestLibraryWorkflow:
    """Search, add, edit, list, and remove through the real client."""

    def test_search_then_add_uses_warm_cache(
        self, service: LibraryService, stub: GoogleBooksStub
    ) -> None:
        results = service.search_books("rose")
        assert [b.id for b in results] == ["zyTCAlFPjgYC", "dune1965"]
        assert stub.requests[0].url.params["key"] == "k"

        entry = service.add_book(1, "dune1965", ReadingStatus.READING)
        assert entry.book is not None
        assert entry.book.title == "Dune"
        assert len(stub.requests) == 1

    def test_add_unsearched_book_fetches_once(
        self, service: LibraryService, stub: GoogleBooksStub
    ) -> None:
        service.add_book(1, "zyTCAlFPjgYC", ReadingStatus.WANT_TO_READ)
        service.get_book_details("zyTCAlFPjgYC")
        assert len(stub.requests) == 1

    def test_unknown_id_is_not_found(self, service: LibraryService) -> None:
        with pytest.raises(BookNotFoundError):
            service.add_book(1, "UNKNOWN_ID", ReadingStatus.READ)
        assert service.get_user_books(1) == []

    def test_outage_is_upstream_unavailable(
        self, service: LibraryService, stub: GoogleBooksStub
    ) -> None:
        stub.down = True
        with pytest.raises(UpstreamUnavailableError):
            service.get_book_details("zyTCAlFPjgYC")
        with pytest.raises(UpstreamUnavailableError):
            service.search_books("rose")

    def test_full_lifecycle(self, service: LibraryService) -> None:
        service.add_book(1, "zyTCAlFPjgYC", ReadingStatus.READING)
        service.update_book_entry(
            1,
            "zyTCAlFPjgYC",
            EntryPatch(
                status=ReadingStatus.READ,
                rating=5,
                review="Labyrinthine.",
                start_date="2024-01-01",
                finish_date="2024-02-01",
                tags=["classic", "mystery"],
            ),
        )

        [entry] = service.get_user_books(1, ReadingStatus.READ)
        assert entry.book is not None
        assert entry.book.author == "Umberto Eco"
        assert entry.rating == 5
        assert entry.tags == ["classic", "mystery"]

        service.remove_book(1, "zyTCAlFPjgYC")
        assert service.get_user_books(1) == []
        assert service.get_book_details("zyTCAlFPjgYC").title == "The Name of the Rose"
