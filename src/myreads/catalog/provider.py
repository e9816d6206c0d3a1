# ABOUTME: CatalogClient protocol defining the contract for external book catalogs.
# ABOUTME: Google Books implements it; tests substitute in-memory fakes.

from typing import Protocol, runtime_checkable

from myreads.catalog.types import Book


@runtime_checkable
class CatalogClient(Protocol):
    """Protocol for read-only book catalog lookups.

    Implementations make a single upstream call per operation and never cache.
    Transport or parse failures raise UpstreamUnavailableError.
    """

    @property
    def name(self) -> str: ...

    def search(
        self, query: str, *, start_index: int = 0, max_results: int = 20
    ) -> list[Book]: ...

    def fetch_by_id(self, book_id: str) -> Book | None: ...
