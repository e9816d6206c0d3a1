# ABOUTME: Cache-aside resolution of book metadata over the local cache and the catalog.
# ABOUTME: Point lookups hit the cache first; searches always go upstream and warm the cache.

import logging

from myreads.catalog.provider import CatalogClient
from myreads.catalog.types import Book
from myreads.db.books import BookCache

logger = logging.getLogger(__name__)


class CacheAsideResolver:
    """Decides when to trust the book cache and when to ask the catalog.

    Cached rows are trusted without a freshness check. Negative results and
    failed fetches are never cached, so a later call retries upstream.
    """

    def __init__(self, cache: BookCache, catalog: CatalogClient) -> None:
        self._cache = cache
        self._catalog = catalog

    def resolve(self, book_id: str) -> Book | None:
        """Return metadata for a book id, fetching and caching it on a miss.

        Returns:
            The cached or freshly stored Book, or None if the catalog has no
            such id.

        Raises:
            UpstreamUnavailableError: On a miss when the catalog fails.
        """
        cached = self._cache.get(book_id)
        if cached is not None:
            logger.debug("Cache hit for %s", book_id)
            return cached

        logger.debug("Cache miss for %s, fetching from %s", book_id, self._catalog.name)
        fetched = self._catalog.fetch_by_id(book_id)
        if fetched is None:
            return None
        if fetched.id != book_id:
            # Google can answer with a canonical id; keep the requested key
            # so later lookups by the same id hit the cache.
            logger.debug("Catalog returned %s for requested %s", fetched.id, book_id)
            fetched.id = book_id
        return self._cache.upsert(fetched)

    def search(
        self, query: str, *, start_index: int = 0, max_results: int = 20
    ) -> list[Book]:
        """Run a live catalog search and warm the cache with every result.

        The cache is not consulted. Returns the catalog's results as given.

        Raises:
            UpstreamUnavailableError: When the catalog fails; nothing is cached.
        """
        results = self._catalog.search(
            query, start_index=start_index, max_results=max_results
        )
        self._cache.upsert_many(results)
        return results
