# ABOUTME: Google Books catalog client implementation.
# ABOUTME: Searches volumes by free text and fetches single volumes by id.

import logging
from urllib.parse import quote

from myreads.catalog.http import HttpClient
from myreads.catalog.parser import parse_search_response, parse_volume
from myreads.catalog.types import Book
from myreads.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

_GB_BASE = "https://www.googleapis.com/books/v1"
# Google rejects maxResults above 40.
MAX_RESULTS_LIMIT = 40


class GoogleBooksClient:
    """Catalog client backed by the Google Books volumes API.

    The API key is optional: without one, requests run against the
    unauthenticated quota. Uses a dependency-injected HttpClient for
    testability. Failures are never swallowed here.
    """

    def __init__(self, http_client: HttpClient, api_key: str | None = None) -> None:
        self._http = http_client
        self._api_key = api_key or None

    @property
    def name(self) -> str:
        return "googlebooks"

    def search(
        self, query: str, *, start_index: int = 0, max_results: int = 20
    ) -> list[Book]:
        """Search volumes by free text.

        Returns results in the order Google ranks them; an empty list when
        nothing matches.

        Raises:
            UpstreamUnavailableError: On transport, status, or parse failure.
        """
        params = {
            "q": query,
            "startIndex": str(max(start_index, 0)),
            "maxResults": str(min(max(max_results, 1), MAX_RESULTS_LIMIT)),
        }
        data = self._http.get(f"{_GB_BASE}/volumes", params=self._with_key(params))
        if not isinstance(data, dict):
            raise UpstreamUnavailableError(f"Malformed search response for {query!r}")
        try:
            books = parse_search_response(data)
        except (AttributeError, TypeError) as exc:
            raise UpstreamUnavailableError(f"Malformed search response for {query!r}") from exc
        logger.debug("Search %r returned %d volume(s)", query, len(books))
        return books

    def fetch_by_id(self, book_id: str) -> Book | None:
        """Fetch one volume by its Google Books id.

        Returns None when Google answers 404 for the id.

        Raises:
            UpstreamUnavailableError: On any other failure.
        """
        try:
            data = self._http.get(
                f"{_GB_BASE}/volumes/{quote(book_id, safe='')}", params=self._with_key({})
            )
        except UpstreamUnavailableError as exc:
            if exc.status_code == 404:
                logger.debug("Volume %s not found upstream", book_id)
                return None
            raise

        if not isinstance(data, dict):
            raise UpstreamUnavailableError(f"Malformed volume response for {book_id}")
        if not data.get("id"):
            raise UpstreamUnavailableError(f"Volume response for {book_id} has no id")
        try:
            return parse_volume(data)
        except (AttributeError, TypeError) as exc:
            raise UpstreamUnavailableError(f"Malformed volume response for {book_id}") from exc

    def _with_key(self, params: dict[str, str]) -> dict[str, str]:
        if self._api_key:
            return {**params, "key": self._api_key}
        return params
