# ABOUTME: Error taxonomy shared by the catalog client, stores, and library service.
# ABOUTME: Callers distinguish expected outcomes (not found, duplicate) from upstream failure.


class MyReadsError(Exception):
    """Base class for all MyReads errors."""


class NotFoundError(MyReadsError):
    """A referenced book or library entry does not exist."""


class BookNotFoundError(NotFoundError):
    """The catalog (and the local cache) have no book with the given id."""

    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book {book_id} not found")
        self.book_id = book_id


class EntryNotFoundError(NotFoundError):
    """The user has no library entry for the given book."""

    def __init__(self, user_id: int, book_id: str) -> None:
        super().__init__(f"Book {book_id} is not in the library of user {user_id}")
        self.user_id = user_id
        self.book_id = book_id


class AlreadyExistsError(MyReadsError):
    """The user already has a library entry for the given book."""

    def __init__(self, user_id: int, book_id: str) -> None:
        super().__init__(f"Book {book_id} is already in the library of user {user_id}")
        self.user_id = user_id
        self.book_id = book_id


class UpstreamUnavailableError(MyReadsError):
    """The book catalog could not be reached or returned an unusable response.

    Retryable from the caller's point of view; nothing is cached when this is raised.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
