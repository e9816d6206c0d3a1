# ABOUTME: Catalog package for looking up books in an external metadata provider.
# ABOUTME: Exports the Book dataclass, the CatalogClient protocol, and the Google Books client.

from myreads.catalog.googlebooks import GoogleBooksClient
from myreads.catalog.http import CatalogHttpClient, HttpClient
from myreads.catalog.provider import CatalogClient
from myreads.catalog.types import Book

__all__ = [
    "Book",
    "CatalogClient",
    "CatalogHttpClient",
    "GoogleBooksClient",
    "HttpClient",
]
