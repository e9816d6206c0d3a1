# ABOUTME: Canned Google Books API response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts matching Google Books volume and search shapes.

VOLUME_RESPONSE = {
    "kind": "books#volume",
    "id": "zyTCAlFPjgYC",
    "volumeInfo": {
        "title": "The Name of the Rose",
        "authors": ["Umberto Eco"],
        "publisher": "Harcourt",
        "publishedDate": "1994-09-28",
        "description": "A mystery set in a medieval Italian monastery.",
        "pageCount": 536,
        "language": "en",
        "imageLinks": {
            "smallThumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=5",
            "thumbnail": "http://books.google.com/books/content?id=zyTCAlFPjgYC&zoom=1",
        },
    },
}

VOLUME_RESPONSE_MINIMAL = {
    "kind": "books#volume",
    "id": "min123",
    "volumeInfo": {
        "title": "Untitled Pamphlet",
    },
}

VOLUME_RESPONSE_TWO_AUTHORS = {
    "kind": "books#volume",
    "id": "good0mens",
    "volumeInfo": {
        "title": "Good Omens",
        "authors": ["Terry Pratchett", "Neil Gaiman"],
        "publishedDate": "1990",
        "pageCount": 0,
        "language": "en",
        "imageLinks": {
            "thumbnail": "http://books.google.com/thumb",
            "large": "https://books.google.com/large",
        },
    },
}

SEARCH_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 3,
    "items": [
        VOLUME_RESPONSE,
        {
            "kind": "books#volume",
            "id": "dune1965",
            "volumeInfo": {
                "title": "Dune",
                "authors": ["Frank Herbert"],
                "publishedDate": "1965",
                "language": "en",
            },
        },
        {
            "kind": "books#volume",
            "volumeInfo": {"title": "No Id Volume"},
        },
    ],
}

SEARCH_RESPONSE_EMPTY = {
    "kind": "books#volumes",
    "totalItems": 0,
}
