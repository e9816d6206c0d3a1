# ABOUTME: SQL DDL statements for the MyReads library database schema.
# ABOUTME: Defines the shared book cache, per-user library entries, and tag tables.

SCHEMA_V1 = """
-- Shared cache of catalog metadata, keyed by the provider's volume id
CREATE TABLE books (
    id              TEXT PRIMARY KEY,
    title           TEXT NOT NULL,
    author          TEXT NOT NULL,
    description     TEXT,
    cover_image_url TEXT,
    page_count      INTEGER,
    published_date  TEXT,
    publisher       TEXT,
    language        TEXT NOT NULL DEFAULT 'en',
    created_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    updated_at      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- Per-user overlay on top of the shared cache
CREATE TABLE book_entries (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER NOT NULL,
    book_id     TEXT NOT NULL REFERENCES books(id),
    status      TEXT NOT NULL CHECK (status IN ('want_to_read', 'reading', 'read')),
    rating      INTEGER CHECK (rating BETWEEN 1 AND 5),
    review      TEXT,
    start_date  TEXT,
    finish_date TEXT,
    created_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    updated_at  TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    UNIQUE (user_id, book_id)
);

CREATE INDEX idx_book_entries_user_status ON book_entries(user_id, status);
CREATE INDEX idx_book_entries_book ON book_entries(book_id);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

MIGRATION_V2 = """
-- Tag names are shared; which entries carry them is per user
CREATE TABLE tags (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    name       TEXT NOT NULL UNIQUE COLLATE NOCASE,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE TABLE book_entry_tags (
    entry_id   INTEGER NOT NULL REFERENCES book_entries(id) ON DELETE CASCADE,
    tag_id     INTEGER NOT NULL REFERENCES tags(id) ON DELETE CASCADE,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    PRIMARY KEY (entry_id, tag_id)
);

CREATE INDEX idx_book_entry_tags_tag ON book_entry_tags(tag_id);

INSERT INTO schema_version (version) VALUES (2);
"""

# (version, sql) pairs applied in order by the connection layer.
MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2),
]

LATEST_VERSION = MIGRATIONS[-1][0]
