# ABOUTME: SQLite connection factory for the MyReads library database.
# ABOUTME: Brings the schema up to date under a write lock so concurrent openers never collide.

import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from myreads.db.schema import LATEST_VERSION, MIGRATIONS, SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".myreads" / "library.db"

# Seconds a connection waits on another connection's lock before giving up.
BUSY_TIMEOUT = 30.0


def _split_statements(script: str) -> Iterator[str]:
    """Yield the complete SQL statements of a DDL script one at a time.

    executescript() commits any open transaction first, so scripts that must
    run under our own lock are fed through execute() statement by statement.
    """
    pending = ""
    for line in script.splitlines(keepends=True):
        pending += line
        if sqlite3.complete_statement(pending):
            yield pending.strip()
            pending = ""


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Highest applied schema version, or 0 for an empty database."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name='schema_version'"
    ).fetchone()
    if has_table is None:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def _apply_migrations(conn: sqlite3.Connection) -> int:
    """Create the base schema and apply pending migrations atomically.

    The version is read again after BEGIN IMMEDIATE takes the write lock, so
    when several connections open a fresh file at once only the first one
    does the work and the rest find the database current.

    Returns:
        The schema version after the call.
    """
    if _get_schema_version(conn) >= LATEST_VERSION:
        return LATEST_VERSION

    conn.execute("BEGIN IMMEDIATE")
    try:
        current = _get_schema_version(conn)
        steps = [(1, SCHEMA_V1), *MIGRATIONS]
        for version, script in steps:
            if version <= current:
                continue
            for statement in _split_statements(script):
                conn.execute(statement)
            logger.debug("Applied schema version %d", version)
            current = version
        conn.execute("COMMIT")
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    return current


def open_database(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the MyReads library database.

    Creates the file and parent directories if needed, brings the schema up
    to date, enables WAL and foreign keys, and uses sqlite3.Row rows.

    Each caller (CLI invocation, worker thread) should open its own
    connection; concurrent writers serialize on SQLite's database lock.

    Args:
        path: Path to the database file. Defaults to ~/.myreads/library.db.

    Returns:
        A configured sqlite3.Connection.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path), timeout=BUSY_TIMEOUT)
    conn.row_factory = sqlite3.Row
    try:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        _apply_migrations(conn)
    except sqlite3.Error:
        conn.close()
        raise
    return conn
