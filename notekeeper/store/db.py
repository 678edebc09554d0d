"""
NoteStore — opens (or creates) the SQLite note database.

Usage::

    store = NoteStore(db_path="~/.notekeeper/notes_db.sqlite3").open()

    repo = NoteRepository(store)
    note_id = repo.add("Shopping", "Milk,Eggs")

    store.close()

The store owns exactly one connection for its lifetime.  Every record
operation goes through that handle; see ``repository.py``.

Lock waits are bounded by ``busy_timeout`` (seconds).  The default of 0
makes a database locked by another process fail at once with
TransactionError rather than stall the caller, which matters on the GUI
thread.  Blocking callers such as the CLI may pass a longer wait.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from notekeeper.exceptions import OpenError, StoreError
from notekeeper.store.schema import DB_NAME, MIGRATIONS, SCHEMA_VERSION, pending_migrations

__all__ = ["NoteStore", "DEFAULT_DB_PATH", "DEFAULT_BUSY_TIMEOUT"]

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = f"~/.notekeeper/{DB_NAME}.sqlite3"
DEFAULT_BUSY_TIMEOUT = 0.0


class NoteStore:
    """
    Owner of the single open database handle.

    Construction only records the location; ``open()`` creates the file,
    runs any pending schema migrations and caches the connection.  An
    instance can be opened once; after a failed open, retry with a fresh
    instance.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH,
                 schema_version: int = SCHEMA_VERSION,
                 busy_timeout: float = DEFAULT_BUSY_TIMEOUT) -> None:
        self._db_path = Path(db_path).expanduser()
        self._schema_version = schema_version
        self._busy_timeout = busy_timeout
        self._conn: Optional[sqlite3.Connection] = None
        self._opened = False

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def open(self) -> "NoteStore":
        """
        Open the database, creating it and its schema if absent.

        Returns:
            self, so ``NoteStore(path).open()`` reads as one step.

        Raises:
            StoreError: this instance was already opened.
            OpenError:  the file cannot be created / opened, or its schema
                        version cannot be brought to the requested one.
        """
        if self._opened:
            raise StoreError(f"store {self._db_path} is already open")
        self._opened = True

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                str(self._db_path),
                isolation_level=None,
                timeout=self._busy_timeout,
            )
        except (OSError, sqlite3.Error) as exc:
            logger.error("Database failed to open: %s", exc)
            raise OpenError(f"cannot open {self._db_path}: {exc}") from exc

        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL")
            self._migrate(conn)
        except (sqlite3.Error, ValueError) as exc:
            conn.close()
            logger.error("Database failed to open: %s", exc)
            raise OpenError(f"cannot open {self._db_path}: {exc}") from exc

        self._conn = conn
        logger.info("Database opened successfully")
        return self

    def close(self) -> None:
        """Close the handle.  Safe to call more than once."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Database %s closed", self._db_path)

    def __enter__(self) -> "NoteStore":
        if not self._opened:
            self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── Accessors ─────────────────────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """The open handle.  Raises StoreError when the store is not open."""
        if self._conn is None:
            raise StoreError(f"store {self._db_path} is not open")
        return self._conn

    def schema_version(self) -> int:
        """Schema version currently stamped on disk."""
        return self.connection.execute("PRAGMA user_version").fetchone()[0]

    # ── Internal helpers ──────────────────────────────────────────────────

    def _migrate(self, conn: sqlite3.Connection) -> None:
        current = conn.execute("PRAGMA user_version").fetchone()[0]
        versions = pending_migrations(current, self._schema_version)
        if not versions:
            return

        conn.execute("BEGIN IMMEDIATE")
        try:
            for version in versions:
                for statement in MIGRATIONS[version]:
                    conn.execute(statement)
                logger.debug("Applied schema migration v%d", version)
            # PRAGMA does not accept bound parameters
            conn.execute(f"PRAGMA user_version = {int(self._schema_version)}")
            conn.execute("COMMIT")
        except sqlite3.Error:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        logger.info("Database setup complete")
