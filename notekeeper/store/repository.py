"""
NoteRepository — transactional add / iterate / delete over the notes table.

Usage::

    repo = NoteRepository(store)

    note_id = repo.add("Shopping", "Milk,Eggs")

    for note in repo.iterate():        # ascending id == insertion order
        print(note.id, note.title)

    repo.delete(note_id)               # absent ids are a no-op

Every call runs in its own transaction on the store's single handle.
Failures to start or apply a transaction surface as TransactionError;
nothing is retried here.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from notekeeper.exceptions import StoreError, TransactionError
from notekeeper.store.db import NoteStore
from notekeeper.store.models import Note
from notekeeper.store.schema import TABLE

__all__ = [
    "NoteRepository",
    "NoteCursor",
    "READONLY",
    "READWRITE",
    "coerce_note_id",
]

logger = logging.getLogger(__name__)

READONLY = "readonly"
READWRITE = "readwrite"

_BEGIN = {
    READONLY:  "BEGIN DEFERRED",
    READWRITE: "BEGIN IMMEDIATE",
}


def coerce_note_id(value) -> int:
    """
    Convert *value* to the store's integer key type.

    Accepts ints, integral floats and numeric strings (``"7"``, ``" 7 "``,
    ``"7.0"``).  Anything else is a caller bug and raises ValueError.
    """
    if isinstance(value, bool):
        raise ValueError(f"note id must be numeric, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(f"note id must be integral, got {value!r}")
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise ValueError(f"note id must be numeric, got {value!r}") from None
        if number.is_integer():
            return int(number)
        raise ValueError(f"note id must be integral, got {value!r}")
    raise ValueError(f"note id must be numeric, got {value!r}")


def _row_to_note(row: sqlite3.Row) -> Note:
    return Note(id=row["id"], title=row["title"], body=row["body"])


class NoteRepository:
    """
    Record access layer built on an opened NoteStore.

    Holds no state of its own besides the store; any number of
    repositories may share one store.
    """

    def __init__(self, store: NoteStore) -> None:
        self._store = store

    @property
    def store(self) -> NoteStore:
        return self._store

    # ── Transaction plumbing ──────────────────────────────────────────────

    def _begin(self, mode: str) -> sqlite3.Connection:
        if mode not in _BEGIN:
            raise ValueError(f"unknown transaction mode {mode!r}")
        try:
            conn = self._store.connection
            conn.execute(_BEGIN[mode])
        except (StoreError, sqlite3.Error) as exc:
            logger.error("Transaction not opened due to error: %s", exc)
            raise TransactionError(f"cannot start {mode} transaction: {exc}") from exc
        if mode == READONLY:
            conn.execute("PRAGMA query_only = ON")
        return conn

    @staticmethod
    def _end(conn: sqlite3.Connection, commit: bool) -> None:
        try:
            if conn.in_transaction:
                conn.execute("COMMIT" if commit else "ROLLBACK")
        finally:
            conn.execute("PRAGMA query_only = OFF")

    @contextmanager
    def transaction(self, mode: str = READWRITE) -> Iterator[sqlite3.Connection]:
        """
        Run the enclosed block as one transaction.

        Commits on success.  Any exception rolls back; sqlite errors are
        re-raised as TransactionError, everything else propagates as is.
        """
        conn = self._begin(mode)
        try:
            yield conn
        except sqlite3.Error as exc:
            self._end(conn, commit=False)
            logger.error("Transaction aborted: %s", exc)
            raise TransactionError(f"{mode} transaction failed: {exc}") from exc
        except BaseException:
            self._end(conn, commit=False)
            raise
        try:
            self._end(conn, commit=True)
        except sqlite3.Error as exc:
            self._end(conn, commit=False)
            logger.error("Transaction commit failed: %s", exc)
            raise TransactionError(f"{mode} transaction failed to commit: {exc}") from exc

    # ── Public API ────────────────────────────────────────────────────────

    def add(
        self,
        title: str,
        body: str,
        on_inserted: Optional[Callable[[int], None]] = None,
    ) -> int:
        """
        Insert a note; the store assigns its id.

        Args:
            title, body:  stored verbatim; empty strings are fine.
            on_inserted:  called with the new id as soon as the insert
                          succeeds, before the transaction commits.

        Returns:
            The new note id, once the transaction has committed.
        """
        if not isinstance(title, str) or not isinstance(body, str):
            raise TypeError("title and body must be str")

        with self.transaction(READWRITE) as conn:
            cur = conn.execute(
                f"INSERT INTO {TABLE} (title, body) VALUES (?, ?)",
                (title, body),
            )
            note_id = cur.lastrowid
            if on_inserted is not None:
                on_inserted(note_id)
        logger.info("Transaction completed: database modification finished.")
        return note_id

    def iterate(self) -> "NoteCursor":
        """Return a fresh lazy cursor over all notes, ascending by id."""
        return NoteCursor(self)

    def delete(self, note_id) -> int:
        """
        Delete the note with *note_id*.

        Returns:
            Number of rows removed: 1, or 0 when the id was not present.

        Raises:
            ValueError: *note_id* is not a usable key.
        """
        key = coerce_note_id(note_id)
        with self.transaction(READWRITE) as conn:
            cur = conn.execute(f"DELETE FROM {TABLE} WHERE id = ?", (key,))
            removed = cur.rowcount
        logger.info("Note %d deleted.", key)
        return removed

    def get(self, note_id) -> Optional[Note]:
        """Point-in-time lookup of a single note, or None."""
        key = coerce_note_id(note_id)
        with self.transaction(READONLY) as conn:
            row = conn.execute(
                f"SELECT id, title, body FROM {TABLE} WHERE id = ?", (key,)
            ).fetchone()
        return _row_to_note(row) if row else None

    def count(self) -> int:
        with self.transaction(READONLY) as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()[0]


class NoteCursor:
    """
    Forward-only, lazy iterator over the notes table.

    The read-only transaction opens on ``open()`` or on the first advance,
    whichever comes first, and ends when the rows run out or the cursor is
    closed (explicitly, via ``with``, or by being garbage-collected after
    iteration began).  A cursor opened but never advanced must be closed.

    State
    ─────
    started    — the transaction was requested
    exhausted  — no further notes will be produced
    count      — notes produced so far

    ``started and exhausted and count == 0`` means the table was empty;
    ``not started`` means nothing has been read yet.
    """

    def __init__(self, repository: NoteRepository) -> None:
        self._repo = repository
        self._conn: Optional[sqlite3.Connection] = None
        self._started = False
        self._exhausted = False
        self._count = 0
        self._rows = self._generate()

    @property
    def started(self) -> bool:
        return self._started

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def count(self) -> int:
        return self._count

    def open(self) -> "NoteCursor":
        """
        Start the read-only transaction without reading a row.

        Raises:
            TransactionError: the transaction could not be started.
        """
        if self._conn is None and not self._exhausted:
            self._started = True
            try:
                self._conn = self._repo._begin(READONLY)
            except TransactionError:
                self._exhausted = True
                raise
        return self

    def __iter__(self) -> "NoteCursor":
        return self

    def __next__(self) -> Note:
        return next(self._rows)

    def close(self) -> None:
        """Stop iterating and end the transaction if one is open."""
        self._rows.close()
        self._release(commit=False)
        self._exhausted = True

    def __enter__(self) -> "NoteCursor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _release(self, commit: bool) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            self._repo._end(conn, commit=commit)

    def _generate(self) -> Iterator[Note]:
        self.open()
        if self._conn is None:
            return

        ok = False
        try:
            cur = self._conn.execute(f"SELECT id, title, body FROM {TABLE} ORDER BY id")
            while True:
                row = cur.fetchone()
                if row is None:
                    break
                self._count += 1
                yield _row_to_note(row)
            ok = True
        except sqlite3.Error as exc:
            logger.error("Cursor failed after %d note(s): %s", self._count, exc)
            raise TransactionError(f"cursor iteration failed: {exc}") from exc
        finally:
            self._exhausted = True
            self._release(commit=ok)
        logger.info("Notes all displayed")
