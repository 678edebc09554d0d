"""
store — SQLite-backed persistence for notes.

Public API
──────────
Note            — dataclass, one stored title/body pair
NoteStore       — opens / creates the database and owns its handle
NoteRepository  — transactional add, iterate, delete
NoteCursor      — lazy ascending-id scan returned by iterate()

The Qt completion channel lives in ``store.operations`` (imports PyQt6).
"""

from notekeeper.store.models import Note, OperationState
from notekeeper.store.db import NoteStore
from notekeeper.store.repository import NoteCursor, NoteRepository, coerce_note_id

__all__ = [
    "Note",
    "OperationState",
    "NoteStore",
    "NoteRepository",
    "NoteCursor",
    "coerce_note_id",
]
