"""
GUI ViewModels — pure-Python state containers for the note window.

No Qt imports here; every class is testable without a display.

Public API
──────────
EMPTY_MESSAGE        — sentinel text shown when the store holds no notes
date_stamp           — "Date: MM/DD/YYYY" label for an entry
NoteFormViewModel    — title/body input buffers
NoteListViewModel    — notes delivered by a scan + display ordering
"""

import logging
from datetime import date
from typing import Optional

from notekeeper.store.models import Note

__all__ = [
    "EMPTY_MESSAGE",
    "date_stamp",
    "NoteFormViewModel",
    "NoteListViewModel",
]

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No entries stored."


def date_stamp(today: Optional[date] = None) -> str:
    """Render the entry date label; defaults to the current local date."""
    today = today or date.today()
    return f"Date: {today:%m/%d/%Y}"


# ── NoteFormViewModel ──────────────────────────────────────────────────────────

class NoteFormViewModel:
    """
    Holds what the user has typed.

    The buffers are cleared only once the store reports the insert
    succeeded, so a failed add leaves the input in place.
    """

    def __init__(self) -> None:
        self.title: str = ""
        self.body:  str = ""

    def submission(self) -> tuple[str, str]:
        """Return the (title, body) pair to hand to the store."""
        return self.title, self.body

    def clear(self) -> None:
        self.title = ""
        self.body = ""


# ── NoteListViewModel ──────────────────────────────────────────────────────────

class NoteListViewModel:
    """
    Tracks the notes shown in the list.

    Attributes
    ──────────
    notes      — notes in the order the store delivered them (ascending id)
    loading    — a scan is in progress
    loaded     — at least one scan has finished
    display_notes       — derived: newest first
    show_empty_sentinel — derived: a scan finished and nothing is listed
    """

    def __init__(self) -> None:
        self.notes:   list[Note] = []
        self.loading: bool       = False
        self.loaded:  bool       = False

    def begin_load(self) -> None:
        """Start a fresh scan; previous contents are dropped."""
        self.notes.clear()
        self.loading = True

    def add(self, note: Note) -> None:
        self.notes.append(note)

    def finish_load(self) -> None:
        self.loading = False
        self.loaded = True
        logger.debug("Note list loaded with %d note(s)", len(self.notes))

    def remove(self, note_id: int) -> bool:
        """Drop *note_id* from the list.  Returns False if it was not listed."""
        for i, note in enumerate(self.notes):
            if note.id == note_id:
                del self.notes[i]
                return True
        return False

    @property
    def display_notes(self) -> list[Note]:
        """Most recently created note first."""
        return list(reversed(self.notes))

    @property
    def show_empty_sentinel(self) -> bool:
        return self.loaded and not self.loading and not self.notes
