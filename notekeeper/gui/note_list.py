"""
NoteListPanel — stored notes, newest first, each with a Delete button.

Layout
──────
  ┌─────────────────────────────────────────┐
  │ Notes                                   │
  │ ┌─────────────────────────────────────┐ │
  │ │ Todo                                │ │
  │ │ Date: 10/18/2026                    │ │
  │ │ Call plumber               [Delete] │ │
  │ ├─────────────────────────────────────┤ │
  │ │ Shopping                            │ │
  │ │ …                                   │ │
  │ └─────────────────────────────────────┘ │
  └─────────────────────────────────────────┘

Notes arrive oldest first from a scan; each one is inserted at the top so
the newest ends up first.  "No entries stored." is shown once a scan or a
delete leaves the list empty.
"""

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from notekeeper.gui.viewmodels import EMPTY_MESSAGE, NoteListViewModel, date_stamp
from notekeeper.store.models import Note

__all__ = ["NoteListPanel"]

logger = logging.getLogger(__name__)


class NoteListPanel(QWidget):
    """Renders NoteListViewModel; asks for deletes through a signal."""

    delete_requested = pyqtSignal(object)  # note id

    def __init__(self, parent: QWidget = None) -> None:
        super().__init__(parent)
        self._vm = NoteListViewModel()
        self._entries: dict[int, QFrame] = {}
        self._build_ui()

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        layout.addWidget(QLabel("<b>Notes</b>"))

        self._container = QWidget()
        self._entry_layout = QVBoxLayout(self._container)
        self._entry_layout.setSpacing(6)

        self._empty_label = QLabel(EMPTY_MESSAGE)
        self._empty_label.setVisible(False)
        self._entry_layout.addWidget(self._empty_label)
        self._entry_layout.addStretch()

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._container)
        layout.addWidget(scroll)

    def _make_entry(self, note: Note) -> QFrame:
        entry = QFrame()
        entry.setFrameShape(QFrame.Shape.StyledPanel)
        entry.setProperty("note_id", note.id)

        col = QVBoxLayout(entry)
        title = QLabel(note.title)
        title.setObjectName("title")
        title.setTextFormat(Qt.TextFormat.PlainText)
        title.setStyleSheet("font-weight: bold; font-size: 14pt;")
        col.addWidget(title)
        col.addWidget(QLabel(date_stamp()))

        row = QHBoxLayout()
        body = QLabel(note.body)
        body.setWordWrap(True)
        body.setTextFormat(Qt.TextFormat.PlainText)
        row.addWidget(body, 1)
        delete_btn = QPushButton("Delete")
        delete_btn.clicked.connect(lambda _checked=False, nid=note.id: self.delete_requested.emit(nid))
        row.addWidget(delete_btn)
        col.addLayout(row)
        return entry

    def _update_sentinel(self) -> None:
        self._empty_label.setVisible(self._vm.show_empty_sentinel)

    # ── Slots ──────────────────────────────────────────────────────────────

    def begin_load(self) -> None:
        """Drop every rendered entry before a fresh scan."""
        self._vm.begin_load()
        for entry in self._entries.values():
            self._entry_layout.removeWidget(entry)
            entry.deleteLater()
        self._entries.clear()
        self._update_sentinel()

    def prepend_note(self, note: Note) -> None:
        """Insert *note* above everything currently listed."""
        self._vm.add(note)
        entry = self._make_entry(note)
        # index 0 is the (hidden) sentinel label
        self._entry_layout.insertWidget(1, entry)
        self._entries[note.id] = entry

    def finish_load(self, count: int = 0) -> None:
        self._vm.finish_load()
        self._update_sentinel()
        logger.info("Displayed %d note(s)", count)

    def remove_note(self, note_id: int) -> None:
        """Remove the entry for *note_id* once its delete has committed."""
        self._vm.remove(note_id)
        entry = self._entries.pop(note_id, None)
        if entry is not None:
            self._entry_layout.removeWidget(entry)
            entry.deleteLater()
        self._update_sentinel()

    # ── Public API ─────────────────────────────────────────────────────────

    @property
    def displayed_ids(self) -> list[int]:
        """Note ids in on-screen order, top first."""
        return [n.id for n in self._vm.display_notes]

    @property
    def showing_empty_message(self) -> bool:
        return self._vm.show_empty_sentinel
