"""
MainWindow — top-level window: the note form above the note list.

Opens the store once at construction and wires:

  form.submitted            → ops.add
  ops.inserted              → form.clear
  ops.add_completed         → ops.refresh
  ops.iteration_started     → note_list.begin_load
  ops.note_loaded           → note_list.prepend_note
  ops.iteration_finished    → note_list.finish_load
  note_list.delete_requested→ ops.delete
  ops.delete_completed      → note_list.remove_note
  ops.failed                → status bar

If the database cannot be opened the window still comes up, shows the
error and keeps the form disabled; restarting is the only way to retry.
"""

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow,
    QSplitter,
    QWidget,
)
from PyQt6.QtCore import Qt

from notekeeper.exceptions import OpenError
from notekeeper.gui.note_form import NoteFormPanel
from notekeeper.gui.note_list import NoteListPanel
from notekeeper.store.db import DEFAULT_DB_PATH, NoteStore
from notekeeper.store.operations import NoteOperations
from notekeeper.store.repository import NoteRepository

__all__ = ["MainWindow"]

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Root window: owns the store handle for the whole session."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH, parent: QWidget = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Notes")
        self.resize(640, 720)

        self._store = NoteStore(db_path)
        self._ops: Optional[NoteOperations] = None
        self.open_error: Optional[str] = None

        self._build_ui()
        self._open_store()

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        splitter = QSplitter(Qt.Orientation.Vertical)
        self._form = NoteFormPanel()
        self._note_list = NoteListPanel()
        splitter.addWidget(self._form)
        splitter.addWidget(self._note_list)
        self.setCentralWidget(splitter)

    # ── Store wiring ───────────────────────────────────────────────────────

    def _open_store(self) -> None:
        try:
            self._store.open()
        except OpenError as exc:
            self.open_error = str(exc)
            self._form.set_enabled(False)
            self.statusBar().showMessage(f"Database failed to open: {exc}")
            return

        self._ops = NoteOperations(NoteRepository(self._store), parent=self)
        self._connect_operations()
        self._ops.refresh()

    def _connect_operations(self) -> None:
        ops = self._ops
        self._form.submitted.connect(self._on_submitted)
        ops.inserted.connect(self._form.clear)
        ops.add_completed.connect(lambda _note_id: ops.refresh())

        ops.iteration_started.connect(self._note_list.begin_load)
        ops.note_loaded.connect(self._note_list.prepend_note)
        ops.iteration_finished.connect(self._note_list.finish_load)

        self._note_list.delete_requested.connect(self._on_delete_requested)
        ops.delete_completed.connect(self._note_list.remove_note)

        ops.failed.connect(self._on_failed)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_submitted(self, title: str, body: str) -> None:
        self._ops.add(title, body)

    def _on_delete_requested(self, note_id) -> None:
        try:
            self._ops.delete(note_id)
        except ValueError as exc:
            logger.error("Refusing delete: %s", exc)
            self.statusBar().showMessage(str(exc))

    def _on_failed(self, kind: str, message: str) -> None:
        self.statusBar().showMessage(f"{kind} failed: {message}")

    # ── Public API ─────────────────────────────────────────────────────────

    @property
    def operations(self) -> Optional[NoteOperations]:
        """The completion channel, or None when the store failed to open."""
        return self._ops

    def closeEvent(self, event) -> None:
        # queued requests must not reach a closed handle
        if self._ops is not None:
            self._ops.shutdown()
        self._store.close()
        super().closeEvent(event)
