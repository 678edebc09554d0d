"""
NoteFormPanel — captures a title and body and emits them on submit.

Layout
──────
  ┌─────────────────────────────────────────┐
  │ Note title: [___________________________]│
  │ Note text:                               │
  │ ┌──────────────────────────────────────┐ │
  │ │                                      │ │
  │ └──────────────────────────────────────┘ │
  │                      [Create new note]   │
  └─────────────────────────────────────────┘
"""

import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from notekeeper.gui.viewmodels import NoteFormViewModel

__all__ = ["NoteFormPanel"]

logger = logging.getLogger(__name__)


class NoteFormPanel(QWidget):
    """Title/body entry form.  Does not talk to the store itself."""

    submitted = pyqtSignal(str, str)  # title, body

    def __init__(self, parent: QWidget = None) -> None:
        super().__init__(parent)
        self._vm = NoteFormViewModel()
        self._build_ui()

    # ── UI construction ────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        layout.addWidget(QLabel("<b>Enter a new note</b>"))

        title_row = QHBoxLayout()
        title_row.addWidget(QLabel("Note title:"))
        self._title_edit = QLineEdit()
        self._title_edit.textChanged.connect(lambda t: setattr(self._vm, "title", t))
        self._title_edit.returnPressed.connect(self._on_submit)
        title_row.addWidget(self._title_edit)
        layout.addLayout(title_row)

        layout.addWidget(QLabel("Note text:"))
        self._body_edit = QPlainTextEdit()
        self._body_edit.textChanged.connect(
            lambda: setattr(self._vm, "body", self._body_edit.toPlainText())
        )
        layout.addWidget(self._body_edit)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        self._submit_btn = QPushButton("Create new note")
        self._submit_btn.clicked.connect(self._on_submit)
        btn_row.addWidget(self._submit_btn)
        layout.addLayout(btn_row)

    # ── Slots ──────────────────────────────────────────────────────────────

    def _on_submit(self) -> None:
        title, body = self._vm.submission()
        logger.debug("Form submitted: %r", title)
        self.submitted.emit(title, body)

    # ── Public API ─────────────────────────────────────────────────────────

    def clear(self, *_args) -> None:
        """Empty both fields.  Accepts and ignores signal arguments."""
        self._title_edit.clear()
        self._body_edit.clear()
        self._vm.clear()

    def set_enabled(self, enabled: bool) -> None:
        self._title_edit.setEnabled(enabled)
        self._body_edit.setEnabled(enabled)
        self._submit_btn.setEnabled(enabled)
