"""
Unit tests for notekeeper/gui/ Qt widgets — requires PyQt6 + offscreen display.

Run with: QT_QPA_PLATFORM=offscreen pytest tests/unit/test_gui_widgets.py

Coverage plan
─────────────
NoteFormPanel   → 3 tests
NoteListPanel   → 3 tests
MainWindow      → 6 tests
"""

import time

import pytest

pytest.importorskip("PyQt6.QtWidgets", reason="PyQt6 widgets not available")


def _note(note_id: int, title: str = "t"):
    from notekeeper.store.models import Note
    return Note(id=note_id, title=title, body="b")


def _settle(app, ops, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    app.processEvents()
    while not ops.idle and time.monotonic() < deadline:
        app.processEvents()
    assert ops.idle


# ─────────────────────────────────────────────────────────────────────────────
# 1. NoteFormPanel
# ─────────────────────────────────────────────────────────────────────────────

class TestNoteFormPanel:

    def test_has_submit_button(self, qt_app):
        from PyQt6.QtWidgets import QPushButton
        from notekeeper.gui.note_form import NoteFormPanel
        panel = NoteFormPanel()
        labels = [b.text().lower() for b in panel.findChildren(QPushButton)]
        assert any("create" in lbl for lbl in labels)

    def test_submit_emits_title_and_body(self, qt_app):
        from notekeeper.gui.note_form import NoteFormPanel
        panel = NoteFormPanel()
        got = []
        panel.submitted.connect(lambda t, b: got.append((t, b)))
        panel._title_edit.setText("Shopping")
        panel._body_edit.setPlainText("Milk,Eggs")
        panel._submit_btn.click()
        assert got == [("Shopping", "Milk,Eggs")]

    def test_clear_empties_fields(self, qt_app):
        from notekeeper.gui.note_form import NoteFormPanel
        panel = NoteFormPanel()
        panel._title_edit.setText("x")
        panel._body_edit.setPlainText("y")
        panel.clear(7)
        assert panel._title_edit.text() == ""
        assert panel._body_edit.toPlainText() == ""


# ─────────────────────────────────────────────────────────────────────────────
# 2. NoteListPanel
# ─────────────────────────────────────────────────────────────────────────────

class TestNoteListPanel:

    def test_prepend_puts_newest_on_top(self, qt_app):
        from notekeeper.gui.note_list import NoteListPanel
        panel = NoteListPanel()
        panel.begin_load()
        for i in (1, 2, 3):
            panel.prepend_note(_note(i))
        panel.finish_load(3)
        assert panel.displayed_ids == [3, 2, 1]
        assert not panel.showing_empty_message

    def test_empty_load_shows_message(self, qt_app):
        from notekeeper.gui.note_list import NoteListPanel
        panel = NoteListPanel()
        assert not panel.showing_empty_message
        panel.begin_load()
        panel.finish_load(0)
        assert panel.showing_empty_message

    def test_delete_button_requests_delete(self, qt_app):
        from PyQt6.QtWidgets import QPushButton
        from notekeeper.gui.note_list import NoteListPanel
        panel = NoteListPanel()
        panel.begin_load()
        panel.prepend_note(_note(5))
        panel.finish_load(1)
        requested = []
        panel.delete_requested.connect(requested.append)
        buttons = [b for b in panel.findChildren(QPushButton) if b.text() == "Delete"]
        buttons[0].click()
        assert requested == [5]


# ─────────────────────────────────────────────────────────────────────────────
# 3. MainWindow
# ─────────────────────────────────────────────────────────────────────────────

class TestMainWindow:

    def test_fresh_store_shows_empty_message(self, qt_app, tmp_path):
        from notekeeper.gui.main_window import MainWindow
        win = MainWindow(db_path=str(tmp_path / "w.db"))
        _settle(qt_app, win.operations)
        assert win._note_list.showing_empty_message
        win.close()

    def test_submit_adds_clears_and_lists(self, qt_app, tmp_path):
        from notekeeper.gui.main_window import MainWindow
        win = MainWindow(db_path=str(tmp_path / "w.db"))
        _settle(qt_app, win.operations)

        win._form._title_edit.setText("Shopping")
        win._form._body_edit.setPlainText("Milk,Eggs")
        win._form._submit_btn.click()
        _settle(qt_app, win.operations)

        win._form._title_edit.setText("Todo")
        win._form._body_edit.setPlainText("Call plumber")
        win._form._submit_btn.click()
        _settle(qt_app, win.operations)

        assert win._form._title_edit.text() == ""
        assert win._note_list.displayed_ids == [2, 1]
        win.close()

    def test_delete_removes_entry_and_shows_message(self, qt_app, tmp_path):
        from notekeeper.gui.main_window import MainWindow
        win = MainWindow(db_path=str(tmp_path / "w.db"))
        win.operations.add("only", "note")
        _settle(qt_app, win.operations)
        assert win._note_list.displayed_ids == [1]

        win._note_list.delete_requested.emit(1)
        _settle(qt_app, win.operations)
        assert win._note_list.displayed_ids == []
        assert win._note_list.showing_empty_message
        win.close()

    def test_open_failure_disables_form(self, qt_app, tmp_path):
        from notekeeper.gui.main_window import MainWindow
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        win = MainWindow(db_path=str(blocker / "w.db"))
        assert win.operations is None
        assert win.open_error
        assert not win._form._submit_btn.isEnabled()
        win.close()

    def test_failed_refresh_keeps_listed_notes(self, qt_app, tmp_path):
        from PyQt6.QtGui import QCloseEvent
        from notekeeper.gui.main_window import MainWindow
        win = MainWindow(db_path=str(tmp_path / "w.db"))
        win.operations.add("kept", "note")
        _settle(qt_app, win.operations)
        assert win._note_list.displayed_ids == [1]

        win._store.close()
        win.operations.refresh()
        _settle(qt_app, win.operations)
        assert win._note_list.displayed_ids == [1]
        assert not win._note_list.showing_empty_message
        assert "iterate failed" in win.statusBar().currentMessage()
        win.closeEvent(QCloseEvent())

    def test_close_stops_queued_requests(self, qt_app, tmp_path):
        from PyQt6.QtGui import QCloseEvent
        from notekeeper.gui.main_window import MainWindow
        win = MainWindow(db_path=str(tmp_path / "w.db"))
        failures = []
        win.operations.failed.connect(lambda kind, _msg: failures.append(kind))
        win.operations.add("never", "stored")
        win.closeEvent(QCloseEvent())
        for _ in range(10):
            qt_app.processEvents()
        assert not win._store.is_open
        assert win.operations.idle
        assert failures == []
