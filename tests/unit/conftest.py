"""
Shared fixtures for the unit suite.

Qt allows one application object per process.  Widget tests need a
QApplication, the operation tests only an event loop, so whichever test
asks first gets a QApplication when QtWidgets can load and a
QCoreApplication otherwise.
"""

import os
import sys

import pytest

# Ensure offscreen rendering when no display is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app():
    """Single Qt application for the whole session."""
    QtCore = pytest.importorskip("PyQt6.QtCore", reason="PyQt6 not installed")
    app = QtCore.QCoreApplication.instance()
    if app is None:
        try:
            from PyQt6.QtWidgets import QApplication
        except ImportError:
            app = QtCore.QCoreApplication(sys.argv)
        else:
            app = QApplication(sys.argv)
    yield app
    # Don't call app.quit() — other tests in the session may still need it.


@pytest.fixture
def store(tmp_path):
    """Return an opened NoteStore backed by a temporary SQLite file."""
    from notekeeper.store.db import NoteStore
    s = NoteStore(db_path=str(tmp_path / "notes.db")).open()
    yield s
    s.close()


@pytest.fixture
def repo(store):
    from notekeeper.store.repository import NoteRepository
    return NoteRepository(store)
