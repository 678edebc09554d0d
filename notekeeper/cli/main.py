"""
CLI entry point for notekeeper.

Usage
─────
  # Store a note
  python -m notekeeper add --title "Shopping" --body "Milk,Eggs"

  # List notes, newest first
  python -m notekeeper list

  # Delete by id (unknown ids are a successful no-op)
  python -m notekeeper delete --id 1

  # Open the window
  python -m notekeeper gui

Subcommands are implemented as standalone functions (cmd_add, cmd_list,
cmd_delete, cmd_gui) so they can be unit-tested without invoking argparse.
"""

import argparse
import logging
import sys
from typing import Optional

from notekeeper.exceptions import OpenError, TransactionError
from notekeeper.gui.viewmodels import EMPTY_MESSAGE
from notekeeper.store.db import DEFAULT_DB_PATH, NoteStore
from notekeeper.store.repository import NoteRepository

__all__ = ["build_parser", "cmd_add", "cmd_list", "cmd_delete", "cmd_gui", "main"]

logger = logging.getLogger(__name__)

# Seconds a command waits on a database locked by another process.
CLI_BUSY_TIMEOUT = 5.0


# ── Argument parser ────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Subcommands: add | list | delete | gui
    """
    parser = argparse.ArgumentParser(
        prog="notekeeper",
        description="Local title/body note store",
    )
    parser.add_argument(
        "--db",
        default=DEFAULT_DB_PATH,
        metavar="PATH",
        help=f"SQLite database path (default: {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable verbose debug logging",
    )

    sub = parser.add_subparsers(dest="subcommand")

    # ── add ───────────────────────────────────────────────────────────────
    add = sub.add_parser("add", help="Store a new note")
    add.add_argument("--title", default="", metavar="TEXT", help="Note title")
    add.add_argument("--body", default="", metavar="TEXT", help="Note text")

    # ── list ──────────────────────────────────────────────────────────────
    sub.add_parser("list", help="List notes, newest first")

    # ── delete ────────────────────────────────────────────────────────────
    dele = sub.add_parser("delete", help="Delete a note by id")
    dele.add_argument(
        "--id",
        required=True,
        dest="note_id",
        metavar="ID",
        help="Id of the note to delete",
    )

    # ── gui ───────────────────────────────────────────────────────────────
    sub.add_parser("gui", help="Open the note window")

    return parser


# ── Command implementations ───────────────────────────────────────────────────


def cmd_add(repo: NoteRepository, title: str, body: str) -> int:
    """Store a note and print its id.  Returns the new id."""
    note_id = repo.add(title, body)
    print(f"Added note {note_id}")
    return note_id


def cmd_list(repo: NoteRepository) -> int:
    """
    Print every note, most recent first.

    Returns:
        Number of notes printed.
    """
    with repo.iterate() as cursor:
        notes = list(cursor)
    if not notes:
        print(EMPTY_MESSAGE)
        return 0
    for note in reversed(notes):
        print(f"[{note.id:>4}]  {note.title} — {note.body}")
    return len(notes)


def cmd_delete(repo: NoteRepository, note_id) -> int:
    """Delete *note_id*.  Returns rows removed (0 when it did not exist)."""
    removed = repo.delete(note_id)
    if removed:
        print(f"Deleted note {note_id}")
    else:
        print(f"No note with id {note_id}; nothing deleted")
    return removed


def cmd_gui(store: NoteStore) -> int:
    """Run the Qt window until it is closed.  Returns the app exit code."""
    from PyQt6.QtWidgets import QApplication
    from notekeeper.gui.main_window import MainWindow

    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(db_path=str(store.path))
    window.show()
    return app.exec()


# ── Entry point ───────────────────────────────────────────────────────────────


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point. Returns exit code."""
    parser = build_parser()
    ns = parser.parse_args(argv)

    level = logging.DEBUG if ns.debug else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    if ns.subcommand is None:
        parser.print_help()
        return 0

    store = NoteStore(db_path=ns.db, busy_timeout=CLI_BUSY_TIMEOUT)

    # The window opens its own handle; one open per session.
    if ns.subcommand == "gui":
        return cmd_gui(store)

    try:
        store.open()
    except OpenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    repo = NoteRepository(store)
    try:
        if ns.subcommand == "add":
            cmd_add(repo, title=ns.title, body=ns.body)
        elif ns.subcommand == "list":
            cmd_list(repo)
        elif ns.subcommand == "delete":
            cmd_delete(repo, ns.note_id)
        else:
            parser.print_help()
    except (TransactionError, ValueError) as exc:
        logger.debug("%s failed", ns.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
