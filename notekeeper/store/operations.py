"""
NoteOperations — asynchronous front for NoteRepository on the Qt event loop.

Usage (MainWindow)::

    ops = NoteOperations(NoteRepository(store))
    ops.inserted.connect(form.clear)
    ops.add_completed.connect(lambda _id: ops.refresh())
    ops.iteration_started.connect(note_list.begin_load)
    ops.note_loaded.connect(note_list.prepend_note)
    ops.iteration_finished.connect(note_list.finish_load)
    ops.failed.connect(status_bar.show_error)

    ops.add("Shopping", "Milk,Eggs")     # returns immediately

Every request returns an Operation and is queued; the work runs on a later
turn of the same thread's event loop, one transaction at a time in request
order.  An iteration yields to the event loop between cursor steps.

Signals
───────
inserted(object)          — new note id, insert succeeded (before commit)
add_completed(object)     — new note id, add transaction committed
iteration_started()       — a scan opened its transaction
note_loaded(object)       — one Note per cursor step, ascending id
iteration_finished(int)   — notes produced by the scan (0 == empty table)
delete_completed(object)  — id whose delete transaction committed
failed(str, str)          — operation kind, error message

Slots connected to ``inserted`` run inside the add transaction and must not
call back into the store.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from notekeeper.store.models import Note, OperationState
from notekeeper.store.repository import NoteCursor, NoteRepository, coerce_note_id

__all__ = ["Operation", "NoteOperations"]

logger = logging.getLogger(__name__)

ADD = "add"
ITERATE = "iterate"
DELETE = "delete"


@dataclass
class Operation:
    """
    Tracks one queued request.

    Attributes
    ──────────
    kind    — "add" | "iterate" | "delete"
    state   — OperationState, ends in COMPLETED or ERRORED
    result  — add: new id; iterate: list[Note]; delete: rows removed
    error   — message when state is ERRORED
    notes   — iterate only: notes delivered so far
    """
    kind:   str
    state:  OperationState = OperationState.REQUESTED
    result: Any            = None
    error:  Optional[str]  = None
    notes:  list[Note]     = field(default_factory=list, repr=False)

    @property
    def is_done(self) -> bool:
        return self.state.is_terminal


class NoteOperations(QObject):
    """
    Queues add / iterate / delete requests and reports through signals.

    Never blocks the caller; nothing is retried.  Construct it on the
    thread that runs the event loop, and call ``shutdown()`` before the
    store underneath is closed.
    """

    inserted           = pyqtSignal(object)
    add_completed      = pyqtSignal(object)
    iteration_started  = pyqtSignal()
    note_loaded        = pyqtSignal(object)
    iteration_finished = pyqtSignal(int)
    delete_completed   = pyqtSignal(object)
    failed             = pyqtSignal(str, str)

    def __init__(self, repository: NoteRepository, parent: QObject = None) -> None:
        super().__init__(parent)
        self._repo = repository
        self._queue: deque[tuple[Operation, Callable[[Operation], None]]] = deque()
        self._busy = False
        self._closed = False
        self._active: Optional[Operation] = None
        self._cursor: Optional[NoteCursor] = None

    # ── Public API ─────────────────────────────────────────────────────────

    def add(self, title: str, body: str) -> Operation:
        """Queue an insert of (*title*, *body*)."""
        if not isinstance(title, str) or not isinstance(body, str):
            raise TypeError("title and body must be str")
        return self._submit(ADD, lambda op: self._run_add(op, title, body))

    def refresh(self) -> Operation:
        """Queue a full scan; notes arrive one by one on ``note_loaded``."""
        return self._submit(ITERATE, self._run_iterate)

    def delete(self, note_id) -> Operation:
        """
        Queue a delete of *note_id*.

        Raises:
            ValueError: *note_id* is not numeric (checked before queueing).
        """
        key = coerce_note_id(note_id)
        return self._submit(DELETE, lambda op: self._run_delete(op, key))

    def shutdown(self) -> None:
        """
        Stop dispatching.  A scan in progress is rolled back and every
        request not yet run ends ERRORED; no signal fires for either.
        Requests made afterwards are refused the same way.
        """
        self._closed = True
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None
        if self._active is not None and not self._active.is_done:
            self._abandon(self._active)
        self._active = None
        dropped = 0
        while self._queue:
            op, _job = self._queue.popleft()
            self._abandon(op)
            dropped += 1
        self._busy = False
        logger.info("Operations shut down (%d request(s) dropped)", dropped)

    @property
    def idle(self) -> bool:
        """True when no request is running or waiting."""
        return not self._busy and not self._queue

    # ── Scheduling ─────────────────────────────────────────────────────────

    def _submit(self, kind: str, job: Callable[[Operation], None]) -> Operation:
        op = Operation(kind=kind)
        if self._closed:
            self._abandon(op)
            return op
        self._queue.append((op, job))
        logger.debug("Queued %s (%d pending)", kind, len(self._queue))
        self._schedule()
        return op

    def _schedule(self) -> None:
        if self._closed or self._busy or not self._queue:
            return
        self._busy = True
        QTimer.singleShot(0, self._run_next)

    def _run_next(self) -> None:
        if self._closed or not self._queue:
            return
        op, job = self._queue.popleft()
        self._active = op
        op.state = OperationState.TRANSACTION_OPEN
        job(op)

    def _finish(self, op: Operation, result: Any) -> None:
        op.result = result
        op.state = OperationState.COMPLETED
        self._active = None
        self._busy = False
        self._schedule()

    def _fail(self, op: Operation, exc: Exception) -> None:
        op.error = str(exc)
        op.state = OperationState.ERRORED
        logger.error("%s failed: %s", op.kind, exc)
        self._active = None
        self._busy = False
        self.failed.emit(op.kind, op.error)
        self._schedule()

    @staticmethod
    def _abandon(op: Operation) -> None:
        op.error = "shut down"
        op.state = OperationState.ERRORED

    # ── Jobs ───────────────────────────────────────────────────────────────

    def _run_add(self, op: Operation, title: str, body: str) -> None:
        def on_inserted(note_id: int) -> None:
            op.state = OperationState.APPLIED
            self.inserted.emit(note_id)

        try:
            note_id = self._repo.add(title, body, on_inserted=on_inserted)
        except Exception as exc:  # noqa: BLE001
            self._fail(op, exc)
            return
        self._finish(op, note_id)
        self.add_completed.emit(note_id)

    def _run_delete(self, op: Operation, key: int) -> None:
        try:
            removed = self._repo.delete(key)
        except Exception as exc:  # noqa: BLE001
            self._fail(op, exc)
            return
        op.state = OperationState.APPLIED
        self._finish(op, removed)
        self.delete_completed.emit(key)

    def _run_iterate(self, op: Operation) -> None:
        cursor = self._repo.iterate()
        try:
            cursor.open()
        except Exception as exc:  # noqa: BLE001
            self._fail(op, exc)
            return
        self._cursor = cursor
        self.iteration_started.emit()
        self._step(op, cursor)

    def _step(self, op: Operation, cursor: NoteCursor) -> None:
        if self._closed:
            return
        try:
            note = next(cursor)
        except StopIteration:
            self._cursor = None
            self._finish(op, list(op.notes))
            self.iteration_finished.emit(cursor.count)
            return
        except Exception as exc:  # noqa: BLE001
            cursor.close()
            self._cursor = None
            self._fail(op, exc)
            return

        op.state = OperationState.APPLIED
        op.notes.append(note)
        self.note_loaded.emit(note)
        QTimer.singleShot(0, lambda: self._step(op, cursor))
