"""Data models for the store module."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = ["Note", "OperationState"]


@dataclass(frozen=True)
class Note:
    """
    Point-in-time copy of one stored note.

    Fields
    ──────
    id     — store-assigned key (None until saved; never reused)
    title  — free text, may be empty
    body   — free text, may be empty
    """
    title: str
    body:  str
    id:    Optional[int] = None

    def __str__(self) -> str:
        return f"Note(id={self.id}, title={self.title!r})"


class OperationState(str, Enum):
    """Lifecycle of a single add / iterate / delete request."""
    REQUESTED        = "requested"
    TRANSACTION_OPEN = "transaction_open"
    APPLIED          = "applied"
    COMPLETED        = "completed"
    ERRORED          = "errored"

    @property
    def is_terminal(self) -> bool:
        return self in (OperationState.COMPLETED, OperationState.ERRORED)
