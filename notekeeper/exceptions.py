"""
Project-wide custom exception hierarchy.
All modules raise subclasses of NotekeeperError — never bare Exception.
"""

__all__ = [
    "NotekeeperError",
    "StoreError",
    "OpenError",
    "TransactionError",
]


class NotekeeperError(Exception):
    """Root exception for all notekeeper errors."""


# ── Store ─────────────────────────────────────────────────────────────────────

class StoreError(NotekeeperError):
    """Raised on SQLite / store I/O errors and handle misuse."""


class OpenError(StoreError):
    """Raised when the note database cannot be opened or created."""


class TransactionError(StoreError):
    """Raised when a read or read-write transaction cannot be started or applied."""
