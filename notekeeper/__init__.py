"""
notekeeper — a local, persistent title/body note store.

Sub-packages
────────────
store  — SQLite persistence: schema, transactional add / iterate / delete
cli    — command-line interface
gui    — PyQt6 front-end (form + newest-first note list)
"""

__version__ = "0.1.0"
