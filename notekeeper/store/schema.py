"""
Versioned schema for the note database.

Each entry in MIGRATIONS brings the database from ``version - 1`` to
``version``.  The applied version is stamped into ``PRAGMA user_version``
so a migration never runs twice against the same file.
"""

__all__ = [
    "DB_NAME",
    "TABLE",
    "SCHEMA_VERSION",
    "MIGRATIONS",
    "pending_migrations",
]

DB_NAME = "notes_db"
TABLE = "notes"
SCHEMA_VERSION = 1

MIGRATIONS: dict[int, tuple[str, ...]] = {
    1: (
        f"""
        CREATE TABLE IF NOT EXISTS {TABLE} (
            id    INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            body  TEXT NOT NULL
        )
        """,
        # Not used by any query yet; part of the on-disk contract.
        f"CREATE INDEX IF NOT EXISTS idx_{TABLE}_title ON {TABLE} (title)",
        f"CREATE INDEX IF NOT EXISTS idx_{TABLE}_body  ON {TABLE} (body)",
    ),
}


def pending_migrations(current: int, target: int) -> list[int]:
    """
    Return the migration versions needed to go from *current* to *target*.

    Raises:
        ValueError: *target* is older than *current*, or a version in
                    between has no migration registered.
    """
    if target < current:
        raise ValueError(
            f"database schema version {current} is newer than requested {target}"
        )
    versions = list(range(current + 1, target + 1))
    missing = [v for v in versions if v not in MIGRATIONS]
    if missing:
        raise ValueError(f"no migration registered for schema version(s) {missing}")
    return versions
