"""SQLite database layer: connection and schema management."""

from shared.db.connection import Database

__all__ = [
    "Database",
]
