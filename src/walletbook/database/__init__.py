"""Database layer for walletbook application."""

from walletbook.database.base import Database, Table
from walletbook.database.factories import (
    create_database,
    create_memory_database,
    create_sqlite_database,
)

__all__ = [
    "Database",
    "Table",
    "create_database",
    "create_memory_database",
    "create_sqlite_database",
]
