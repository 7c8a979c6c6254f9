"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from enum import Enum
from typing import Optional, Any


class Table(str, Enum):
    """Logical tables exposed by the gateway."""

    TRANSACTIONS = "transactions"
    PLATFORMS = "platforms"
    CATEGORIES = "categories"
    BUDGETS = "budgets"
    GOALS = "goals"
    DEBTS = "debts"
    PROFILES = "profiles"
    SETTINGS = "user_settings"


class Database(ABC):
    """Abstract row-store gateway for walletbook.

    Every operation accepts an optional ``user_id`` scope. Failures never
    raise across this boundary: they are logged and reported as ``None``
    (reads of one row, inserts, updates), ``False`` (deletes) or an empty
    list (list reads).

    Rows are returned as domain entities from ``walletbook.domain.entities``.
    ``values`` dictionaries use the entity field names.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def list_rows(self, table: Table, user_id: Optional[str] = None, **filters: Any) -> list[Any]:
        """List rows of a table, filtered by equality on the given fields.

        Category listings also include global rows (no owner).
        """
        pass

    @abstractmethod
    def get_row(self, table: Table, row_id: int, user_id: Optional[str] = None) -> Optional[Any]:
        """Get one row by ID."""
        pass

    @abstractmethod
    def insert_row(self, table: Table, values: dict[str, Any], user_id: Optional[str] = None) -> Optional[Any]:
        """Insert a row. Returns the stored row, or None on failure."""
        pass

    @abstractmethod
    def update_row(
        self, table: Table, row_id: int, values: dict[str, Any], user_id: Optional[str] = None
    ) -> Optional[Any]:
        """Update fields of a row. Returns the stored row, or None on failure.

        Global categories are readable by every user but only writable
        without a ``user_id``.
        """
        pass

    @abstractmethod
    def delete_row(self, table: Table, row_id: int, user_id: Optional[str] = None) -> bool:
        """Delete a row. Returns False on failure."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group writes into one unit.

        Writes inside the block become visible together when it exits
        normally. If the block raises, every write made inside it is rolled
        back and the exception propagates. Nested blocks join the outer one.
        A failed final commit raises ``StoreError``; it is the only gateway
        failure reported by exception.
        """
        pass
