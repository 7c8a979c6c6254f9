"""In-memory implementation of the Database interface.

Used for tests and throwaway sessions. It records every gateway call and can
be told to fail specific operations, which makes it a convenient stand-in
when checking what a service writes and in which order.
"""

import copy
import dataclasses
import logging
from contextlib import contextmanager
from datetime import datetime, date, UTC
from decimal import Decimal
from typing import Callable, Iterator, Optional, Any

from walletbook.database.base import Database, Table
from walletbook.domain import entities as domain

logger = logging.getLogger(__name__)

ENTITY_TYPES: dict[Table, type] = {
    Table.PLATFORMS: domain.Platform,
    Table.TRANSACTIONS: domain.Transaction,
    Table.CATEGORIES: domain.Category,
    Table.BUDGETS: domain.Budget,
    Table.GOALS: domain.Goal,
    Table.DEBTS: domain.Debt,
    Table.PROFILES: domain.UserProfile,
    Table.SETTINGS: domain.UserSettings,
}

# Column defaults, mirroring walletbook.database.models
DEFAULTS: dict[Table, dict[str, Any]] = {
    Table.PLATFORMS: {"balance": Decimal("0"), "is_savings": False, "color": "blue"},
    Table.TRANSACTIONS: {
        "description": "",
        "subcategory": "",
        "destination_account_id": None,
        "receipt_url": None,
        "struck": False,
    },
    Table.CATEGORIES: {"category_type": "expense", "parent_id": None, "is_default": False, "is_active": True},
    Table.BUDGETS: {"period": "monthly", "is_active": True},
    Table.GOALS: {"current": Decimal("0"), "deadline": None, "description": None},
    Table.DEBTS: {
        "interest": Decimal("0"),
        "minimum": Decimal("0"),
        "due_date": None,
        "description": None,
    },
    Table.PROFILES: {
        "full_name": None,
        "phone_number": None,
        "location": None,
        "birth_date": None,
        "avatar_url": None,
    },
    Table.SETTINGS: {
        "language": "id",
        "theme": "system",
        "payroll_date": None,
        "budget_warning_threshold": 80,
        "updated_at": None,
    },
}


def _sort_key(table: Table) -> Callable[[Any], Any]:
    if table == Table.TRANSACTIONS:
        return lambda row: (row.date, row.id)
    if table == Table.PLATFORMS:
        return lambda row: row.name
    if table == Table.CATEGORIES:
        return lambda row: row.name
    if table == Table.BUDGETS:
        return lambda row: (row.category, row.subcategory)
    if table == Table.GOALS:
        return lambda row: (row.deadline is not None, row.deadline or date.min, row.id)
    if table == Table.DEBTS:
        return lambda row: (row.due_date is not None, row.due_date or date.min, row.id)
    return lambda row: row.id


class InMemoryDatabase(Database):
    """Dictionary-backed implementation of Database interface.

    Attributes:
        calls: Every gateway call made, as ``(operation, table, row_id)``
        failures: ``(operation, table)`` pairs that should fail, e.g.
            ``("update", Table.PLATFORMS)``
    """

    def __init__(self):
        self._rows: dict[Table, dict[int, Any]] = {table: {} for table in Table}
        self._next_id: dict[Table, int] = {table: 1 for table in Table}
        self._snapshot: Optional[tuple[dict, dict]] = None
        self.calls: list[tuple[str, Table, Optional[int]]] = []
        self.failures: set[tuple[str, Table]] = set()

    def connect(self) -> None:
        """Connect to the database."""
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    def fail_on(self, operation: str, table: Table) -> None:
        """Make every later ``operation`` call on ``table`` fail."""
        self.failures.add((operation, table))

    def calls_for(self, operation: str, table: Optional[Table] = None) -> list[tuple[str, Table, Optional[int]]]:
        """Return recorded calls for an operation, optionally on one table."""
        return [
            call
            for call in self.calls
            if call[0] == operation and (table is None or call[1] == table)
        ]

    def _record(self, operation: str, table: Table, row_id: Optional[int] = None) -> bool:
        """Record a call and return False if it is configured to fail."""
        self.calls.append((operation, table, row_id))
        if (operation, table) in self.failures:
            logger.error("Error running %s on %s: simulated failure", operation, table.value)
            return False
        return True

    def _visible(self, table: Table, row: Any, user_id: Optional[str]) -> bool:
        if user_id is None:
            return True
        if table == Table.CATEGORIES and row.user_id is None:
            return True
        return row.user_id == user_id

    def _owned(self, row: Any, user_id: Optional[str]) -> bool:
        return user_id is None or row.user_id == user_id

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Snapshot the tables and restore them if the block raises."""
        if self._snapshot is not None:
            yield
            return

        self._snapshot = (copy.deepcopy(self._rows), dict(self._next_id))
        try:
            yield
        except Exception:
            self._rows, self._next_id = self._snapshot
            raise
        finally:
            self._snapshot = None

    def list_rows(self, table: Table, user_id: Optional[str] = None, **filters: Any) -> list[Any]:
        """List rows of a table, filtered by equality on the given fields."""
        if not self._record("list", table):
            return []
        field_names = {f.name for f in dataclasses.fields(ENTITY_TYPES[table])}
        unknown = set(filters) - field_names
        if unknown:
            logger.error("Error fetching %s: unknown filter fields %s", table.value, ", ".join(sorted(unknown)))
            return []

        rows = [
            row
            for row in self._rows[table].values()
            if self._visible(table, row, user_id)
            and all(getattr(row, name) == value for name, value in filters.items())
        ]
        rows.sort(key=_sort_key(table), reverse=table == Table.TRANSACTIONS)
        return rows

    def get_row(self, table: Table, row_id: int, user_id: Optional[str] = None) -> Optional[Any]:
        """Get one row by ID."""
        if not self._record("get", table, row_id):
            return None
        row = self._rows[table].get(row_id)
        if row is None or not self._visible(table, row, user_id):
            return None
        return row

    def insert_row(self, table: Table, values: dict[str, Any], user_id: Optional[str] = None) -> Optional[Any]:
        """Insert a row. Returns the stored row, or None on failure."""
        if not self._record("insert", table):
            return None

        entity_type = ENTITY_TYPES[table]
        field_names = {f.name for f in dataclasses.fields(entity_type)}
        data: dict[str, Any] = {"user_id": None, **DEFAULTS[table], **values}
        if user_id is not None:
            data["user_id"] = user_id
        unknown = set(data) - field_names
        if unknown:
            logger.error("Error adding %s: unknown fields %s", table.value, ", ".join(sorted(unknown)))
            return None

        row_id = self._next_id[table]
        data["id"] = row_id
        if "created_at" in field_names:
            data["created_at"] = datetime.now(UTC)
        try:
            row = entity_type(**data)
        except TypeError as e:
            logger.error("Error adding %s: %s", table.value, e)
            return None

        self._next_id[table] = row_id + 1
        self._rows[table][row_id] = row
        return row

    def update_row(
        self, table: Table, row_id: int, values: dict[str, Any], user_id: Optional[str] = None
    ) -> Optional[Any]:
        """Update fields of a row. Returns the stored row, or None on failure."""
        if not self._record("update", table, row_id):
            return None
        row = self._rows[table].get(row_id)
        if row is None or not self._owned(row, user_id):
            logger.error("Error updating %s %s: row not found", table.value, row_id)
            return None
        try:
            updated = dataclasses.replace(row, **values)
        except TypeError as e:
            logger.error("Error updating %s %s: %s", table.value, row_id, e)
            return None
        self._rows[table][row_id] = updated
        return updated

    def delete_row(self, table: Table, row_id: int, user_id: Optional[str] = None) -> bool:
        """Delete a row. Returns False on failure."""
        if not self._record("delete", table, row_id):
            return False
        row = self._rows[table].get(row_id)
        if row is None or not self._owned(row, user_id):
            logger.error("Error deleting %s %s: row not found", table.value, row_id)
            return False
        del self._rows[table][row_id]
        return True
