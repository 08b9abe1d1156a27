"""
Store contract shared by the hosted REST backend and the local SQLAlchemy backend.

Rows travel as plain dicts shaped like the hosted store's JSON rows: dates as
``YYYY-MM-DD`` strings, times of day as ``HH:MM:SS`` strings and timestamps as
ISO-8601 strings.
"""
from typing import Any, Dict, List, Optional

from roomadmin.store.feed import ChangeFeed

# Error code the hosted store uses when a single-row read finds nothing.
NOT_FOUND = "PGRST116"
# Error code for a remote procedure that does not exist (or has another signature).
MISSING_PROCEDURE = "PGRST202"

Row = Dict[str, Any]


class StoreError(Exception):
    """Raised by store backends for any failed remote call."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        return self.message


class Store:
    """Row CRUD over named tables, remote procedures, and a change feed."""

    feed: ChangeFeed

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        raise NotImplementedError

    def select_one(self, table: str, filters: Dict[str, Any]) -> Row:
        rows = self.select(table, filters, limit=2)
        if len(rows) != 1:
            raise StoreError(
                f"Expected a single row from {table}, got {len(rows)}", code=NOT_FOUND
            )
        return rows[0]

    def insert(self, table: str, row: Row) -> List[Row]:
        raise NotImplementedError

    def update(self, table: str, values: Row, filters: Dict[str, Any]) -> List[Row]:
        raise NotImplementedError

    def delete(self, table: str, filters: Dict[str, Any]) -> None:
        raise NotImplementedError

    def rpc(self, name: str, params: Dict[str, Any]) -> Any:
        raise NotImplementedError

    def close(self):
        pass
