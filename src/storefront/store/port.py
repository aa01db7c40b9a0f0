"""Store port (abstract interface) for the hosted tables.

The hosted backend exposes plain row operations over its tables and offers no
multi-statement transaction to this layer. Adapters implement the contract
below; every call is a suspension point. Any failure of the backend surfaces
as ``StoreError``.
"""

from abc import ABC, abstractmethod
from typing import Any

PRODUCTS = "products"
CART_ITEMS = "cart_items"
ORDERS = "orders"
ORDER_ITEMS = "order_items"
PROFILES = "profiles"

Row = dict[str, Any]


class StoreError(Exception):
    """Raised by adapters when the backend rejects or fails an operation."""

    def __init__(self, message: str, table: str | None = None, operation: str | None = None) -> None:
        super().__init__(message)
        self.table = table
        self.operation = operation


class StorePort(ABC):
    """Abstract interface for the row store."""

    @abstractmethod
    async def insert(self, table: str, rows: list[Row]) -> list[Row]:
        """Insert rows in one request and return them as stored.

        Rows without an ``id`` get one generated by the backend.
        """
        ...

    @abstractmethod
    async def select(
        self,
        table: str,
        filters: dict | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        """Return rows matching all equality ``filters``, optionally ordered."""
        ...

    @abstractmethod
    async def get(self, table: str, record_id: str) -> Row | None:
        ...

    @abstractmethod
    async def update(self, table: str, record_id: str, values: dict) -> Row | None:
        """Overwrite ``values`` on one row. Returns the updated row, None if absent."""
        ...

    @abstractmethod
    async def adjust(
        self,
        table: str,
        record_id: str,
        field: str,
        delta: int,
        floor: int | None = None,
    ) -> bool:
        """Atomically add ``delta`` to an integer column.

        With ``floor`` set, the update only applies when the result stays at or
        above it. Returns True when exactly one row was changed.
        """
        ...

    @abstractmethod
    async def delete(self, table: str, record_id: str) -> int:
        """Delete one row by id. Returns the number of rows removed (0 or 1)."""
        ...

    @abstractmethod
    async def delete_where(self, table: str, filters: dict) -> int:
        ...
