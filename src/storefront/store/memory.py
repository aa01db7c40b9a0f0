"""In-memory store adapter — demo mode and tests.

Keeps each table as a dict of rows keyed by id and hands out copies, so
callers never share mutable state with the store. Individual operations can
be configured to fail, which is how partial-failure paths of the checkout are
exercised.
"""

import asyncio
import copy
from datetime import UTC, datetime
from uuid import uuid4

from storefront.store.port import ORDERS, Row, StoreError, StorePort

_UNIQUE_COLUMNS = {ORDERS: ("order_number",)}


class InMemoryStore(StorePort):
    """Store adapter backed by Python dicts."""

    def __init__(self, latency: float = 0.0) -> None:
        self.tables: dict[str, dict[str, Row]] = {}
        self.calls: list[dict] = []
        self.latency = latency
        self._failures: dict[tuple[str, str], str] = {}

    def configure(self, operation: str, table: str, should_succeed: bool = True, reason: str = "Store unavailable"):
        """Make ``operation`` on ``table`` fail (or succeed again)."""
        key = (operation, table)
        if should_succeed:
            self._failures.pop(key, None)
        else:
            self._failures[key] = reason

    def reset(self) -> None:
        self.tables.clear()
        self.calls.clear()
        self._failures.clear()

    def rows(self, table: str) -> list[Row]:
        """Synchronous peek at a table, for seeding and assertions."""
        return [copy.deepcopy(row) for row in self.tables.get(table, {}).values()]

    def seed(self, table: str, rows: list[Row]) -> list[Row]:
        stored = []
        for row in rows:
            record = {"id": str(uuid4()), **copy.deepcopy(row)}
            self.tables.setdefault(table, {})[str(record["id"])] = record
            stored.append(copy.deepcopy(record))
        return stored

    async def _enter(self, operation: str, table: str, **details) -> None:
        self.calls.append({"operation": operation, "table": table, **details})
        if self.latency:
            await asyncio.sleep(self.latency)
        else:
            # Every store call is a suspension point, as it is against a real backend
            await asyncio.sleep(0)
        reason = self._failures.get((operation, table))
        if reason is not None:
            raise StoreError(reason, table=table, operation=operation)

    @staticmethod
    def _matches(row: Row, filters: dict | None) -> bool:
        if not filters:
            return True
        return all(str(row.get(key)) == str(value) for key, value in filters.items())

    async def insert(self, table: str, rows: list[Row]) -> list[Row]:
        await self._enter("insert", table, count=len(rows))
        existing = self.tables.setdefault(table, {})
        now = datetime.now(UTC).isoformat()

        prepared = []
        for row in rows:
            record = copy.deepcopy(row)
            record.setdefault("id", str(uuid4()))
            record.setdefault("created_at", now)
            if str(record["id"]) in existing:
                raise StoreError(f"Duplicate id {record['id']}", table=table, operation="insert")
            for column in _UNIQUE_COLUMNS.get(table, ()):
                taken = any(other.get(column) == record.get(column) for other in existing.values())
                if taken or any(p.get(column) == record.get(column) for p in prepared):
                    raise StoreError(f"Duplicate {column} {record.get(column)}", table=table, operation="insert")
            prepared.append(record)

        # The whole batch lands or nothing does
        for record in prepared:
            existing[str(record["id"])] = record
        return [copy.deepcopy(record) for record in prepared]

    async def select(self, table, filters=None, order_by=None, descending=False):
        await self._enter("select", table, filters=filters)
        rows = [copy.deepcopy(r) for r in self.tables.get(table, {}).values() if self._matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by)), reverse=descending)
        return rows

    async def get(self, table, record_id):
        await self._enter("get", table, record_id=record_id)
        row = self.tables.get(table, {}).get(str(record_id))
        return copy.deepcopy(row) if row is not None else None

    async def update(self, table, record_id, values):
        await self._enter("update", table, record_id=record_id, values=values)
        row = self.tables.get(table, {}).get(str(record_id))
        if row is None:
            return None
        row.update(copy.deepcopy(values))
        return copy.deepcopy(row)

    async def adjust(self, table, record_id, field, delta, floor=None):
        await self._enter("adjust", table, record_id=record_id, field=field, delta=delta)
        row = self.tables.get(table, {}).get(str(record_id))
        if row is None:
            return False
        # Check and write happen with no suspension in between
        new_value = int(row.get(field) or 0) + delta
        if floor is not None and new_value < floor:
            return False
        row[field] = new_value
        return True

    async def delete(self, table, record_id):
        await self._enter("delete", table, record_id=record_id)
        removed = self.tables.get(table, {}).pop(str(record_id), None)
        return 1 if removed is not None else 0

    async def delete_where(self, table, filters):
        await self._enter("delete_where", table, filters=filters)
        rows = self.tables.get(table, {})
        doomed = [key for key, row in rows.items() if self._matches(row, filters)]
        for key in doomed:
            del rows[key]
        return len(doomed)
