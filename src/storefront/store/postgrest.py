"""PostgREST store adapter — the hosted backend's REST interface.

Tables map to ``/rest/v1/<table>`` with ``column=eq.value`` filters. The
conditional stock update is a database function exposed over RPC, because a
plain PATCH cannot express ``stock = stock + delta WHERE stock + delta >= floor``
atomically::

    create function adjust_counter(target_table text, row_id uuid, column_name text,
                                   delta int, floor_value int default null)
    returns boolean ...

The function must return true only when it changed exactly one row.
"""

import httpx
import structlog

from storefront.store.port import Row, StoreError, StorePort

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class PostgrestStore(StorePort):
    """Store adapter speaking PostgREST over httpx."""

    def __init__(
        self,
        url: str,
        api_key: str,
        access_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = url.rstrip("/") + "/rest/v1"
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
            "Content-Type": "application/json",
        }
        self._transport = transport
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            transport=self._transport,
            timeout=self.timeout,
        )

    @staticmethod
    def _literal(value) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def _eq(self, filters: dict | None) -> dict:
        return {key: f"eq.{self._literal(value)}" for key, value in (filters or {}).items()}

    async def _request(self, method: str, path: str, table: str, operation: str, **kwargs) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise StoreError(str(exc) or exc.__class__.__name__, table=table, operation=operation) from exc

        if response.status_code >= 400:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            logger.warning(
                "Store request rejected",
                table=table,
                operation=operation,
                status_code=response.status_code,
                message=message,
            )
            raise StoreError(message or f"HTTP {response.status_code}", table=table, operation=operation)
        return response

    async def insert(self, table: str, rows: list[Row]) -> list[Row]:
        response = await self._request(
            "POST",
            f"/{table}",
            table,
            "insert",
            json=rows,
            headers={"Prefer": "return=representation"},
        )
        return response.json()

    async def select(self, table, filters=None, order_by=None, descending=False):
        params = {"select": "*", **self._eq(filters)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        response = await self._request("GET", f"/{table}", table, "select", params=params)
        return response.json()

    async def get(self, table, record_id):
        response = await self._request(
            "GET", f"/{table}", table, "get", params={"select": "*", "id": f"eq.{record_id}"}
        )
        rows = response.json()
        return rows[0] if rows else None

    async def update(self, table, record_id, values):
        response = await self._request(
            "PATCH",
            f"/{table}",
            table,
            "update",
            params={"id": f"eq.{record_id}"},
            json=values,
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        return rows[0] if rows else None

    async def adjust(self, table, record_id, field, delta, floor=None):
        response = await self._request(
            "POST",
            "/rpc/adjust_counter",
            table,
            "adjust",
            json={
                "target_table": table,
                "row_id": str(record_id),
                "column_name": field,
                "delta": delta,
                "floor_value": floor,
            },
        )
        return bool(response.json())

    async def delete(self, table, record_id):
        response = await self._request(
            "DELETE",
            f"/{table}",
            table,
            "delete",
            params={"id": f"eq.{record_id}"},
            headers={"Prefer": "return=representation"},
        )
        return len(response.json())

    async def delete_where(self, table, filters):
        if not filters:
            raise StoreError("Refusing to delete without filters", table=table, operation="delete_where")
        response = await self._request(
            "DELETE",
            f"/{table}",
            table,
            "delete_where",
            params=self._eq(filters),
            headers={"Prefer": "return=representation"},
        )
        return len(response.json())
