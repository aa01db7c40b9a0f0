"""Order history for shoppers, and the admin dashboard figures."""

from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError

from storefront.order.order import Order, OrderStatus
from storefront.store.port import ORDER_ITEMS, ORDERS, StorePort

logger = structlog.get_logger(__name__)

RECENT_ORDERS_SHOWN = 5


@dataclass(frozen=True)
class AdminSummary:
    total_products: int
    total_orders: int
    revenue: int
    pending_orders: int
    recent_orders: list[Order] = field(default_factory=list)


class OrderHistory:
    def __init__(self, store: StorePort) -> None:
        self.store = store

    async def _assemble(self, header: dict) -> Order | None:
        item_rows = await self.store.select(ORDER_ITEMS, filters={"order_id": header["id"]})
        if not item_rows:
            # A header without items is a failed checkout whose withdrawal did not complete
            logger.warning("Skipping order without items", order_id=header["id"], order_number=header.get("order_number"))
            return None
        return Order.from_rows(header, item_rows)

    async def _assemble_all(self, headers: list[dict]) -> list[Order]:
        orders = [await self._assemble(header) for header in headers]
        return [order for order in orders if order is not None]

    async def list_for_user(self, user_id: str) -> list[Order]:
        """The user's orders with their items, newest first."""
        headers = await self.store.select(ORDERS, filters={"user_id": user_id}, order_by="created_at", descending=True)
        return await self._assemble_all(headers)

    async def list_all(self) -> list[Order]:
        headers = await self.store.select(ORDERS, order_by="created_at", descending=True)
        return await self._assemble_all(headers)

    async def get(self, order_id: str) -> Order | None:
        header = await self.store.get(ORDERS, order_id)
        return await self._assemble(header) if header else None

    async def update_status(self, order_id: str, status: str) -> Order:
        """Move an order along its state machine (fulfillment side)."""
        order = await self.get(order_id)
        if order is None:
            raise ObjectNotFoundError(f"Order {order_id} not found")

        previous = order.status
        order.transition_to(status)
        await self.store.update(ORDERS, order_id, {"status": order.status})
        logger.info("Order status changed", order_id=order_id, previous_status=previous, new_status=order.status)
        return order

    async def summary(self, total_products: int) -> AdminSummary:
        orders = await self.list_all()
        return AdminSummary(
            total_products=total_products,
            total_orders=len(orders),
            revenue=sum(order.total_amount for order in orders),
            pending_orders=sum(1 for order in orders if order.status == OrderStatus.PENDING.value),
            recent_orders=orders[:RECENT_ORDERS_SHOWN],
        )
