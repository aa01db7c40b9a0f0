"""Order workflow — turns a cart snapshot into a persisted order.

The hosted store offers no multi-statement transaction, so the workflow is a
fixed sequence of single writes with explicit compensation:

    1. total the snapshot at the prices the shopper saw
    2. generate an order number
    3. write the order header           (failure: nothing was written)
    4. write all order items at once    (failure: withdraw the header)
    5. reconcile stock per product      (see StockPolicy)
    6. clear the shopper's cart         (failure: logged, order stands)
    7. return the order

Steps run strictly in that order. Only the per-product stock writes of step
5 run concurrently, and all of them finish before step 6 starts. Nothing is
retried and ``submit`` is not idempotent: callers must not submit the same
cart twice while a submission is in flight.
"""

import asyncio
from collections.abc import Callable, Iterable
from datetime import date
from enum import Enum

import structlog

from storefront.cart.ledger import CartLedger
from storefront.identity.auth_port import ShopperSession
from storefront.order.errors import (
    CartClearWarning,
    EmptyCartError,
    InvalidDeliveryDateError,
    OrderItemPersistenceError,
    OrderPersistenceError,
    OutOfStockError,
    StockReconciliationWarning,
)
from storefront.order.numbering import generate_order_number
from storefront.order.order import CustomerInfo, Order
from storefront.store.port import ORDER_ITEMS, ORDERS, PRODUCTS, StoreError, StorePort

logger = structlog.get_logger(__name__)


class StockPolicy(Enum):
    """How step 5 treats the shared stock counters.

    GUARDED: conditional decrement (``stock >= qty``); an order that would
        oversell is withdrawn and rejected with OutOfStockError.
    CLAMP: read, then write ``max(0, stock - qty)``. Never fails the order;
        concurrent submissions can oversell.
    """

    GUARDED = "guarded"
    CLAMP = "clamp"


class _Decrement(Enum):
    APPLIED = "applied"
    INSUFFICIENT = "insufficient"
    FAILED = "failed"


def quantities_by_product(lines: Iterable) -> dict[str, int]:
    """Total ordered quantity per distinct product, in first-seen order."""
    totals: dict[str, int] = {}
    for line in lines:
        key = str(line.product_id)
        totals[key] = totals.get(key, 0) + line.quantity
    return totals


class OrderWorkflow:
    def __init__(
        self,
        store: StorePort,
        session: ShopperSession,
        ledger: CartLedger,
        stock_policy: StockPolicy | str = StockPolicy.GUARDED,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.session = session
        self.ledger = ledger
        self.stock_policy = StockPolicy(stock_policy)
        self.today = today

    async def submit(self, info: CustomerInfo, cart_snapshot: Iterable) -> Order:
        """Place an order for ``cart_snapshot`` and return it with its items.

        Raises:
            EmptyCartError: the snapshot has no lines; nothing is written.
            InvalidDeliveryDateError: delivery is not after today; nothing is written.
            OrderPersistenceError: the header write failed; nothing is written.
            OrderItemPersistenceError: the items write failed; the header was withdrawn.
            OutOfStockError: guarded policy only; the order was withdrawn.
        """
        lines = list(cart_snapshot)
        if not lines:
            raise EmptyCartError()

        today = self.today()
        if info.delivery_date <= today:
            raise InvalidDeliveryDateError(info.delivery_date, today)

        order_number = generate_order_number()
        order = Order.place(order_number, self.session.user_id, info, lines)
        log = logger.bind(order_number=order_number, order_id=str(order.id), user_id=self.session.user_id)

        try:
            await self.store.insert(ORDERS, [order.header_row()])
        except StoreError as exc:
            log.error("Order header write failed", error=str(exc))
            raise OrderPersistenceError(order_number) from exc

        try:
            await self.store.insert(ORDER_ITEMS, order.item_rows())
        except StoreError as exc:
            log.error("Order items write failed", error=str(exc))
            compensated = await self.discard(str(order.id), order_number=order_number)
            raise OrderItemPersistenceError(order_number, compensated) from exc

        await self._reconcile_stock(order, quantities_by_product(lines), log)

        if not await self.ledger.clear():
            warning = CartClearWarning(self.session.user_id)
            log.warning(str(warning), warning=type(warning).__name__)

        log.info(
            "Order placed",
            total_amount=order.total_amount,
            item_count=order.item_count,
            stock_policy=self.stock_policy.value,
        )
        return order

    async def discard(self, order_id: str, order_number: str | None = None) -> bool:
        """Withdraw an order: delete its items, then its header.

        Safe to call repeatedly; an operator can re-run it for an order that
        was logged as orphaned. Returns False if the store refused.
        """
        try:
            await self.store.delete_where(ORDER_ITEMS, {"order_id": order_id})
            await self.store.delete(ORDERS, order_id)
        except StoreError as exc:
            logger.error(
                "Orphaned order header left behind",
                order_id=order_id,
                order_number=order_number,
                user_id=self.session.user_id,
                error=str(exc),
            )
            return False
        logger.info("Order withdrawn", order_id=order_id, order_number=order_number)
        return True

    # -------------------------------------------------------------------
    # Stock reconciliation
    # -------------------------------------------------------------------
    async def _reconcile_stock(self, order: Order, quantities: dict[str, int], log) -> None:
        if self.stock_policy is StockPolicy.CLAMP:
            outcomes = await asyncio.gather(*(self._clamp(pid, qty) for pid, qty in quantities.items()))
            for warning in outcomes:
                if warning is not None:
                    log.warning(str(warning), warning=type(warning).__name__, product_id=warning.product_id)
            return

        outcomes = await asyncio.gather(*(self._guarded(pid, qty, log) for pid, qty in quantities.items()))
        results = dict(zip(quantities, outcomes))
        short = [pid for pid, result in results.items() if result is _Decrement.INSUFFICIENT]
        if not short:
            return

        applied = [pid for pid, result in results.items() if result is _Decrement.APPLIED]
        await asyncio.gather(*(self._restore(pid, quantities[pid], log) for pid in applied))
        await self.discard(str(order.id), order_number=order.order_number)
        log.warning("Order rejected for insufficient stock", product_ids=short)
        raise OutOfStockError(order.order_number, short)

    async def _clamp(self, product_id: str, quantity: int) -> StockReconciliationWarning | None:
        try:
            row = await self.store.get(PRODUCTS, product_id)
            if row is None:
                return StockReconciliationWarning(product_id, "product not found")
            new_stock = max(0, int(row.get("stock") or 0) - quantity)
            await self.store.update(PRODUCTS, product_id, {"stock": new_stock})
        except Exception as exc:
            return StockReconciliationWarning(product_id, str(exc))
        return None

    async def _guarded(self, product_id: str, quantity: int, log) -> _Decrement:
        try:
            changed = await self.store.adjust(PRODUCTS, product_id, "stock", -quantity, floor=0)
        except Exception as exc:
            warning = StockReconciliationWarning(product_id, str(exc))
            log.warning(str(warning), warning=type(warning).__name__, product_id=product_id)
            return _Decrement.FAILED
        return _Decrement.APPLIED if changed else _Decrement.INSUFFICIENT

    async def _restore(self, product_id: str, quantity: int, log) -> None:
        try:
            await self.store.adjust(PRODUCTS, product_id, "stock", quantity)
        except StoreError as exc:
            log.error("Stock restore failed", product_id=product_id, quantity=quantity, error=str(exc))
