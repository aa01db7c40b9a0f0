"""Checkout failures and warnings.

Errors abort a submission and reach the caller. Warnings describe side effects
that did not happen after the order already exists; they are logged and the
order stands.
"""


class CheckoutError(Exception):
    """Base class for everything ``OrderWorkflow.submit`` raises on purpose."""


class EmptyCartError(CheckoutError):
    def __init__(self) -> None:
        super().__init__("Cannot place an order from an empty cart")


class InvalidDeliveryDateError(CheckoutError):
    def __init__(self, delivery_date, today) -> None:
        super().__init__(f"Delivery date {delivery_date} must be after {today}")
        self.delivery_date = delivery_date
        self.today = today


class OrderPersistenceError(CheckoutError):
    """The order header could not be written. Nothing was persisted."""

    def __init__(self, order_number: str) -> None:
        super().__init__(f"Order {order_number} could not be saved")
        self.order_number = order_number


class OrderItemPersistenceError(CheckoutError):
    """The order items could not be written; the header was withdrawn."""

    def __init__(self, order_number: str, compensated: bool) -> None:
        super().__init__(f"Items for order {order_number} could not be saved")
        self.order_number = order_number
        self.compensated = compensated


class OutOfStockError(CheckoutError):
    """Guarded stock policy: at least one product no longer has enough units."""

    def __init__(self, order_number: str, product_ids: list[str]) -> None:
        super().__init__(f"Not enough stock for order {order_number}: {', '.join(product_ids)}")
        self.order_number = order_number
        self.product_ids = product_ids


class StockReconciliationWarning(UserWarning):
    def __init__(self, product_id: str, reason: str) -> None:
        super().__init__(f"Stock for product {product_id} was not updated: {reason}")
        self.product_id = product_id
        self.reason = reason


class CartClearWarning(UserWarning):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"Cart for user {user_id} was not cleared")
        self.user_id = user_id
