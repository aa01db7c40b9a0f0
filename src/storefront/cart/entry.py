"""CartEntry aggregate — one product line in a shopper's cart.

The entry keeps the name, unit price, stock and lead time it saw when the
product was added. Cart totals are computed from that stored price so the
amount shown in the cart is the amount charged at checkout.
"""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.aggregate
class CartEntry:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    stock = Integer(default=0)
    delivery_days = Integer(default=1)

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity

    @classmethod
    def from_row(cls, row: dict) -> "CartEntry":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            product_id=str(row["product_id"]),
            product_name=row["product_name"],
            unit_price=int(row["unit_price"]),
            quantity=int(row["quantity"]),
            stock=int(row.get("stock") or 0),
            delivery_days=int(row.get("delivery_days") or 0),
        )

    def to_row(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "product_id": str(self.product_id),
            "product_name": self.product_name,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "stock": self.stock,
            "delivery_days": self.delivery_days,
        }
