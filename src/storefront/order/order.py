"""Order aggregate with its OrderItem entities.

An order is written once, at checkout, and afterwards only its status moves.
Item prices and names are snapshots of the cart, so an order keeps reading
correctly after the catalogue changes.

State Machine:
    PENDING → CONFIRMED → SHIPPED → DELIVERED
    CANCELLED (from PENDING, CONFIRMED, SHIPPED)
"""

from datetime import UTC, date, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.shared.contact import CustomerContact, email_errors, phone_errors


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    COD = "cod"
    UPI = "upi"
    BANK_TRANSFER = "bank_transfer"


PAYMENT_METHOD_LABELS = {
    PaymentMethod.COD.value: "Cash on Delivery (COD)",
    PaymentMethod.UPI.value: "UPI Payment",
    PaymentMethod.BANK_TRANSFER.value: "Bank Transfer",
}

_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in _VALID_TRANSITIONS.get(current, set())


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object
class CustomerInfo:
    """What the shopper typed into the checkout form."""

    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    phone: String(required=True, max_length=20)
    address: String(required=True, max_length=1000)
    payment_method: String(required=True, choices=PaymentMethod)
    delivery_date: Date(required=True)
    notes: Text()

    @invariant.post
    def contact_details_must_be_well_formed(self):
        errors = {}
        if self.email is not None and email_errors(self.email):
            errors["email"] = email_errors(self.email)
        if self.phone is not None and phone_errors(self.phone):
            errors["phone"] = phone_errors(self.phone)
        if errors:
            raise ValidationError(errors)

    def contact(self) -> CustomerContact:
        return CustomerContact(name=self.name, email=self.email, phone=self.phone, address=self.address)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """One product line of an order, frozen at checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    product_price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    subtotal = Integer(required=True, min_value=0)

    @invariant.post
    def subtotal_must_match_price_and_quantity(self):
        if self.subtotal != self.product_price * self.quantity:
            raise ValidationError({"subtotal": ["Subtotal must equal price times quantity"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=50)
    user_id = Identifier(required=True)
    customer = ValueObject(CustomerContact, required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    delivery_date = Date(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    total_amount = Integer(required=True, min_value=0)
    notes = Text()
    created_at = DateTime()
    items = HasMany(OrderItem)

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

    @invariant.post
    def total_must_match_items(self):
        if self.total_amount != sum(item.subtotal for item in self.items):
            raise ValidationError({"total_amount": ["Total must equal the sum of item subtotals"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, order_number, user_id, info: CustomerInfo, lines, created_at=None):
        """Build a pending order from checkout details and cart lines.

        Args:
            lines: Cart entries (anything with product_id, product_name,
                   unit_price and quantity). Prices are taken as given.
        """
        items = [
            OrderItem(
                product_id=str(line.product_id),
                product_name=line.product_name,
                product_price=line.unit_price,
                quantity=line.quantity,
                subtotal=line.unit_price * line.quantity,
            )
            for line in lines
        ]
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        return cls(
            order_number=order_number,
            user_id=str(user_id),
            customer=info.contact(),
            payment_method=info.payment_method,
            delivery_date=info.delivery_date,
            status=OrderStatus.PENDING.value,
            total_amount=sum(item.subtotal for item in items),
            notes=info.notes or None,
            created_at=created_at or datetime.now(UTC),
            items=items,
        )

    # -------------------------------------------------------------------
    # Status transitions (driven by fulfillment, never by checkout)
    # -------------------------------------------------------------------
    def transition_to(self, target: str) -> None:
        try:
            target_status = OrderStatus(target)
        except ValueError:
            raise ValidationError({"status": [f"Unknown status: {target}"]})

        current = OrderStatus(self.status)
        if not can_transition(current, target_status):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})
        self.status = target_status.value

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def payment_method_label(self) -> str:
        return PAYMENT_METHOD_LABELS[self.payment_method]

    # -------------------------------------------------------------------
    # Row mapping
    # -------------------------------------------------------------------
    def header_row(self) -> dict:
        return {
            "id": str(self.id),
            "order_number": self.order_number,
            "user_id": str(self.user_id),
            "customer_name": self.customer.name,
            "customer_email": self.customer.email,
            "customer_phone": self.customer.phone,
            "delivery_address": self.customer.address,
            "payment_method": self.payment_method,
            "total_amount": self.total_amount,
            "delivery_date": self.delivery_date.isoformat(),
            "status": self.status,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def item_rows(self) -> list[dict]:
        return [
            {
                "id": str(item.id),
                "order_id": str(self.id),
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "product_price": item.product_price,
                "quantity": item.quantity,
                "subtotal": item.subtotal,
            }
            for item in self.items
        ]

    @classmethod
    def from_rows(cls, header: dict, item_rows: list[dict]) -> "Order":
        return cls(
            id=str(header["id"]),
            order_number=header["order_number"],
            user_id=str(header["user_id"]),
            customer=CustomerContact(
                name=header["customer_name"],
                email=header["customer_email"],
                phone=header["customer_phone"],
                address=header["delivery_address"],
            ),
            payment_method=header["payment_method"],
            delivery_date=_as_date(header["delivery_date"]),
            status=header.get("status") or OrderStatus.PENDING.value,
            total_amount=int(header["total_amount"]),
            notes=header.get("notes"),
            created_at=_as_datetime(header.get("created_at")),
            items=[
                OrderItem(
                    id=str(row["id"]),
                    product_id=str(row["product_id"]),
                    product_name=row["product_name"],
                    product_price=int(row["product_price"]),
                    quantity=int(row["quantity"]),
                    subtotal=int(row["subtotal"]),
                )
                for row in item_rows
            ],
        )


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_datetime(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
