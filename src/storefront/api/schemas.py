"""Pydantic request/response schemas for the Storefront API.

These are external contracts — separate from the protean aggregates. Money
is always integer paise.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Auth & Profile
# ---------------------------------------------------------------------------
class SignUpRequest(BaseModel):
    email: str
    password: str
    name: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "asha@example.com",
                    "password": "secret-pass",
                    "name": "Asha",
                }
            ]
        }
    }


class SignInRequest(BaseModel):
    email: str
    password: str


class SessionResponse(BaseModel):
    user_id: str
    email: str
    access_token: str
    is_admin: bool = False


class ProfileResponse(BaseModel):
    id: str
    email: str
    name: str
    phone: str | None = None
    address: str | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = None
    phone: str | None = None
    address: str | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    category: str
    price: int
    image: str | None = None
    age: str | None = None
    stock: int
    delivery_days: int
    is_out_of_stock: bool
    is_low_stock: bool


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartEntryResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    unit_price: int
    quantity: int
    stock: int
    subtotal: int


class StockWarningResponse(BaseModel):
    entry_id: str
    product_name: str
    quantity: int
    stock: int
    kind: str


class CartResponse(BaseModel):
    entries: list[CartEntryResponse]
    total: int
    item_count: int
    warnings: list[StockWarningResponse] = []


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    name: str
    email: str
    phone: str
    address: str
    payment_method: str = "cod"
    delivery_date: date
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha",
                    "email": "asha@example.com",
                    "phone": "9876543210",
                    "address": "12 MG Road, Bengaluru",
                    "payment_method": "cod",
                    "delivery_date": "2026-10-25",
                }
            ]
        }
    }


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    product_price: int
    quantity: int
    subtotal: int


class OrderResponse(BaseModel):
    id: str
    order_number: str
    status: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    payment_method: str
    delivery_date: date
    total_amount: int
    notes: str | None = None
    created_at: datetime | None = None
    items: list[OrderItemResponse]


class NotificationOutcomeResponse(BaseModel):
    channel: str
    recipient: str
    sent: bool
    url: str | None = None
    message: str | None = None


class PlacedOrderResponse(BaseModel):
    order: OrderResponse
    notifications: list[NotificationOutcomeResponse]


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str


class AdminSummaryResponse(BaseModel):
    total_products: int
    total_orders: int
    revenue: int
    pending_orders: int
    recent_orders: list[OrderResponse]


class StatusResponse(BaseModel):
    status: str = "ok"
