"""Product aggregate — an item for sale, with price and remaining stock.

Prices are integer paise. Stock is only changed by order placement and by an
administrative restock; a product is hidden (``is_active`` false) rather than
deleted, so past orders keep their name/price snapshots meaningful.
"""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Integer, String, Text

from storefront.domain import storefront

LOW_STOCK_THRESHOLD = 5


class ProductCategory(Enum):
    CATS = "cats"
    BIRDS = "birds"
    FISH = "fish"
    FOOD = "food"
    ACCESSORIES = "accessories"


@storefront.aggregate
class Product:
    """A purchasable item in the catalogue.

    Carries its own delivery lead time so the checkout form can suggest the
    earliest sensible delivery date.
    """

    name: String(required=True, max_length=255)
    description: Text(default="")
    category: String(required=True, choices=ProductCategory)
    price: Integer(required=True, min_value=0)
    image: String(max_length=1024)
    age: String(max_length=50)
    stock: Integer(default=0)
    delivery_days: Integer(default=1, min_value=0)
    is_active: Boolean(default=True)

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock == 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock < LOW_STOCK_THRESHOLD

    @property
    def price_in_rupees(self) -> float:
        return self.price / 100

    @classmethod
    def from_row(cls, row: dict) -> "Product":
        return cls(
            id=str(row["id"]),
            name=row["name"],
            description=row.get("description") or "",
            category=row["category"],
            price=int(row["price"]),
            image=row.get("image"),
            age=row.get("age") or None,
            stock=int(row.get("stock") or 0),
            delivery_days=int(row.get("delivery_days") or 0),
            is_active=row.get("is_active", True),
        )

    def to_row(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "image": self.image,
            "age": self.age,
            "stock": self.stock,
            "delivery_days": self.delivery_days,
            "is_active": self.is_active,
        }
