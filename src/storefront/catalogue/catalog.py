"""ProductCatalog — read access to products plus the two stock writers."""

import structlog

from storefront.catalogue.product import Product
from storefront.store.port import PRODUCTS, StorePort

logger = structlog.get_logger(__name__)


class ProductCatalog:
    def __init__(self, store: StorePort) -> None:
        self.store = store

    async def list_active(self) -> list[Product]:
        """Active products ordered by name."""
        rows = await self.store.select(PRODUCTS, filters={"is_active": True}, order_by="name")
        return [Product.from_row(row) for row in rows]

    async def get(self, product_id: str) -> Product | None:
        row = await self.store.get(PRODUCTS, product_id)
        return Product.from_row(row) if row else None

    async def update_stock(self, product_id: str, stock: int) -> bool:
        """Overwrite the stock counter. Returns False when the product does not exist."""
        if stock < 0:
            raise ValueError("Stock cannot be negative")
        row = await self.store.update(PRODUCTS, product_id, {"stock": stock})
        return row is not None

    async def restock(self, product_id: str, quantity: int) -> bool:
        """Administrative restock: add ``quantity`` units atomically."""
        if quantity < 1:
            raise ValueError("Restock quantity must be at least 1")
        changed = await self.store.adjust(PRODUCTS, product_id, "stock", quantity)
        logger.info("Product restocked", product_id=product_id, quantity=quantity, changed=changed)
        return changed
