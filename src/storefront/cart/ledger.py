"""CartLedger — the signed-in shopper's cart and the arithmetic over it.

Writes go to the store first; the local view only changes once the store has
accepted the write. Operations report success as a boolean, and a False
result always means the store failed (input mistakes raise instead).
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError

from storefront.cart.entry import CartEntry
from storefront.catalogue.product import LOW_STOCK_THRESHOLD
from storefront.identity.auth_port import ShopperSession
from storefront.store.port import CART_ITEMS, StoreError, StorePort

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockWarning:
    """A cart line the shopper should look at before checking out."""

    entry_id: str
    product_name: str
    quantity: int
    stock: int
    kind: str  # "out_of_stock", "exceeds_stock" or "low_stock"


class CartLedger:
    def __init__(self, store: StorePort, session: ShopperSession) -> None:
        self.store = store
        self.session = session
        self._entries: dict[str, CartEntry] = {}

    @property
    def entries(self) -> list[CartEntry]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def find_by_product(self, product_id: str) -> CartEntry | None:
        return next((e for e in self._entries.values() if str(e.product_id) == str(product_id)), None)

    async def load(self) -> list[CartEntry]:
        """Replace the local view with the user's entries from the store."""
        rows = await self.store.select(CART_ITEMS, filters={"user_id": self.session.user_id}, order_by="created_at")
        self._entries = {str(row["id"]): CartEntry.from_row(row) for row in rows}
        return self.entries

    async def add(self, product, quantity: int = 1) -> bool:
        """Add ``quantity`` units of ``product``, merging with an existing line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.find_by_product(str(product.id))
        try:
            if existing is not None:
                new_quantity = existing.quantity + quantity
                row = await self.store.update(CART_ITEMS, str(existing.id), {"quantity": new_quantity})
                if row is None:
                    self._entries.pop(str(existing.id), None)
                    logger.warning("Cart entry vanished from store", entry_id=str(existing.id))
                    return False
                existing.quantity = new_quantity
            else:
                entry = CartEntry(
                    user_id=self.session.user_id,
                    product_id=str(product.id),
                    product_name=product.name,
                    unit_price=product.price,
                    quantity=quantity,
                    stock=product.stock,
                    delivery_days=product.delivery_days,
                )
                [row] = await self.store.insert(CART_ITEMS, [entry.to_row()])
                self._entries[str(row["id"])] = CartEntry.from_row(row)
        except StoreError as exc:
            logger.warning("Adding to cart failed", user_id=self.session.user_id, product_id=str(product.id), error=str(exc))
            return False
        return True

    async def set_quantity(self, entry_id: str, quantity: int) -> bool:
        if quantity <= 0:
            return await self.remove(entry_id)

        try:
            row = await self.store.update(CART_ITEMS, entry_id, {"quantity": quantity})
        except StoreError as exc:
            logger.warning("Updating cart quantity failed", entry_id=entry_id, error=str(exc))
            return False
        if row is None:
            return False

        entry = self._entries.get(str(entry_id))
        if entry is not None:
            entry.quantity = quantity
        return True

    async def remove(self, entry_id: str) -> bool:
        """Remove an entry. Removing an entry that is already gone succeeds."""
        try:
            await self.store.delete(CART_ITEMS, entry_id)
        except StoreError as exc:
            logger.warning("Removing cart entry failed", entry_id=entry_id, error=str(exc))
            return False
        self._entries.pop(str(entry_id), None)
        return True

    async def clear(self) -> bool:
        try:
            await self.store.delete_where(CART_ITEMS, {"user_id": self.session.user_id})
        except StoreError as exc:
            logger.warning("Clearing cart failed", user_id=self.session.user_id, error=str(exc))
            return False
        self._entries.clear()
        return True

    def total(self) -> int:
        """Sum of unit price times quantity, in paise."""
        return sum(entry.unit_price * entry.quantity for entry in self._entries.values())

    def item_count(self) -> int:
        return sum(entry.quantity for entry in self._entries.values())

    def snapshot(self) -> tuple[CartEntry, ...]:
        return tuple(self._entries.values())

    def stock_warnings(self) -> list[StockWarning]:
        warnings = []
        for entry in self._entries.values():
            if entry.stock == 0:
                kind = "out_of_stock"
            elif entry.quantity > entry.stock:
                kind = "exceeds_stock"
            elif entry.stock < LOW_STOCK_THRESHOLD:
                kind = "low_stock"
            else:
                continue
            warnings.append(
                StockWarning(
                    entry_id=str(entry.id),
                    product_name=entry.product_name,
                    quantity=entry.quantity,
                    stock=entry.stock,
                    kind=kind,
                )
            )
        return warnings
