"""Catalogue browsing — search, category and price filters, then sorting.

Operates on an already loaded list of products; nothing here touches the
store. Price ranges are expressed in rupees as shown to shoppers and compared
against the paise stored on each product.
"""

from dataclasses import dataclass

from storefront.catalogue.product import Product

ALL = "all"

# Bounds in rupees: (lower, upper, lower_inclusive, upper_inclusive)
PRICE_RANGES = {
    "under500": (None, 500, False, False),
    "500-2000": (500, 2000, True, True),
    "2000-10000": (2000, 10000, True, True),
    "above10000": (10000, None, False, False),
}

SORT_OPTIONS = ("name", "price-low", "price-high", "stock")


@dataclass(frozen=True)
class CatalogueQuery:
    search: str = ""
    category: str = ALL
    price_range: str = ALL
    sort: str = "name"

    def __post_init__(self):
        if self.price_range != ALL and self.price_range not in PRICE_RANGES:
            raise ValueError(f"Unknown price range: {self.price_range}")
        if self.sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {self.sort}")


def matches_search(product: Product, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return needle in product.name.lower() or needle in (product.description or "").lower()


def matches_price_range(product: Product, price_range: str) -> bool:
    if price_range == ALL:
        return True
    lower, upper, lower_inclusive, upper_inclusive = PRICE_RANGES[price_range]
    rupees = product.price / 100
    if lower is not None and (rupees < lower or (rupees == lower and not lower_inclusive)):
        return False
    if upper is not None and (rupees > upper or (rupees == upper and not upper_inclusive)):
        return False
    return True


def _sort_key(sort: str):
    if sort == "price-low":
        return lambda p: p.price, False
    if sort == "price-high":
        return lambda p: p.price, True
    if sort == "stock":
        return lambda p: p.stock, True
    return lambda p: p.name.casefold(), False


def browse(products: list[Product], query: CatalogueQuery | None = None) -> list[Product]:
    """Filter ``products`` by the query and return them in the requested order."""
    query = query or CatalogueQuery()
    selected = [
        product
        for product in products
        if matches_search(product, query.search)
        and (query.category == ALL or product.category == query.category)
        and matches_price_range(product, query.price_range)
    ]
    key, reverse = _sort_key(query.sort)
    return sorted(selected, key=key, reverse=reverse)
