"""Tests for catalogue search, filters and sorting."""

import pytest
from storefront.catalogue.browsing import CatalogueQuery, browse, matches_price_range, matches_search
from storefront.catalogue.demo import DEMO_PRODUCTS
from storefront.catalogue.product import Product


@pytest.fixture()
def products():
    return [Product.from_row({**row, "is_active": True}) for row in DEMO_PRODUCTS]


def _names(products):
    return [p.name for p in products]


class TestSearch:
    def test_blank_term_matches_everything(self, products):
        assert all(matches_search(p, "") for p in products)

    def test_case_insensitive_name_match(self, products):
        assert _names(browse(products, CatalogueQuery(search="GOLDFISH"))) == ["Goldfish - Orange"]

    def test_matches_description(self, products):
        result = browse(products, CatalogueQuery(search="singing"))
        assert _names(result) == ["Canary Bird - Yellow"]


class TestCategoryFilter:
    def test_single_category(self, products):
        result = browse(products, CatalogueQuery(category="cats"))
        assert {p.category for p in result} == {"cats"}
        assert len(result) == 2

    def test_all_categories(self, products):
        assert len(browse(products, CatalogueQuery(category="all"))) == len(products)


class TestPriceRanges:
    def test_under_500(self, products):
        # ₹150 goldfish and ₹450 collar
        assert sorted(_names(browse(products, CatalogueQuery(price_range="under500")))) == [
            "Cat Collar - Leather",
            "Goldfish - Orange",
        ]

    def test_500_to_2000(self, products):
        assert _names(browse(products, CatalogueQuery(price_range="500-2000"))) == ["Premium Cat Food - 5kg"]

    def test_above_10000(self, products):
        result = browse(products, CatalogueQuery(price_range="above10000"))
        assert {p.category for p in result} == {"cats"}

    def test_boundaries_are_inclusive_for_middle_ranges(self, products):
        product = products[0]
        product.price = 200000  # ₹2000
        assert matches_price_range(product, "500-2000")
        assert matches_price_range(product, "2000-10000")
        assert not matches_price_range(product, "under500")

    def test_unknown_range_rejected(self):
        with pytest.raises(ValueError):
            CatalogueQuery(price_range="cheap")


class TestSorting:
    def test_default_sort_by_name(self, products):
        names = _names(browse(products))
        assert names == sorted(names, key=str.casefold)

    def test_price_low_to_high(self, products):
        prices = [p.price for p in browse(products, CatalogueQuery(sort="price-low"))]
        assert prices == sorted(prices)

    def test_price_high_to_low(self, products):
        prices = [p.price for p in browse(products, CatalogueQuery(sort="price-high"))]
        assert prices == sorted(prices, reverse=True)

    def test_stock_descending(self, products):
        assert browse(products, CatalogueQuery(sort="stock"))[0].name == "Goldfish - Orange"

    def test_unknown_sort_rejected(self):
        with pytest.raises(ValueError):
            CatalogueQuery(sort="rating")
