import asyncio

import pytest
from storefront.catalogue.catalog import ProductCatalog
from storefront.store.port import PRODUCTS


@pytest.fixture()
def catalog(store):
    return ProductCatalog(store)


def test_list_active_sorted_by_name(catalog):
    names = [p.name for p in asyncio.run(catalog.list_active())]
    assert len(names) == 6
    assert names == sorted(names)


def test_inactive_products_hidden(catalog, store):
    asyncio.run(store.update(PRODUCTS, "3", {"is_active": False}))
    assert "3" not in {str(p.id) for p in asyncio.run(catalog.list_active())}


def test_get_missing_product(catalog):
    assert asyncio.run(catalog.get("missing")) is None


def test_update_stock(catalog):
    assert asyncio.run(catalog.update_stock("4", 7)) is True
    assert asyncio.run(catalog.get("4")).stock == 7


def test_update_stock_rejects_negative(catalog):
    with pytest.raises(ValueError):
        asyncio.run(catalog.update_stock("4", -1))


def test_restock_adds_units(catalog):
    assert asyncio.run(catalog.restock("2", 4)) is True
    assert asyncio.run(catalog.get("2")).stock == 5


def test_restock_unknown_product(catalog):
    assert asyncio.run(catalog.restock("missing", 1)) is False
