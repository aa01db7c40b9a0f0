"""Shared BDD fixtures and step definitions for checkout."""

import asyncio
from datetime import date, timedelta

import pytest
from pytest_bdd import given, parsers, then, when
from storefront.cart.ledger import CartLedger
from storefront.catalogue.catalog import ProductCatalog
from storefront.identity.auth_port import ShopperSession
from storefront.order.errors import CheckoutError
from storefront.order.workflow import OrderWorkflow
from storefront.store.port import CART_ITEMS, ORDERS, PRODUCTS

TODAY = date(2026, 10, 19)

PRODUCT_IDS = {
    "Goldfish": "4",
    "British Shorthair": "2",
}


@pytest.fixture()
def checkout():
    """Mutable scenario state: policy, result and raised error."""
    return {"policy": "guarded", "order": None, "orders": [], "errors": []}


@pytest.fixture()
def ledger(store, session):
    return CartLedger(store, session)


def stock_of(store, product_name):
    product_id = PRODUCT_IDS[product_name]
    return next(row["stock"] for row in store.rows(PRODUCTS) if str(row["id"]) == product_id)


def delivery_in(days):
    return TODAY + timedelta(days=days)


def shopper(n):
    return ShopperSession(user_id=f"shopper-{n}", email=f"shopper{n}@example.com")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("the {name} costs {rupees:d} rupees with {stock:d} in stock"))
def _(store, name, rupees, stock):
    row = asyncio.run(store.get(PRODUCTS, PRODUCT_IDS[name]))
    assert row["price"] == rupees * 100
    assert row["stock"] == stock


@given(parsers.cfparse("Asha has {quantity:d} {name} in her cart"))
def _(store, ledger, quantity, name):
    product = asyncio.run(ProductCatalog(store).get(PRODUCT_IDS[name]))
    assert asyncio.run(ledger.add(product, quantity))


@given("Asha's cart is empty")
def _(ledger):
    assert len(ledger) == 0


@given(parsers.cfparse('the stock policy is "{policy}"'))
def _(checkout, policy):
    checkout["policy"] = policy


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("no order is stored")
def _(store):
    assert store.rows(ORDERS) == []


@then("Asha's cart is empty")
def _(store, ledger, session):
    assert len(ledger) == 0
    assert [row for row in store.rows(CART_ITEMS) if row["user_id"] == session.user_id] == []


@then(parsers.cfparse("the {name} stock is {stock:d}"))
def _(store, name, stock):
    assert stock_of(store, name) == stock


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse("Asha submits the checkout for delivery in {days:d} days"))
def _(store, session, ledger, checkout, make_info, days):
    workflow = OrderWorkflow(store, session, ledger, stock_policy=checkout["policy"], today=lambda: TODAY)
    try:
        checkout["order"] = asyncio.run(workflow.submit(make_info(delivery_date=delivery_in(days)), ledger.snapshot()))
    except CheckoutError as exc:
        checkout["errors"].append(exc)


@when("two shoppers check out the last British Shorthair at the same time")
def _(store, checkout, make_info):
    info = make_info(delivery_date=delivery_in(2))

    async def one_checkout(session):
        ledger = CartLedger(store, session)
        await ledger.add(await ProductCatalog(store).get(PRODUCT_IDS["British Shorthair"]), 1)
        workflow = OrderWorkflow(store, session, ledger, stock_policy=checkout["policy"], today=lambda: TODAY)
        return await workflow.submit(info, ledger.snapshot())

    async def race():
        return await asyncio.gather(one_checkout(shopper(1)), one_checkout(shopper(2)), return_exceptions=True)

    for result in asyncio.run(race()):
        if isinstance(result, Exception):
            checkout["errors"].append(result)
        else:
            checkout["orders"].append(result)
