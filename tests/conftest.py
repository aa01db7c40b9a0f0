import asyncio
import os
from datetime import date
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture

TODAY = date(2026, 10, 19)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _reset_channels():
    from notifications.channel import reset_channels

    yield
    reset_channels()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def store():
    """In-memory store seeded with the demo catalogue."""
    from storefront.catalogue.demo import seed_demo_catalogue
    from storefront.store.memory import InMemoryStore

    store = InMemoryStore()
    seed_demo_catalogue(store)
    return store


@pytest.fixture()
def session():
    from storefront.identity.auth_port import ShopperSession

    return ShopperSession(user_id="user-asha", email="asha@example.com", access_token="token-asha")


@pytest.fixture()
def settings():
    from storefront.settings import Settings

    return Settings()


def customer_info(**overrides):
    from storefront.order.order import CustomerInfo

    values = {
        "name": "Asha",
        "email": "asha@example.com",
        "phone": "9876543210",
        "address": "12 MG Road, Bengaluru",
        "payment_method": "cod",
        "delivery_date": date(2026, 10, 21),
    }
    values.update(overrides)
    return CustomerInfo(**values)


@pytest.fixture()
def checkout_info():
    return customer_info()


@pytest.fixture()
def place_order(store, session, checkout_info):
    """Put ``lines`` (product id -> quantity) in the cart and submit it."""
    from storefront.cart.ledger import CartLedger
    from storefront.catalogue.catalog import ProductCatalog
    from storefront.order.workflow import OrderWorkflow

    def _place(lines=None, stock_policy="guarded", info=None):
        lines = lines or {"4": 3}

        async def _run():
            catalog = ProductCatalog(store)
            ledger = CartLedger(store, session)
            for product_id, quantity in lines.items():
                await ledger.add(await catalog.get(product_id), quantity)
            workflow = OrderWorkflow(store, session, ledger, stock_policy=stock_policy, today=lambda: TODAY)
            return await workflow.submit(info or checkout_info, ledger.snapshot())

        return asyncio.run(_run())

    return _place


@pytest.fixture()
def make_info():
    return customer_info
