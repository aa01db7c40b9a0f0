"""Storefront bounded context — Catalogue, Shopping Cart and Orders.

Handles the product catalogue, the per-user cart ledger, and the checkout
workflow that turns a cart into a persisted order. Persistence goes through
the hosted store port, so the aggregates here are plain protean elements
that are mapped to and from store rows.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
