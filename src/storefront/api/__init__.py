"""Storefront API package."""

from storefront.api.routes import admin_router, auth_router, cart_router, order_router, product_router

__all__ = ["auth_router", "product_router", "cart_router", "order_router", "admin_router"]
