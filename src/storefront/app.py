"""Catzo storefront FastAPI application.

``create_app`` wires the store, auth provider and notification channels onto
``app.state`` and wraps every request in the storefront domain context.
Anything not passed in is built from ``settings`` (loaded from the
environment by default, see ``storefront.settings``).

Usage:
    uvicorn storefront.server:build_app --factory --host 0.0.0.0 --port 8000
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from notifications.channel import NotificationChannel, build_email_adapter, get_channel
from notifications.dispatch import NotificationDispatcher
from storefront.domain import storefront
from storefront.identity.auth_port import AuthError
from storefront.order.errors import (
    CheckoutError,
    EmptyCartError,
    InvalidDeliveryDateError,
    OrderItemPersistenceError,
    OrderPersistenceError,
    OutOfStockError,
)
from storefront.settings import Settings, load_settings
from storefront.store import build_store
from storefront.store.port import StoreError

_CHECKOUT_STATUS = {
    EmptyCartError: 422,
    InvalidDeliveryDateError: 422,
    OutOfStockError: 409,
    OrderPersistenceError: 503,
    OrderItemPersistenceError: 503,
}


def create_app(store=None, auth=None, email=None, chat=None, settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    if auth is None:
        from storefront.identity.fake_auth import FakeAuthProvider

        auth = FakeAuthProvider()

    app = FastAPI(
        title="Catzo Storefront API",
        description="Pet shop storefront — catalogue, cart and checkout",
    )
    app.state.settings = settings
    app.state.store = store or build_store(settings)
    app.state.auth = auth
    app.state.dispatcher = NotificationDispatcher(
        settings,
        email=email or build_email_adapter(settings.email_adapter, **settings.emailjs),
        chat=chat or get_channel(NotificationChannel.WHATSAPP.value),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            return await call_next(request)

    register_exception_handlers(app)

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        return JSONResponse(status_code=_CHECKOUT_STATUS.get(type(exc), 400), content={"error": str(exc)})

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return JSONResponse(status_code=401, content={"error": str(exc)})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        return JSONResponse(status_code=503, content={"error": "The shop is temporarily unavailable"})

    from storefront.api import admin_router, auth_router, cart_router, order_router, product_router

    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": storefront.name,
                "stock_policy": settings.stock_policy,
            }
        )

    return app
