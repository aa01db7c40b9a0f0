"""FastAPI routes for the Storefront — auth, catalogue, cart, orders and admin."""

from fastapi import APIRouter, Depends, HTTPException, Query

from notifications.dispatch import NotificationDispatcher
from storefront.api.dependencies import (
    admin_session,
    current_session,
    get_auth,
    get_dispatcher,
    get_settings,
    get_store,
)
from storefront.api.schemas import (
    AddToCartRequest,
    AdminSummaryResponse,
    CartEntryResponse,
    CartResponse,
    CheckoutRequest,
    NotificationOutcomeResponse,
    OrderItemResponse,
    OrderResponse,
    PlacedOrderResponse,
    ProductResponse,
    ProfileResponse,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    StatusResponse,
    StockWarningResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
    UpdateProfileRequest,
)
from storefront.cart.ledger import CartLedger
from storefront.catalogue.browsing import CatalogueQuery, browse
from storefront.catalogue.catalog import ProductCatalog
from storefront.identity.auth_port import AuthError, ShopperSession
from storefront.identity.profiles import ProfileDirectory
from storefront.order.history import OrderHistory
from storefront.order.order import CustomerInfo
from storefront.order.workflow import OrderWorkflow


# ---------------------------------------------------------------------------
# Mappers
# ---------------------------------------------------------------------------
def _product_response(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        category=product.category,
        price=product.price,
        image=product.image,
        age=product.age,
        stock=product.stock,
        delivery_days=product.delivery_days,
        is_out_of_stock=product.is_out_of_stock,
        is_low_stock=product.is_low_stock,
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        order_number=order.order_number,
        status=order.status,
        customer_name=order.customer.name,
        customer_email=order.customer.email,
        customer_phone=order.customer.phone,
        delivery_address=order.customer.address,
        payment_method=order.payment_method,
        delivery_date=order.delivery_date,
        total_amount=order.total_amount,
        notes=order.notes,
        created_at=order.created_at,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                product_price=item.product_price,
                quantity=item.quantity,
                subtotal=item.subtotal,
            )
            for item in order.items
        ],
    )


def _cart_response(ledger: CartLedger) -> CartResponse:
    return CartResponse(
        entries=[
            CartEntryResponse(
                id=str(entry.id),
                product_id=str(entry.product_id),
                product_name=entry.product_name,
                unit_price=entry.unit_price,
                quantity=entry.quantity,
                stock=entry.stock,
                subtotal=entry.subtotal,
            )
            for entry in ledger.entries
        ],
        total=ledger.total(),
        item_count=ledger.item_count(),
        warnings=[StockWarningResponse(**vars(warning)) for warning in ledger.stock_warnings()],
    )


async def _loaded_ledger(store, session: ShopperSession) -> CartLedger:
    ledger = CartLedger(store, session)
    await ledger.load()
    return ledger


# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(tags=["auth"])


@auth_router.post("/auth/signup", status_code=201, response_model=SessionResponse)
async def sign_up(body: SignUpRequest, auth=Depends(get_auth), store=Depends(get_store), settings=Depends(get_settings)):
    try:
        session = await auth.sign_up(body.email, body.password, body.name)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    await ProfileDirectory(store).ensure(session, name=body.name)
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        access_token=session.access_token,
        is_admin=settings.is_admin(session.email),
    )


@auth_router.post("/auth/signin", response_model=SessionResponse)
async def sign_in(body: SignInRequest, auth=Depends(get_auth), settings=Depends(get_settings)):
    session = await auth.sign_in(body.email, body.password)
    return SessionResponse(
        user_id=session.user_id,
        email=session.email,
        access_token=session.access_token,
        is_admin=settings.is_admin(session.email),
    )


@auth_router.post("/auth/signout", response_model=StatusResponse)
async def sign_out(session: ShopperSession = Depends(current_session), auth=Depends(get_auth)):
    await auth.sign_out(session.access_token)
    return StatusResponse()


@auth_router.get("/profile", response_model=ProfileResponse)
async def get_profile(session: ShopperSession = Depends(current_session), store=Depends(get_store)):
    profile = await ProfileDirectory(store).ensure(session)
    return ProfileResponse(
        id=str(profile.id), email=profile.email, name=profile.name, phone=profile.phone, address=profile.address
    )


@auth_router.patch("/profile", response_model=ProfileResponse)
async def update_profile(
    body: UpdateProfileRequest, session: ShopperSession = Depends(current_session), store=Depends(get_store)
):
    profile = await ProfileDirectory(store).update(session, **body.model_dump(exclude_unset=True))
    return ProfileResponse(
        id=str(profile.id), email=profile.email, name=profile.name, phone=profile.phone, address=profile.address
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products(
    search: str = "",
    category: str = "all",
    price_range: str = "all",
    sort: str = Query(default="name"),
    store=Depends(get_store),
):
    try:
        query = CatalogueQuery(search=search, category=category, price_range=price_range, sort=sort)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    products = await ProductCatalog(store).list_active()
    return [_product_response(product) for product in browse(products, query)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, store=Depends(get_store)):
    product = await ProductCatalog(store).get(product_id)
    if product is None or not product.is_active:
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return _product_response(product)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(session: ShopperSession = Depends(current_session), store=Depends(get_store)):
    return _cart_response(await _loaded_ledger(store, session))


@cart_router.post("/items", status_code=201, response_model=CartResponse)
async def add_cart_item(
    body: AddToCartRequest, session: ShopperSession = Depends(current_session), store=Depends(get_store)
):
    product = await ProductCatalog(store).get(body.product_id)
    if product is None or not product.is_active:
        raise HTTPException(status_code=404, detail=f"Product {body.product_id} not found")

    ledger = await _loaded_ledger(store, session)
    if not await ledger.add(product, body.quantity):
        raise HTTPException(status_code=503, detail="Could not add the product to your cart")
    return _cart_response(ledger)


@cart_router.patch("/items/{entry_id}", response_model=CartResponse)
async def update_cart_item(
    entry_id: str,
    body: UpdateCartQuantityRequest,
    session: ShopperSession = Depends(current_session),
    store=Depends(get_store),
):
    ledger = await _loaded_ledger(store, session)
    if entry_id not in {str(entry.id) for entry in ledger.entries}:
        raise HTTPException(status_code=404, detail=f"Cart item {entry_id} not found")
    if not await ledger.set_quantity(entry_id, body.quantity):
        raise HTTPException(status_code=503, detail="Could not update your cart")
    return _cart_response(ledger)


@cart_router.delete("/items/{entry_id}", response_model=CartResponse)
async def remove_cart_item(entry_id: str, session: ShopperSession = Depends(current_session), store=Depends(get_store)):
    ledger = await _loaded_ledger(store, session)
    if entry_id in {str(entry.id) for entry in ledger.entries} and not await ledger.remove(entry_id):
        raise HTTPException(status_code=503, detail="Could not update your cart")
    return _cart_response(ledger)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlacedOrderResponse)
async def place_order(
    body: CheckoutRequest,
    session: ShopperSession = Depends(current_session),
    store=Depends(get_store),
    settings=Depends(get_settings),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    info = CustomerInfo(
        name=body.name,
        email=body.email,
        phone=body.phone,
        address=body.address,
        payment_method=body.payment_method,
        delivery_date=body.delivery_date,
        notes=body.notes,
    )
    ledger = await _loaded_ledger(store, session)
    workflow = OrderWorkflow(store, session, ledger, stock_policy=settings.stock_policy)
    order = await workflow.submit(info, ledger.snapshot())

    # The order stands whatever the notification outcome
    report = await dispatcher.dispatch(order)
    return PlacedOrderResponse(
        order=_order_response(order),
        notifications=[
            NotificationOutcomeResponse(
                channel=outcome.channel,
                recipient=outcome.recipient,
                sent=outcome.sent,
                url=outcome.url,
                message=outcome.failure.message if outcome.failure else None,
            )
            for outcome in report.outcomes
        ],
    )


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(session: ShopperSession = Depends(current_session), store=Depends(get_store)):
    orders = await OrderHistory(store).list_for_user(session.user_id)
    return [_order_response(order) for order in orders]


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(admin_session)])


@admin_router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, store=Depends(get_store)):
    order = await OrderHistory(store).update_status(order_id, body.status)
    return _order_response(order)


@admin_router.get("/summary", response_model=AdminSummaryResponse)
async def admin_summary(store=Depends(get_store)):
    products = await ProductCatalog(store).list_active()
    summary = await OrderHistory(store).summary(total_products=len(products))
    return AdminSummaryResponse(
        total_products=summary.total_products,
        total_orders=summary.total_orders,
        revenue=summary.revenue,
        pending_orders=summary.pending_orders,
        recent_orders=[_order_response(order) for order in summary.recent_orders],
    )
