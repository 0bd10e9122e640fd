"""FastAPI routes for the storefront: products, orders and the checkout webhook."""

import json

import structlog
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from pydantic import ValidationError as PydanticValidationError

from storefront.api.schemas import (
    AddVariantRequest,
    CheckoutSessionObject,
    CreateProductRequest,
    OrderItemResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductIdResponse,
    ProductResponse,
    RestockRequest,
    StatusResponse,
    VariantIdResponse,
    VariantResponse,
    WebhookAck,
    WebhookEvent,
)
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.restock import RestockProduct
from storefront.catalogue.variants import AddVariant
from storefront.checkout.address import format_address
from storefront.checkout.gateway import CheckoutLine, PaymentGateway
from storefront.checkout.reconciliation import CompleteCheckout
from storefront.config import StorefrontSettings
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder

logger = structlog.get_logger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


def get_settings(request: Request) -> StorefrontSettings:
    return request.app.state.settings


def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        price=product.price,
        quantity=product.quantity or 0,
        is_archived=bool(product.is_archived),
        variants=[
            VariantResponse(
                variant_id=str(variant.id),
                color=variant.color,
                size=variant.size,
                quantity=variant.quantity or 0,
            )
            for variant in product.variants
        ],
    )


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        price=body.price,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return _product_response(product)


@product_router.post("/{product_id}/variants", status_code=201, response_model=VariantIdResponse)
async def add_variant(product_id: str, body: AddVariantRequest) -> VariantIdResponse:
    command = AddVariant(
        product_id=product_id,
        color=body.color,
        size=body.size,
        quantity=body.quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return VariantIdResponse(variant_id=result)


@product_router.post("/{product_id}/restock", response_model=StatusResponse)
async def restock_product(product_id: str, body: RestockRequest) -> StatusResponse:
    command = RestockProduct(
        product_id=product_id,
        variant_id=body.variant_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    gateway: PaymentGateway = Depends(get_gateway),
    settings: StorefrontSettings = Depends(get_settings),
) -> PlaceOrderResponse:
    """Place an unpaid order and open a hosted checkout session for it."""
    command = PlaceOrder(
        items=json.dumps([line.model_dump() for line in body.items]),
        email=body.email,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)

    site_url = settings.site_url.rstrip("/")
    session = gateway.create_checkout_session(
        order_id=order_id,
        lines=[
            CheckoutLine(title=item.title, unit_price=item.unit_price, quantity=item.quantity)
            for item in order.items
        ],
        currency=settings.currency,
        success_url=f"{site_url}/cart?success=1",
        cancel_url=f"{site_url}/cart?canceled=1",
    )
    logger.info("Checkout session opened", order_id=order_id, checkout_session_id=session.session_id)
    return PlaceOrderResponse(
        order_id=order_id,
        checkout_session_id=session.session_id,
        checkout_url=session.url,
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    return OrderResponse(
        order_id=str(order.id),
        is_paid=bool(order.is_paid),
        name=order.name,
        phone=order.phone,
        address=order.address,
        email=order.email,
        total=order.total,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                variant_id=str(item.variant_id) if item.variant_id else None,
                title=item.title,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for item in order.items
        ],
    )


# ---------------------------------------------------------------------------
# Webhook Router
# ---------------------------------------------------------------------------
webhook_router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@webhook_router.post("/checkout", response_model=WebhookAck)
async def checkout_webhook(
    request: Request,
    stripe_signature: str = Header(default=""),
    gateway: PaymentGateway = Depends(get_gateway),
):
    """Reconcile orders and stock for processor checkout events.

    The raw body is verified before it is parsed; anything that fails
    verification or decoding is rejected with 400 and changes nothing.
    """
    try:
        payload = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Checkout webhook rejected: body is not UTF-8")
        return JSONResponse(status_code=400, content={"error": "Webhook body is not valid UTF-8"})

    if not gateway.verify_webhook_signature(payload, stripe_signature):
        logger.warning("Checkout webhook rejected: invalid signature")
        return JSONResponse(status_code=400, content={"error": "Invalid webhook signature"})

    try:
        event = WebhookEvent.model_validate_json(payload)
    except PydanticValidationError as exc:
        logger.warning("Checkout webhook rejected: malformed event", errors=exc.error_count())
        return JSONResponse(status_code=400, content={"error": "Malformed webhook event"})

    if event.type != CHECKOUT_COMPLETED:
        logger.warning("Unhandled event type", event_type=event.type, event_id=event.id)
        return WebhookAck()

    try:
        session = CheckoutSessionObject.model_validate(event.data.object_)
    except PydanticValidationError:
        logger.warning("Checkout webhook rejected: malformed session", event_id=event.id)
        return JSONResponse(status_code=400, content={"error": "Malformed checkout session"})

    order_id = session.metadata.order_id if session.metadata else None
    if not order_id:
        logger.warning("Checkout webhook rejected: no order reference", event_id=event.id)
        return JSONResponse(status_code=400, content={"error": "Checkout session carries no orderId"})

    details = session.customer_details
    address = details.address.model_dump() if details and details.address else None
    command = CompleteCheckout(
        order_id=order_id,
        checkout_session_id=session.id,
        name=(details.name if details else None) or "",
        phone=(details.phone if details else None) or "",
        address=format_address(address),
    )

    try:
        current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError:
        logger.warning("Checkout webhook for unknown order", order_id=order_id, event_id=event.id)
        return JSONResponse(status_code=404, content={"error": f"Order {order_id} not found"})

    return WebhookAck()
