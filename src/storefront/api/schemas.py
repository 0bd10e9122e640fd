"""Pydantic request/response schemas for the storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. The webhook models accept the subset of the
payment processor's event payload the reconciliation needs and ignore the
rest.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    quantity: int = Field(default=0, ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Linen Shirt",
                    "price": 49.0,
                    "quantity": 12,
                }
            ]
        }
    }


class AddVariantRequest(BaseModel):
    color: str | None = None
    size: str | None = None
    quantity: int = Field(default=0, ge=0)


class RestockRequest(BaseModel):
    quantity: int = Field(gt=0)
    variant_id: str | None = None


class VariantResponse(BaseModel):
    variant_id: str
    color: str | None = None
    size: str | None = None
    quantity: int


class ProductResponse(BaseModel):
    product_id: str
    name: str
    price: float
    quantity: int
    is_archived: bool
    variants: list[VariantResponse] = []


class ProductIdResponse(BaseModel):
    product_id: str


class VariantIdResponse(BaseModel):
    variant_id: str


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------
class OrderLineRequest(BaseModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(default=1, ge=1)


class PlaceOrderRequest(BaseModel):
    items: list[OrderLineRequest] = Field(min_length=1)
    email: str | None = None


class PlaceOrderResponse(BaseModel):
    order_id: str
    checkout_session_id: str
    checkout_url: str


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    variant_id: str | None = None
    title: str
    unit_price: float
    quantity: int


class OrderResponse(BaseModel):
    order_id: str
    is_paid: bool
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    email: str | None = None
    total: float
    items: list[OrderItemResponse] = []


# ---------------------------------------------------------------------------
# Checkout webhook
# ---------------------------------------------------------------------------
class CustomerAddress(BaseModel):
    line1: str | None = None
    line2: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None


class CustomerDetails(BaseModel):
    address: CustomerAddress | None = None
    email: str | None = None
    name: str | None = None
    phone: str | None = None


class SessionMetadata(BaseModel):
    order_id: str | None = Field(default=None, alias="orderId")


class CheckoutSessionObject(BaseModel):
    id: str | None = None
    customer_details: CustomerDetails | None = None
    metadata: SessionMetadata | None = None


class EventData(BaseModel):
    object_: dict = Field(default_factory=dict, alias="object")


class WebhookEvent(BaseModel):
    id: str | None = None
    type: str
    data: EventData = Field(default_factory=EventData)


class WebhookAck(BaseModel):
    received: bool = True


class StatusResponse(BaseModel):
    status: str = "ok"
