"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order and was sent to the hosted checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    total = Float(required=True)
    email = String()
    ordered_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderPaid:
    """The payment processor confirmed payment for the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    checkout_session_id = String()
    name = String()
    phone = String()
    address = Text()
    paid_at = DateTime(required=True)
