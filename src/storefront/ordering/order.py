"""Order aggregate with the OrderItem entity.

An order is placed unpaid, with one line per purchased product (and variant,
when the product sells by variant). It is mutated once more, when the
payment processor confirms the checkout; the paid flag then guards against
applying the same payment twice.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from storefront.domain import storefront
from storefront.ordering.events import OrderPaid, OrderPlaced


@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased product, optionally a specific variant of it.

    Title and unit price are copied from the catalogue when the order is
    placed and never change afterwards.
    """

    product_id = Identifier(required=True)
    variant_id = Identifier()
    title = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self):
        return round(self.unit_price * self.quantity, 2)


@storefront.aggregate
class Order:
    is_paid = Boolean(default=False)
    email = String(max_length=254)
    name = String(max_length=255, default="")
    phone = String(max_length=50, default="")
    address = Text(default="")
    items = HasMany(OrderItem)
    checkout_session_id = String(max_length=255)
    ordered_at = DateTime()
    paid_at = DateTime()

    @classmethod
    def place(cls, items_data, email=None):
        """Create an unpaid order from a list of line dicts.

        Each dict carries ``product_id``, ``title``, ``unit_price``,
        ``quantity`` and optionally ``variant_id``.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(email=email, ordered_at=now)
        for item_data in items_data:
            order.add_items(
                OrderItem(
                    product_id=item_data["product_id"],
                    variant_id=item_data.get("variant_id"),
                    title=item_data["title"],
                    unit_price=item_data["unit_price"],
                    quantity=item_data["quantity"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                items=json.dumps(
                    [
                        {
                            "product_id": str(item.product_id),
                            "variant_id": str(item.variant_id) if item.variant_id else None,
                            "quantity": item.quantity,
                            "unit_price": item.unit_price,
                        }
                        for item in order.items
                    ]
                ),
                total=order.total,
                email=email,
                ordered_at=now,
            )
        )
        return order

    @property
    def total(self):
        return round(sum(item.line_total for item in self.items), 2)

    def mark_paid(self, checkout_session_id=None, name=None, phone=None, address=None):
        if self.is_paid:
            raise ValidationError({"is_paid": [f"Order {self.id} is already paid"]})

        now = datetime.now(UTC)
        self.is_paid = True
        self.checkout_session_id = checkout_session_id
        self.name = name or ""
        self.phone = phone or ""
        self.address = address or ""
        self.paid_at = now

        self.raise_(
            OrderPaid(
                order_id=self.id,
                checkout_session_id=checkout_session_id,
                name=self.name,
                phone=self.phone,
                address=self.address,
                paid_at=now,
            )
        )
