"""Inventory reconciliation for completed checkouts: command and handler.

When the payment processor reports a completed checkout, the order is marked
paid and every purchased line is taken out of stock. The handler runs in a
single unit of work and reads the order and every affected product before
changing anything, so a missing product or variant aborts the whole
reconciliation and leaves the order unpaid.

An order that is already paid is left alone, so redelivery of the same
event never deducts stock twice.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CompleteCheckout:
    """Payment for an order was confirmed by the processor."""

    order_id = Identifier(required=True)
    checkout_session_id = String(max_length=255)
    name = String(max_length=255)
    phone = String(max_length=50)
    address = Text()


@storefront.command_handler(part_of=Order)
class CompleteCheckoutHandler:
    @handle(CompleteCheckout)
    def complete_checkout(self, command):
        """Returns ``True`` when the order was reconciled, ``False`` for a duplicate."""
        order_repo = current_domain.repository_for(Order)
        product_repo = current_domain.repository_for(Product)

        order = order_repo.get(command.order_id)
        if order.is_paid:
            logger.info(
                "Order already paid, skipping reconciliation",
                order_id=str(order.id),
                checkout_session_id=command.checkout_session_id,
            )
            return False

        # Lines for the same product share one loaded aggregate
        products = {}
        for item in order.items:
            key = str(item.product_id)
            if key not in products:
                try:
                    products[key] = product_repo.get(key)
                except ObjectNotFoundError:
                    raise ValidationError(
                        {"items": [f"Product {key} on order {order.id} does not exist"]}
                    ) from None
            if item.variant_id and products[key].find_variant(item.variant_id) is None:
                raise ValidationError(
                    {"variants": [f"Variant {item.variant_id} not found on product {key} for order {order.id}"]}
                )

        order.mark_paid(
            checkout_session_id=command.checkout_session_id,
            name=command.name,
            phone=command.phone,
            address=command.address,
        )

        for item in order.items:
            product = products[str(item.product_id)]
            was_archived = product.is_archived
            product.deduct_stock(
                item.quantity,
                variant_id=str(item.variant_id) if item.variant_id else None,
                order_id=str(order.id),
            )
            if product.is_archived and not was_archived:
                logger.info(
                    "Product sold out and archived",
                    product_id=str(product.id),
                    order_id=str(order.id),
                )

        order_repo.add(order)
        for product in products.values():
            product_repo.add(product)

        logger.info(
            "Payment confirmed",
            order_id=str(order.id),
            checkout_session_id=command.checkout_session_id,
            items=len(order.items),
        )
        return True
