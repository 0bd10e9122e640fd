"""Order placement: command and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.order import Order


@storefront.command(part_of="Order")
class PlaceOrder:
    items: Text(required=True)  # JSON: list of {product_id, variant_id, quantity}
    email: String(max_length=254)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = json.loads(command.items) if isinstance(command.items, str) else command.items
        product_repo = current_domain.repository_for(Product)

        lines = []
        for entry in requested:
            product_id = entry.get("product_id")
            variant_id = entry.get("variant_id")
            quantity = entry.get("quantity", 1)

            if not isinstance(quantity, int) or quantity < 1:
                raise ValidationError({"items": [f"Quantity for product {product_id} must be at least 1"]})

            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                raise ValidationError({"items": [f"Product {product_id} does not exist"]}) from None

            if product.is_archived:
                raise ValidationError({"items": [f"Product {product_id} is no longer available"]})

            title = product.name
            if variant_id:
                variant = product.find_variant(variant_id)
                if variant is None:
                    raise ValidationError({"items": [f"Variant {variant_id} not found on product {product_id}"]})
                title = f"{product.name} ({variant.label})"

            lines.append(
                {
                    "product_id": str(product.id),
                    "variant_id": str(variant_id) if variant_id else None,
                    "title": title,
                    "unit_price": product.price,
                    "quantity": quantity,
                }
            )

        order = Order.place(lines, email=command.email)
        current_domain.repository_for(Order).add(order)
        return str(order.id)
