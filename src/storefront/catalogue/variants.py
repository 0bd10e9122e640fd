"""Variant management: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddVariant:
    product_id: Identifier(required=True)
    color: String(max_length=50)
    size: String(max_length=50)
    quantity: Integer(default=0, min_value=0)


@storefront.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        variant = product.add_variant(
            color=command.color,
            size=command.size,
            quantity=command.quantity,
        )
        repo.add(product)
        return str(variant.id)
