"""Restocking: command and handler.

Restocking puts an archived product back on sale.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class RestockProduct:
    product_id: Identifier(required=True)
    variant_id: Identifier()
    quantity: Integer(required=True, min_value=1)


@storefront.command_handler(part_of=Product)
class RestockProductHandler:
    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restock(command.quantity, variant_id=command.variant_id)
        repo.add(product)
