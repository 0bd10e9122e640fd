"""Product creation: command and handler."""

from protean import handle
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(default=0, min_value=0)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            quantity=command.quantity,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
