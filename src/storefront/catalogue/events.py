"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    price: Float(required=True)
    quantity: Integer(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class VariantAdded:
    """A sellable color/size configuration was added to a product."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    color: String()
    size: String()
    quantity: Integer(required=True)


@storefront.event(part_of="Product")
class ProductRestocked:
    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier()
    quantity: Integer(required=True)
    new_quantity: Integer(required=True)
    restocked_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockDeducted:
    """Stock was taken out for a paid order line.

    ``requested`` is what the order asked for, ``deducted`` what was actually
    available to take; they differ when stock ran out.
    """

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier()
    order_id: Identifier()
    requested: Integer(required=True)
    deducted: Integer(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)
    deducted_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductArchived:
    """The product sold out and is no longer purchasable."""

    __version__ = 1

    product_id: Identifier(required=True)
    archived_at: DateTime(required=True)
