"""Product aggregate root with the Variant entity.

Stock is tracked at two levels. A product without variants sells from its
own ``quantity``; a product with variants sells from each variant's
``quantity``. Quantities never drop below zero, and a product whose sellable
stock is exhausted is archived.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String

from storefront.catalogue.events import (
    ProductArchived,
    ProductCreated,
    ProductRestocked,
    StockDeducted,
    VariantAdded,
)
from storefront.domain import storefront


@storefront.entity(part_of="Product")
class Variant:
    """A sellable color/size configuration with its own stock count."""

    color: String(max_length=50)
    size: String(max_length=50)
    quantity: Integer(default=0, min_value=0)

    @property
    def label(self):
        return " / ".join(part for part in (self.color, self.size) if part) or str(self.id)


@storefront.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    quantity: Integer(default=0, min_value=0)
    is_archived: Boolean(default=False)
    variants: HasMany(Variant)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def quantities_cannot_be_negative(self):
        if self.quantity is not None and self.quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})
        for variant in self.variants:
            if variant.quantity is not None and variant.quantity < 0:
                raise ValidationError({"variants": [f"Variant {variant.id} quantity cannot be negative"]})

    @classmethod
    def create(cls, name, price, quantity=0):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            quantity=quantity or 0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                price=price,
                quantity=product.quantity,
                created_at=now,
            )
        )
        return product

    def find_variant(self, variant_id):
        return next((v for v in self.variants if str(v.id) == str(variant_id)), None)

    def _get_variant(self, variant_id):
        variant = self.find_variant(variant_id)
        if variant is None:
            raise ValidationError({"variants": [f"Variant {variant_id} not found on product {self.id}"]})
        return variant

    def add_variant(self, color=None, size=None, quantity=0):
        if not color and not size:
            raise ValidationError({"variants": ["A variant needs a color or a size"]})

        variant = Variant(color=color, size=size, quantity=quantity or 0)
        self.add_variants(variant)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantAdded(
                product_id=self.id,
                variant_id=variant.id,
                color=color,
                size=size,
                quantity=variant.quantity,
            )
        )
        return variant

    def has_sellable_variants(self):
        return any((v.quantity or 0) > 0 for v in self.variants)

    def restock(self, quantity, variant_id=None):
        """Add stock and put the product back on sale."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Restock quantity must be positive"]})

        if variant_id:
            variant = self._get_variant(variant_id)
            variant.quantity = (variant.quantity or 0) + quantity
            new_quantity = variant.quantity
        else:
            self.quantity = (self.quantity or 0) + quantity
            new_quantity = self.quantity

        now = datetime.now(UTC)
        self.is_archived = False
        self.updated_at = now

        self.raise_(
            ProductRestocked(
                product_id=self.id,
                variant_id=variant_id,
                quantity=quantity,
                new_quantity=new_quantity,
                restocked_at=now,
            )
        )

    def deduct_stock(self, quantity, variant_id=None, order_id=None):
        """Take ``quantity`` out of stock for a paid order line.

        Without a variant the product's own quantity is reduced and the
        product is archived once it reaches zero. With a variant only that
        variant is reduced, and the product is archived once no variant has
        stock left. Quantities are clamped at zero.
        """
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Deducted quantity must be positive"]})

        if variant_id:
            variant = self._get_variant(variant_id)
            previous = variant.quantity or 0
            variant.quantity = max(previous - quantity, 0)
            new_quantity = variant.quantity
            exhausted = not self.has_sellable_variants()
        else:
            previous = self.quantity or 0
            self.quantity = max(previous - quantity, 0)
            new_quantity = self.quantity
            exhausted = self.quantity <= 0

        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StockDeducted(
                product_id=self.id,
                variant_id=variant_id,
                order_id=order_id,
                requested=quantity,
                deducted=previous - new_quantity,
                previous_quantity=previous,
                new_quantity=new_quantity,
                deducted_at=now,
            )
        )

        if exhausted:
            self.archive()

    def archive(self):
        if self.is_archived:
            return

        now = datetime.now(UTC)
        self.is_archived = True
        self.updated_at = now

        self.raise_(
            ProductArchived(
                product_id=self.id,
                archived_at=now,
            )
        )
