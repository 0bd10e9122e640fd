"""Tests for Product stock deduction, archival and restocking."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.events import ProductArchived, ProductRestocked, StockDeducted
from storefront.catalogue.product import Product


def _make_product(quantity=5, **overrides):
    defaults = {"name": "Canvas Tote", "price": 25.0, "quantity": quantity}
    defaults.update(overrides)
    product = Product.create(**defaults)
    product._events.clear()
    return product


def _make_product_with_variants(*quantities):
    product = _make_product(quantity=0)
    variants = [product.add_variant(color="Red", size=f"S{i}", quantity=q) for i, q in enumerate(quantities)]
    product._events.clear()
    return product, variants


class TestProductCreation:
    def test_create_product_defaults(self):
        product = Product.create(name="Mug", price=12.5)
        assert product.quantity == 0
        assert product.is_archived is False
        assert len(product.variants) == 0

    def test_variant_needs_color_or_size(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.add_variant()

    def test_variant_label(self):
        product = _make_product()
        variant = product.add_variant(color="Blue", size="M", quantity=1)
        assert variant.label == "Blue / M"


class TestDeductWithoutVariant:
    def test_exact_quantity_empties_and_archives(self):
        product = _make_product(quantity=5)
        product.deduct_stock(5)

        assert product.quantity == 0
        assert product.is_archived is True

    def test_overdraw_is_clamped_at_zero(self):
        product = _make_product(quantity=3)
        product.deduct_stock(5)

        assert product.quantity == 0
        assert product.is_archived is True

    def test_partial_deduction_keeps_product_on_sale(self):
        product = _make_product(quantity=5)
        product.deduct_stock(2)

        assert product.quantity == 3
        assert product.is_archived is False

    def test_deduction_records_what_was_actually_taken(self):
        product = _make_product(quantity=3)
        product.deduct_stock(5, order_id="ord-1")

        event = next(e for e in product._events if isinstance(e, StockDeducted))
        assert event.requested == 5
        assert event.deducted == 3
        assert event.previous_quantity == 3
        assert event.new_quantity == 0

    def test_archival_raises_event_once(self):
        product = _make_product(quantity=1)
        product.deduct_stock(1)
        product.deduct_stock(1)

        archived = [e for e in product._events if isinstance(e, ProductArchived)]
        assert len(archived) == 1

    def test_non_positive_quantity_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.deduct_stock(0)


class TestDeductWithVariant:
    def test_only_named_variant_is_reduced(self):
        product, (red, blue) = _make_product_with_variants(4, 6)
        product.deduct_stock(3, variant_id=red.id)

        assert product.find_variant(red.id).quantity == 1
        assert product.find_variant(blue.id).quantity == 6
        assert product.quantity == 0
        assert product.is_archived is False

    def test_product_stays_on_sale_while_another_variant_has_stock(self):
        product, (red, blue) = _make_product_with_variants(2, 1)
        product.deduct_stock(2, variant_id=red.id)

        assert product.find_variant(red.id).quantity == 0
        assert product.is_archived is False

    def test_product_archived_when_last_variant_sells_out(self):
        product, (red, blue) = _make_product_with_variants(0, 2)
        product.deduct_stock(5, variant_id=blue.id)

        assert product.find_variant(blue.id).quantity == 0
        assert product.is_archived is True

    def test_unknown_variant_rejected(self):
        product, _ = _make_product_with_variants(2)
        with pytest.raises(ValidationError):
            product.deduct_stock(1, variant_id="missing")


class TestRestock:
    def test_restock_unarchives(self):
        product = _make_product(quantity=1)
        product.deduct_stock(1)
        assert product.is_archived is True

        product.restock(4)

        assert product.quantity == 4
        assert product.is_archived is False
        assert any(isinstance(e, ProductRestocked) for e in product._events)

    def test_restock_variant(self):
        product, (red,) = _make_product_with_variants(0)
        product.restock(3, variant_id=red.id)

        assert product.find_variant(red.id).quantity == 3

    def test_restock_requires_positive_quantity(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.restock(0)
