"""Application tests for catalogue commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.restock import RestockProduct
from storefront.catalogue.variants import AddVariant


def _create_product(quantity=0):
    command = CreateProduct(name="Field Jacket", price=120.0, quantity=quantity)
    return current_domain.process(command, asynchronous=False)


class TestCreateProduct:
    def test_create_product_persists(self):
        product_id = _create_product(quantity=7)
        product = current_domain.repository_for(Product).get(product_id)

        assert product.name == "Field Jacket"
        assert product.price == 120.0
        assert product.quantity == 7
        assert product.is_archived is False


class TestAddVariant:
    def test_add_variant_persists(self):
        product_id = _create_product()
        variant_id = current_domain.process(
            AddVariant(product_id=product_id, color="Olive", size="L", quantity=3),
            asynchronous=False,
        )

        product = current_domain.repository_for(Product).get(product_id)
        variant = product.find_variant(variant_id)
        assert variant is not None
        assert variant.color == "Olive"
        assert variant.quantity == 3

    def test_add_variant_to_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                AddVariant(product_id="does-not-exist", color="Olive"),
                asynchronous=False,
            )


class TestRestockProduct:
    def test_restock_product_quantity(self):
        product_id = _create_product(quantity=1)
        current_domain.process(RestockProduct(product_id=product_id, quantity=4), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.quantity == 5

    def test_restock_unknown_variant(self):
        product_id = _create_product()
        with pytest.raises(ValidationError):
            current_domain.process(
                RestockProduct(product_id=product_id, variant_id="missing", quantity=1),
                asynchronous=False,
            )
