"""Shared BDD fixtures and step definitions for checkout reconciliation."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalogue.creation import CreateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.variants import AddVariant
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder


@pytest.fixture()
def variants():
    return {}


def _reload(product_id):
    return current_domain.repository_for(Product).get(product_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("a product with {quantity:d} units in stock"), target_fixture="product_id")
def _product_in_stock(quantity):
    return current_domain.process(
        CreateProduct(name="Ceramic Vase", price=45.0, quantity=quantity),
        asynchronous=False,
    )


@given(
    parsers.cfparse(
        'a product sold by variant with "{first}" at {first_qty:d} units and "{second}" at {second_qty:d} units'
    ),
    target_fixture="product_id",
)
def _product_with_variants(variants, first, first_qty, second, second_qty):
    product_id = current_domain.process(
        CreateProduct(name="Linen Shirt", price=49.0, quantity=0),
        asynchronous=False,
    )
    for color, quantity in ((first, first_qty), (second, second_qty)):
        variants[color] = current_domain.process(
            AddVariant(product_id=product_id, color=color, quantity=quantity),
            asynchronous=False,
        )
    return product_id


@given(parsers.cfparse("an order for {quantity:d} units of the product"), target_fixture="order_id")
def _order_for_product(product_id, quantity):
    items = [{"product_id": product_id, "quantity": quantity}]
    return current_domain.process(PlaceOrder(items=json.dumps(items)), asynchronous=False)


@given(parsers.cfparse('an order for {quantity:d} units of the "{color}" variant'), target_fixture="order_id")
def _order_for_variant(product_id, variants, quantity, color):
    items = [{"product_id": product_id, "variant_id": variants[color], "quantity": quantity}]
    return current_domain.process(PlaceOrder(items=json.dumps(items)), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the order is paid")
def _order_is_paid(order_id):
    assert current_domain.repository_for(Order).get(order_id).is_paid is True


@then(parsers.cfparse("the product has {quantity:d} units in stock"))
def _product_quantity(product_id, quantity):
    assert _reload(product_id).quantity == quantity


@then(parsers.cfparse('the "{color}" variant has {quantity:d} units in stock'))
def _variant_quantity(product_id, variants, color, quantity):
    assert _reload(product_id).find_variant(variants[color]).quantity == quantity


@then("the product is archived")
def _product_archived(product_id):
    assert _reload(product_id).is_archived is True


@then("the product is not archived")
def _product_not_archived(product_id):
    assert _reload(product_id).is_archived is False
