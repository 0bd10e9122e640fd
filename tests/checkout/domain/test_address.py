"""Tests for flattening processor addresses."""

from storefront.checkout.address import format_address


def test_all_parts_joined_in_order():
    address = {
        "line1": "1 Main St",
        "line2": "Apt 4",
        "city": "Springfield",
        "state": "IL",
        "postal_code": "62701",
        "country": "US",
    }
    assert format_address(address) == "1 Main St, Apt 4, Springfield, IL, 62701, US"


def test_missing_parts_are_dropped():
    address = {
        "line1": "1 Main St",
        "line2": None,
        "city": "Springfield",
        "state": None,
        "postal_code": "62701",
        "country": "US",
    }
    assert format_address(address) == "1 Main St, Springfield, 62701, US"


def test_blank_parts_are_dropped():
    assert format_address({"line1": "1 Main St", "line2": "", "city": "Springfield"}) == "1 Main St, Springfield"


def test_no_address():
    assert format_address(None) == ""
    assert format_address({}) == ""
