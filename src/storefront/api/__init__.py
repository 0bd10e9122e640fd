"""Storefront API package."""

from storefront.api.routes import order_router, product_router, webhook_router

__all__ = ["order_router", "product_router", "webhook_router"]
