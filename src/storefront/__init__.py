"""Storefront: catalogue, ordering and post-payment inventory reconciliation."""
