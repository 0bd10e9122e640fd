"""Storefront bounded context: Catalogue, Ordering and Checkout.

Products with per-variant stock, orders placed against them, and the
reconciliation that marks orders paid and deducts stock once the payment
processor reports a completed checkout. All three live in one domain so a
single unit of work can touch orders and products together.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
