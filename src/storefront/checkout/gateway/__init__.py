"""Payment gateway factory.

The gateway is chosen from the application settings when the app is built;
routes receive it from the application rather than from module globals.
"""

from storefront.checkout.gateway.fake_adapter import FakeGateway
from storefront.checkout.gateway.port import CheckoutLine, CheckoutSession, PaymentGateway
from storefront.checkout.gateway.stripe_adapter import StripeGateway
from storefront.config import StorefrontSettings


def build_gateway(settings: StorefrontSettings) -> PaymentGateway:
    """Return the gateway named by ``settings.payment_gateway``."""
    if settings.payment_gateway == "stripe":
        return StripeGateway(
            api_key=settings.stripe_secret_key,
            webhook_secret=settings.stripe_webhook_secret,
        )
    return FakeGateway(checkout_url=f"{settings.site_url.rstrip('/')}/fake-checkout")


__all__ = [
    "CheckoutLine",
    "CheckoutSession",
    "FakeGateway",
    "PaymentGateway",
    "StripeGateway",
    "build_gateway",
]
