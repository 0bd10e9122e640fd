"""Stripe payment gateway adapter.

Uses the stripe-python SDK to open hosted Checkout Sessions and to verify
webhook signatures against the endpoint's signing secret.
"""

import stripe
import structlog

from storefront.checkout.gateway.port import CheckoutLine, CheckoutSession, PaymentGateway

logger = structlog.get_logger(__name__)

# Seconds a signed webhook stays acceptable (Stripe's own default)
SIGNATURE_TOLERANCE = 300


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, webhook_secret: str, tolerance: int = SIGNATURE_TOLERANCE) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance

    def create_checkout_session(
        self,
        order_id: str,
        lines: list[CheckoutLine],
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        session = stripe.checkout.Session.create(
            api_key=self.api_key,
            mode="payment",
            line_items=[
                {
                    "price_data": {
                        "currency": currency,
                        "product_data": {"name": line.title},
                        "unit_amount": int(round(line.unit_price * 100)),
                    },
                    "quantity": line.quantity,
                }
                for line in lines
            ],
            billing_address_collection="required",
            phone_number_collection={"enabled": True},
            success_url=success_url,
            cancel_url=cancel_url,
            metadata={"orderId": order_id},
        )
        return CheckoutSession(session_id=session.id, url=session.url)

    def verify_webhook_signature(self, payload: str, signature: str) -> bool:
        if not signature:
            return False
        try:
            stripe.WebhookSignature.verify_header(payload, signature, self.webhook_secret, self.tolerance)
        except stripe.SignatureVerificationError as exc:
            logger.warning("Stripe webhook signature rejected", reason=str(exc))
            return False
        return True
