"""Fake payment gateway for development and testing.

Makes no external calls. Webhooks are accepted when signed with the literal
``test-signature``, mirroring how Stripe's test mode pairs test keys with
known test values.
"""

from uuid import uuid4

from storefront.checkout.gateway.port import CheckoutLine, CheckoutSession, PaymentGateway

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Records calls and fabricates checkout sessions."""

    def __init__(self, checkout_url: str = "http://localhost:3000/fake-checkout") -> None:
        self.checkout_url = checkout_url
        self.calls: list[dict] = []

    def create_checkout_session(
        self,
        order_id: str,
        lines: list[CheckoutLine],
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        session_id = f"cs_fake_{uuid4().hex[:16]}"
        self.calls.append(
            {
                "method": "create_checkout_session",
                "order_id": order_id,
                "lines": lines,
                "currency": currency,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "session_id": session_id,
            }
        )
        return CheckoutSession(session_id=session_id, url=f"{self.checkout_url}/{session_id}")

    def verify_webhook_signature(self, payload: str, signature: str) -> bool:  # noqa: ARG002
        return signature == TEST_SIGNATURE
