"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement, so
FakeGateway (dev/test) and StripeGateway (production) can be swapped without
touching domain or API code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutLine:
    """One line of a hosted checkout page."""

    title: str
    unit_price: float
    quantity: int


@dataclass(frozen=True)
class CheckoutSession:
    """A hosted checkout session the customer is redirected to."""

    session_id: str
    url: str


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        order_id: str,
        lines: list[CheckoutLine],
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Open a hosted checkout session whose metadata carries ``orderId``."""
        ...

    @abstractmethod
    def verify_webhook_signature(
        self,
        payload: str,
        signature: str,
    ) -> bool:
        """Verify that a webhook payload is authentically from the gateway."""
        ...
