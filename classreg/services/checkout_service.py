"""Hosted checkout, the alternate "Buy Now" path.

Creates a Stripe Checkout Session for the single fixed-price product and
returns the URL to redirect the browser to. Touches no registration or
payment rows.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

import stripe

from classreg.config import Settings
from classreg.errors import UpstreamProviderError

logger = logging.getLogger(__name__)

PRODUCT_NAME = "New Retirement Rules™ Class Registration"
PRODUCT_DESCRIPTION = (
    "Includes admission for you and a guest, workbook, and essential reports valued at $1,439"
)
UNIT_AMOUNT_CENTS = 4900
CURRENCY = "usd"


class CheckoutProvider(ABC):
    """Interface to a hosted-payment-session provider."""

    @abstractmethod
    def create_session(
        self,
        line_items: list[dict[str, Any]],
        mode: str,
        success_url: str,
        cancel_url: str,
    ) -> str:
        """Create a session and return its hosted URL.

        Raises:
            UpstreamProviderError: If the provider call fails.
        """
        ...


class StripeCheckoutProvider(CheckoutProvider):
    """Stripe Checkout, authenticated with the configured secret key."""

    def __init__(self, config: Settings) -> None:
        self._api_key = config.STRIPE_SECRET_KEY

    def create_session(self, line_items, mode, success_url, cancel_url) -> str:
        try:
            session = stripe.checkout.Session.create(
                api_key=self._api_key,
                line_items=line_items,
                mode=mode,
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as e:
            logger.error("Stripe checkout error: %s (%s)", e, type(e).__name__)
            raise UpstreamProviderError() from e
        if not session.url:
            logger.error("Stripe session %s returned no URL", session.id)
            raise UpstreamProviderError()
        return session.url


def class_line_items() -> list[dict[str, Any]]:
    return [
        {
            "price_data": {
                "currency": CURRENCY,
                "product_data": {
                    "name": PRODUCT_NAME,
                    "description": PRODUCT_DESCRIPTION,
                },
                "unit_amount": UNIT_AMOUNT_CENTS,
            },
            "quantity": 1,
        }
    ]


def create_checkout_redirect(provider: CheckoutProvider, base_url: str) -> str:
    """Return the hosted checkout URL for one class registration.

    Raises:
        UpstreamProviderError: If the provider fails; the message is generic.
    """
    base_url = base_url.rstrip("/")
    url = provider.create_session(
        line_items=class_line_items(),
        mode="payment",
        # Stripe substitutes {CHECKOUT_SESSION_ID} itself.
        success_url=f"{base_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{base_url}/",
    )
    logger.info("Checkout session created")
    return url
