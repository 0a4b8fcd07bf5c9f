"""
Adaptateur Stripe: centralise la création des sessions Checkout et la classification des erreurs.
"""
from typing import Any, Dict, Optional
import logging

import stripe

from permits import config
from .errors import (
    CardError,
    GatewayError,
    GatewayNotConfiguredError,
    InvalidRequestError,
    ProviderAPIError,
    UnknownGatewayError,
)
from .models import CheckoutSessionHandle, PaymentIntentRequest

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Permit Renewal"


def classify_error(exc: Exception) -> GatewayError:
    """Traduit une exception du SDK Stripe en variante GatewayError."""
    if isinstance(exc, stripe.CardError):
        return CardError(str(exc))
    if isinstance(exc, stripe.InvalidRequestError):
        return InvalidRequestError(str(exc))
    if isinstance(exc, (stripe.APIError, stripe.APIConnectionError)):
        return ProviderAPIError(str(exc))
    return UnknownGatewayError(str(exc))


class StripeGateway:
    """
    Client Checkout construit explicitement (clé, URL de base, devise) puis injecté dans l'application.
    - Aucun retry: chaque appel crée une nouvelle session côté Stripe.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        currency: str = "gbp",
        api_version: Optional[str] = None,
        success_path: str = "/payment-success",
        cancel_path: str = "/payment-cancelled",
    ):
        self.api_key = api_key
        self.base_url = (base_url or "").rstrip("/")
        self.currency = currency
        self.api_version = api_version or None
        self.success_path = success_path
        self.cancel_path = cancel_path

    @classmethod
    def from_config(cls) -> "StripeGateway":
        return cls(
            api_key=config.STRIPE_SECRET_KEY,
            base_url=config.BASE_URL,
            currency=config.PAYMENT_CURRENCY,
            api_version=config.STRIPE_API_VERSION,
            success_path=config.CHECKOUT_SUCCESS_PATH,
            cancel_path=config.CHECKOUT_CANCEL_PATH,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.base_url)

    def session_params(self, intent: PaymentIntentRequest) -> Dict[str, Any]:
        """
        Paramètres de stripe.checkout.Session.create pour une ligne unique (quantité 1).
        success_url embarque {CHECKOUT_SESSION_ID}, remplacé par Stripe lors de la redirection.
        """
        sep = "&" if "?" in self.success_path else "?"
        return {
            "payment_method_types": ["card"],
            "line_items": [
                {
                    "price_data": {
                        "currency": self.currency,
                        "product_data": {
                            "name": PRODUCT_NAME,
                            "description": intent.description,
                        },
                        "unit_amount": intent.amount,
                    },
                    "quantity": 1,
                }
            ],
            "customer_email": intent.email,
            "mode": "payment",
            "success_url": f"{self.base_url}{self.success_path}{sep}session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{self.base_url}{self.cancel_path}",
        }

    def create_session(self, intent: PaymentIntentRequest) -> CheckoutSessionHandle:
        """
        Crée une session Stripe Checkout.
        Retour: CheckoutSessionHandle(id, url)
        Erreurs: GatewayNotConfiguredError, CardError, InvalidRequestError, ProviderAPIError, UnknownGatewayError
        """
        if not self.is_configured:
            logger.error("payments.stripe_client missing STRIPE_SECRET_KEY or BASE_URL")
            raise GatewayNotConfiguredError("STRIPE_SECRET_KEY or BASE_URL missing")

        options: Dict[str, Any] = {"api_key": self.api_key}
        if self.api_version:
            options["stripe_version"] = self.api_version
        try:
            session = stripe.checkout.Session.create(**self.session_params(intent), **options)
        except Exception as e:
            error = classify_error(e)
            logger.exception("payments.stripe_client.create_session failed kind=%s", type(error).__name__)
            raise error from e
        logger.info("payments.stripe_client.create_session id=%s amount=%s", session.id, intent.amount)
        return CheckoutSessionHandle(id=session.id, url=getattr(session, "url", None))
