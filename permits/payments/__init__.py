"""
Module 'payments': point d'entrée public.
Réunit le client Stripe (passerelle Checkout), la requête de paiement et les erreurs classifiées.
"""

from .errors import (
    GatewayError,
    CardError,
    InvalidRequestError,
    ProviderAPIError,
    UnknownGatewayError,
    GatewayNotConfiguredError,
)
from .models import PaymentIntentRequest, CheckoutSessionHandle
from .stripe_client import StripeGateway, classify_error

__all__ = [
    # errors
    "GatewayError",
    "CardError",
    "InvalidRequestError",
    "ProviderAPIError",
    "UnknownGatewayError",
    "GatewayNotConfiguredError",
    # models
    "PaymentIntentRequest",
    "CheckoutSessionHandle",
    # stripe
    "StripeGateway",
    "classify_error",
]
