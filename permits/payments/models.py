from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PaymentIntentRequest:
    """Demande de session de paiement validée (transitoire, jamais persistée)."""
    amount: int
    email: str
    description: str


@dataclass(frozen=True)
class CheckoutSessionHandle:
    id: str
    url: Optional[str] = None
