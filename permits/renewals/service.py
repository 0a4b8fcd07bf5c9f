"""
Cas d'usage 'renouvellement': orchestre la tarification, l'état de session, le magasin d'utilisateurs
et la passerelle de paiement. Les dépendances (store, gateway) sont injectées à la construction.
"""
from dataclasses import dataclass
from typing import Any, Optional, Protocol
import logging
import re

from markupsafe import Markup

from permits.payments.errors import GatewayNotConfiguredError
from permits.payments.models import CheckoutSessionHandle, PaymentIntentRequest
from permits.utils.sanitize import sanitize_fields
from permits.utils.validators import is_valid_email
from . import pricing
from .session import SessionState

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"^[0-9]+$")


class RenewalError(Exception):
    pass


class UserNotFoundError(RenewalError):
    pass


class MissingPriceError(RenewalError):
    pass


class ValidationError(RenewalError):
    pass


class InvalidAmountError(ValidationError):
    pass


class InvalidEmailError(ValidationError):
    pass


class CredentialStore(Protocol):
    def find_by_email(self, email: str) -> Any: ...
    def count_renewed(self) -> int: ...


class PaymentGateway(Protocol):
    def create_session(self, intent: PaymentIntentRequest) -> CheckoutSessionHandle: ...


@dataclass(frozen=True)
class MembersView:
    first_name: Markup
    last_name: Markup
    email: Markup
    permit_type: Markup
    fee: int
    renewal_price: Markup
    payable: bool
    renewed_count: Markup


@dataclass(frozen=True)
class CheckoutView:
    first_name: Markup
    last_name: Markup
    email: Markup
    permit_type: Markup
    amount: int
    renewal_price: Markup
    payable: bool
    renewed_count: Markup


def parse_amount(raw_amount: Any) -> int:
    """
    Convertit le montant reçu (unités mineures) en entier strictement positif.
    - Accepte un int ou une chaîne de chiffres; refuse bool, float, vide, négatif, zéro.
    """
    if isinstance(raw_amount, bool):
        raise InvalidAmountError("amount must be an integer")
    if isinstance(raw_amount, int):
        amount = raw_amount
    elif isinstance(raw_amount, str) and _DIGITS.match(raw_amount.strip()):
        amount = int(raw_amount.strip())
    else:
        raise InvalidAmountError("amount must be an integer")
    if amount <= 0:
        raise InvalidAmountError("amount must be positive")
    return amount


def build_payment_intent(raw_amount: Any, raw_email: Any, first_name: Any, last_name: Any) -> PaymentIntentRequest:
    """
    Valide la demande de paiement et construit la requête vers la passerelle (aucun appel réseau).
    - InvalidAmountError si le montant n'est pas un entier > 0
    - InvalidEmailError si l'email n'a pas la forme local@domaine.tld
    """
    amount = parse_amount(raw_amount)
    email = raw_email if isinstance(raw_email, str) else ""
    if not is_valid_email(email):
        raise InvalidEmailError("invalid email address")
    description = f"{first_name or ''} {last_name or ''} Permit Renewal"
    return PaymentIntentRequest(amount=amount, email=email, description=description)


class RenewalWorkflow:
    def __init__(self, store: CredentialStore, gateway: Optional[PaymentGateway] = None):
        self.store = store
        self.gateway = gateway

    def enter_members_area(self, session: SessionState) -> MembersView:
        """
        Prépare la page membres d'un utilisateur authentifié.
        - Relit permit_type depuis la base (pas depuis la session)
        - Mémorise le prix en session (seul chemin d'écriture du prix)
        - Soulève UserNotFoundError si la ligne a disparu depuis la connexion
        """
        identity = session.identity
        if identity is None:
            raise UserNotFoundError("no authenticated identity in session")
        user = self.store.find_by_email(identity.email)
        if user is None:
            logger.warning("renewals.enter_members_area user vanished email=%s", identity.email)
            raise UserNotFoundError(identity.email)

        q = pricing.quote(user.permit_type)
        session.record_price(user.permit_type, q.fee)
        renewed_count = self.store.count_renewed()

        fields = sanitize_fields({
            "first_name": user.first_name,
            "last_name": user.last_name,
            "email": user.email,
            "permit_type": user.permit_type,
            "fee": q.fee,
            "renewal_price": pricing.format_major_units(q.fee),
            "payable": q.payable,
            "renewed_count": str(renewed_count),
        })
        return MembersView(**fields)

    def prepare_checkout(self, session: SessionState) -> CheckoutView:
        """
        Prépare le modèle de vue du checkout.
        - Exige un prix calculé par enter_members_area dans la même session (sinon MissingPriceError)
        """
        fee = session.renewal_price
        identity = session.identity
        if fee is None or identity is None:
            raise MissingPriceError("renewal price not available in session")

        fields = sanitize_fields({
            "first_name": identity.first_name,
            "last_name": identity.last_name,
            "email": identity.email,
            "permit_type": identity.permit_type,
            "amount": fee,
            "renewal_price": pricing.format_major_units(fee),
            "payable": pricing.is_payable(fee),
            "renewed_count": str(self.store.count_renewed()),
        })
        return CheckoutView(**fields)

    def build_payment_intent(
        self,
        session: SessionState,
        raw_amount: Any,
        raw_email: Any,
        first_name: Any,
        last_name: Any,
    ) -> PaymentIntentRequest:
        """
        Valide la demande puis la recoupe avec le prix mémorisé en session.
        - MissingPriceError si /members n'a pas été visité dans cette session
        - InvalidAmountError si le montant diffère du prix mémorisé
        """
        intent = build_payment_intent(raw_amount, raw_email, first_name, last_name)
        expected = session.renewal_price
        if expected is None:
            raise MissingPriceError("renewal price not available in session")
        if intent.amount != expected:
            logger.warning("renewals.build_payment_intent amount mismatch amount=%s expected=%s", intent.amount, expected)
            raise InvalidAmountError("amount does not match the renewal price")
        return intent

    def create_payment_session(self, intent: PaymentIntentRequest) -> str:
        """Délègue à la passerelle et ne retourne que l'identifiant de session (rien d'autre n'est relayé)."""
        if self.gateway is None:
            raise GatewayNotConfiguredError("no payment gateway configured")
        handle = self.gateway.create_session(intent)
        return handle.id
