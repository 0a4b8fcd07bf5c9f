"""
Tarifs de renouvellement par catégorie de permis (pur: pas de DB, pas de session).
Montants en unités mineures (pence).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class PermitType(str, Enum):
    LOCAL_SENIOR = "Local Senior"
    LOCAL_ADULT = "Local Adult"
    VISITING_ADULT = "Visiting Adult"
    VISITING_SENIOR = "Visiting Senior"


PERMIT_PRICES: Dict[PermitType, int] = {
    PermitType.LOCAL_SENIOR: 2000,
    PermitType.LOCAL_ADULT: 4000,
    PermitType.VISITING_ADULT: 10000,
    PermitType.VISITING_SENIOR: 5000,
}

# Catégorie inconnue: pas de frais, pas de paiement proposé
UNKNOWN_PERMIT_PRICE = 0


@dataclass(frozen=True)
class RenewalQuote:
    fee: int
    payable: bool


def parse_permit_type(value: Optional[str]) -> Optional[PermitType]:
    try:
        return PermitType(value)
    except ValueError:
        return None


def resolve_price(permit_type: Optional[str]) -> int:
    """
    Retourne le tarif (unités mineures) d'une catégorie.
    - Total: toute valeur non reconnue (y compris vide/None) vaut UNKNOWN_PERMIT_PRICE.
    """
    category = parse_permit_type(permit_type)
    if category is None:
        return UNKNOWN_PERMIT_PRICE
    return PERMIT_PRICES[category]


def is_payable(fee: int) -> bool:
    return fee > 0


def quote(permit_type: Optional[str]) -> RenewalQuote:
    fee = resolve_price(permit_type)
    return RenewalQuote(fee=fee, payable=is_payable(fee))


def format_major_units(fee: int) -> str:
    """Formate un montant en unités majeures avec deux décimales (ex: 10000 -> "100.00")."""
    return f"{fee // 100}.{fee % 100:02d}"
