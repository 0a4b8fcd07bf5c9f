"""
État de session typé, stocké côté serveur (table sessions).
- Le cookie signé de SessionMiddleware ne contient que l'identifiant opaque (clé "sid").
- L'identité n'est posée que par sign_in (après vérification du mot de passe), qui
  supprime l'ancienne session et en crée une nouvelle (nouvel identifiant).
- Le prix de renouvellement n'est posé que par record_price, appelé par le workflow
  lors de l'affichage de la page membres.
- clear supprime l'enregistrement serveur: un cookie copié avant la déconnexion ne vaut plus rien.
"""
from dataclasses import dataclass
from typing import Any, Dict, MutableMapping, Optional, Protocol

SID_KEY = "sid"

EMAIL_KEY = "email"
FIRST_NAME_KEY = "first_name"
LAST_NAME_KEY = "last_name"
PERMIT_TYPE_KEY = "permit_type"
RENEWAL_PRICE_KEY = "renewal_price"


class SessionBackend(Protocol):
    def new_id(self) -> str: ...
    def load(self, sid: str) -> Optional[Dict[str, Any]]: ...
    def save(self, sid: str, data: Dict[str, Any]) -> None: ...
    def delete(self, sid: str) -> bool: ...


@dataclass(frozen=True)
class Identity:
    email: str
    first_name: str
    last_name: str
    permit_type: str


class SessionState:
    def __init__(self, cookie: MutableMapping[str, Any], backend: SessionBackend):
        self._cookie = cookie
        self._backend = backend
        sid = cookie.get(SID_KEY)
        self._sid: Optional[str] = sid if isinstance(sid, str) and sid else None
        data = self._backend.load(self._sid) if self._sid else None
        if self._sid and data is None:
            # Identifiant inconnu, révoqué ou expiré: le cookie est oublié
            self._cookie.pop(SID_KEY, None)
            self._sid = None
        self._data: Dict[str, Any] = data or {}

    @property
    def is_authenticated(self) -> bool:
        return bool(self._data.get(EMAIL_KEY))

    @property
    def identity(self) -> Optional[Identity]:
        if not self.is_authenticated:
            return None
        return Identity(
            email=self._data[EMAIL_KEY],
            first_name=self._data.get(FIRST_NAME_KEY) or "",
            last_name=self._data.get(LAST_NAME_KEY) or "",
            permit_type=self._data.get(PERMIT_TYPE_KEY) or "",
        )

    @property
    def renewal_price(self) -> Optional[int]:
        """Prix mémorisé lors de la dernière visite de /members, None si jamais calculé."""
        value = self._data.get(RENEWAL_PRICE_KEY)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def sign_in(self, identity: Identity) -> None:
        # Rotation: l'ancienne session (et son prix éventuel) disparaît côté serveur
        if self._sid:
            self._backend.delete(self._sid)
        self._sid = self._backend.new_id()
        self._data = {
            EMAIL_KEY: identity.email,
            FIRST_NAME_KEY: identity.first_name,
            LAST_NAME_KEY: identity.last_name,
            PERMIT_TYPE_KEY: identity.permit_type,
        }
        self._backend.save(self._sid, self._data)
        self._cookie.clear()
        self._cookie[SID_KEY] = self._sid

    def record_price(self, permit_type: str, fee: int) -> None:
        self._data[PERMIT_TYPE_KEY] = permit_type
        self._data[RENEWAL_PRICE_KEY] = int(fee)
        if self._sid:
            self._backend.save(self._sid, self._data)

    def clear(self) -> None:
        if self._sid:
            self._backend.delete(self._sid)
        self._sid = None
        self._data = {}
        self._cookie.clear()
