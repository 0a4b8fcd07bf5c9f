import os
from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

# Avant tout import de permits: pas de Redis ni de .env réel pendant les tests
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")
os.environ.setdefault("SESSION_SECRET", "test-secret")

from permits.app import create_app
from permits.auth import service as auth_service
from permits.auth.passwords import hash_password
from permits.payments.models import CheckoutSessionHandle, PaymentIntentRequest
from permits.sessions.repository import SessionStore
from permits.users.repository import UserStore

TEST_PASSWORD = "Secret123!"


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)


class FakeGateway:
    """Passerelle de paiement en mémoire: enregistre les demandes, lève l'erreur configurée."""

    def __init__(self, session_id: str = "cs_test_123", error: Optional[Exception] = None):
        self.session_id = session_id
        self.error = error
        self.calls: List[PaymentIntentRequest] = []

    def create_session(self, intent: PaymentIntentRequest) -> CheckoutSessionHandle:
        self.calls.append(intent)
        if self.error is not None:
            raise self.error
        return CheckoutSessionHandle(id=self.session_id, url=f"https://checkout.stripe.com/pay/{self.session_id}")



class MemorySessions:
    """Stockage de sessions en mémoire (mêmes méthodes que SessionStore)."""

    def __init__(self):
        self.records = {}
        self._n = 0

    def new_id(self) -> str:
        self._n += 1
        return f"sid-{self._n}"

    def load(self, sid):
        data = self.records.get(sid)
        return dict(data) if data is not None else None

    def save(self, sid, data) -> None:
        self.records[sid] = dict(data)

    def delete(self, sid) -> bool:
        return self.records.pop(sid, None) is not None


# bcrypt à coût réduit: les tests n'ont pas besoin de 2^12 itérations
@pytest.fixture(autouse=True)
def _fast_bcrypt(monkeypatch):
    monkeypatch.setattr(auth_service, "hash_password", lambda password: hash_password(password, rounds=4))


@pytest.fixture()
def memory_sessions() -> MemorySessions:
    return MemorySessions()


@pytest.fixture()
def store(tmp_path) -> Generator[UserStore, None, None]:
    s = UserStore(f"sqlite:///{tmp_path / 'permits-test.db'}")
    s.init_schema()
    yield s
    s.dispose()


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def sessions(store) -> SessionStore:
    s = SessionStore(store.engine)
    s.init_schema()
    return s


@pytest.fixture()
def app(store, gateway, sessions):
    return create_app(store=store, gateway=gateway, session_secret="test-secret", sessions=sessions)


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_user(store):
    """Insère un utilisateur directement en base (mot de passe haché) et retourne son email."""

    def _make(
        email: str = "jane@example.com",
        permit_type: str = "Local Adult",
        first_name: str = "Jane",
        last_name: str = "Doe",
        password: str = TEST_PASSWORD,
        renewed: bool = False,
    ) -> str:
        store.insert(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password, rounds=4),
            permit_type=permit_type,
        )
        if renewed:
            store.set_renewed(email)
        return email

    return _make


@pytest.fixture()
def login(client):
    """Connecte le client de test via le formulaire /login (suit la redirection vers /members)."""

    def _login(email: str = "jane@example.com", password: str = TEST_PASSWORD):
        return client.post("/login", data={"email": email, "password": password})

    return _login
