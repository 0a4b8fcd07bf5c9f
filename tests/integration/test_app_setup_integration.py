import pytest

from permits import config
from permits.app import create_app


def test_home_page(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "/register" in r.text


def test_security_headers(client):
    r = client.get("/")
    assert r.headers["x-frame-options"] == "DENY"
    assert r.headers["x-content-type-options"] == "nosniff"
    csp = r.headers["content-security-policy"]
    assert "default-src 'self'" in csp
    assert "https://js.stripe.com" in csp


def test_static_files_are_served(client):
    r = client.get("/static/js/checkout.js")
    assert r.status_code == 200
    assert "create-stripe-payment" in r.text
    # Redirection uniquement via Stripe.js, jamais par une URL construite à la main
    assert "redirectToCheckout" in r.text
    assert "checkout.stripe.com" not in r.text


def test_health_endpoints(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/health/db").json() == {"connect_ok": True}
    assert client.get("/health/rate-limit").json()["enabled"] is False


def test_health_db_down(client, store, monkeypatch):
    def boom():
        raise RuntimeError("locked")

    monkeypatch.setattr(store, "ping", boom)
    r = client.get("/health/db")
    assert r.status_code == 503
    assert r.json() == {"connect_ok": False}


def test_unknown_host_is_rejected(client):
    r = client.get("/", headers={"Host": "evil.example.com"})
    assert r.status_code == 400


def test_create_app_refuses_missing_settings(monkeypatch):
    monkeypatch.setattr(config, "DB_PATH", "")
    monkeypatch.setattr(config, "SESSION_SECRET", "")
    with pytest.raises(RuntimeError) as info:
        create_app()
    assert "DB_PATH" in str(info.value)
    assert "SESSION_SECRET" in str(info.value)
