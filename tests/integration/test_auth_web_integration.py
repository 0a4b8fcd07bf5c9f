import base64
import json
from urllib.parse import parse_qs, urlparse

from permits.config import SESSION_COOKIE_NAME


def _message(location: str) -> str:
    return parse_qs(urlparse(location).query)["message"][0]


def test_login_and_register_pages_render(client):
    r = client.get("/login?message=Hello")
    assert r.status_code == 200
    assert "Hello" in r.text

    r = client.get("/register")
    assert r.status_code == 200
    for permit_type in ("Local Senior", "Local Adult", "Visiting Adult", "Visiting Senior"):
        assert permit_type in r.text


def test_register_redirects_to_login(client, store):
    r = client.post(
        "/register",
        data={
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane@example.com",
            "password": "Secret123!",
            "permitType": "Local Adult",
        },
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert r.headers["location"].startswith("/login?")
    assert _message(r.headers["location"]) == "Registration successful, please log in."
    assert store.find_by_email("jane@example.com") is not None


def test_register_existing_email(client, make_user):
    make_user()
    r = client.post(
        "/register",
        data={
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane@example.com",
            "password": "Secret123!",
            "permitType": "Local Adult",
        },
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert r.headers["location"].startswith("/register?")
    assert _message(r.headers["location"]) == "User already exists."


def test_login_success_redirects_to_members(client, make_user):
    make_user()
    r = client.post("/login", data={"email": "jane@example.com", "password": "Secret123!"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/members"


def test_login_failure_redirects_with_generic_message(client, make_user):
    make_user()
    for email, password in (("jane@example.com", "Wrong123!"), ("ghost@example.com", "Secret123!")):
        r = client.post("/login", data={"email": email, "password": password}, follow_redirects=False)
        assert r.status_code == 303
        assert _message(r.headers["location"]) == "Incorrect email address or password."


def test_logout_clears_session(client, make_user, login):
    make_user()
    login()
    assert client.get("/members").status_code == 200

    r = client.get("/logout", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/"
    assert client.get("/members").status_code == 401


def test_cookie_copied_before_logout_no_longer_authenticates(client, make_user, login):
    make_user()
    login()
    saved = client.cookies.get(SESSION_COOKIE_NAME)
    assert saved

    client.get("/logout")
    assert client.get("/members").status_code == 401

    client.cookies.clear()
    client.cookies.set(SESSION_COOKIE_NAME, saved)
    assert client.get("/members").status_code == 401


def test_login_rotates_session_cookie(client, make_user, login):
    make_user()
    make_user(email="second@example.com")
    login()
    first = client.cookies.get(SESSION_COOKIE_NAME)

    login(email="second@example.com")
    second = client.cookies.get(SESSION_COOKIE_NAME)
    assert second != first

    # L'ancien cookie ne désigne plus aucune session côté serveur
    client.cookies.clear()
    client.cookies.set(SESSION_COOKIE_NAME, first)
    assert client.get("/members").status_code == 401


def test_session_cookie_does_not_carry_user_data(client, make_user, login):
    make_user()
    login()
    cookie = client.cookies.get(SESSION_COOKIE_NAME)
    payload = base64.b64decode(cookie.split(".")[0])
    assert b"jane@example.com" not in payload
    assert b"renewal_price" not in payload
    assert set(json.loads(payload)) == {"sid"}
