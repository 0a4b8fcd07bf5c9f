from permits import config


def test_members_requires_login_json(client):
    r = client.get("/members")
    assert r.status_code == 401
    assert r.json() == {"error": "Please log in to continue."}


def test_members_requires_login_html_redirect(client):
    r = client.get("/members", headers={"Accept": "text/html"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"].startswith("/login?message=")


def test_members_shows_price_and_renewed_count(client, make_user, login):
    make_user(permit_type="Local Senior")
    make_user(email="other@example.com", renewed=True)
    r = login()

    assert r.status_code == 200
    assert r.url.path == "/members"
    assert 'id="renewal-price">20.00<' in r.text
    assert 'id="renewed-count">1<' in r.text
    assert 'id="permit-type">Local Senior<' in r.text
    assert r.headers["cache-control"].startswith("no-store")


def test_members_user_deleted_since_login(client, store, make_user, login, monkeypatch):
    make_user()
    login()
    monkeypatch.setattr(store, "find_by_email", lambda email: None)

    r = client.get("/members")
    assert r.status_code == 404
    assert r.json() == {"error": "User not found."}


def test_checkout_without_members_visit(client, make_user):
    make_user()
    # Connexion sans suivre la redirection: aucun prix mémorisé
    client.post("/login", data={"email": "jane@example.com", "password": "Secret123!"}, follow_redirects=False)

    r = client.get("/checkout")
    assert r.status_code == 400
    assert r.json() == {"error": "Error: Renewal price not available."}


def test_checkout_after_members_visit(client, make_user, login):
    make_user(permit_type="Visiting Senior")
    login()

    r = client.get("/checkout")
    assert r.status_code == 200
    assert 'id="checkout-price">50.00<' in r.text
    assert 'data-amount="5000"' in r.text
    assert 'id="payButton"' in r.text
    assert r.headers["cache-control"].startswith("no-store")


def test_checkout_unknown_permit_type_has_no_pay_button(client, make_user, login):
    make_user(permit_type="Tourist")
    login()

    r = client.get("/checkout")
    assert r.status_code == 200
    assert 'id="checkout-price">0.00<' in r.text
    assert 'id="payButton"' not in r.text


def test_checkout_requires_login(client):
    assert client.get("/checkout").status_code == 401


def test_new_login_forgets_previous_price(client, make_user, login):
    make_user()
    make_user(email="second@example.com", permit_type="Visiting Adult")
    login()
    assert client.get("/checkout").status_code == 200

    client.post("/login", data={"email": "second@example.com", "password": "Secret123!"}, follow_redirects=False)
    assert client.get("/checkout").status_code == 400


def test_checkout_loads_stripe_js_with_publishable_key(client, make_user, login, monkeypatch):
    monkeypatch.setattr(config, "STRIPE_PUBLIC_KEY", "pk_test_123")
    make_user()
    login()

    r = client.get("/checkout")
    assert r.status_code == 200
    assert 'src="https://js.stripe.com/v3/"' in r.text
    assert 'data-stripe-key="pk_test_123"' in r.text


def test_checkout_without_publishable_key_skips_stripe_js(client, make_user, login, monkeypatch):
    monkeypatch.setattr(config, "STRIPE_PUBLIC_KEY", "")
    make_user()
    login()

    r = client.get("/checkout")
    assert "js.stripe.com" not in r.text
    assert 'data-stripe-key=""' in r.text
