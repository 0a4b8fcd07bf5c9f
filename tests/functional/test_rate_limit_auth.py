def test_login_is_rate_limited_with_local_fallback(client, monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")

    statuses = [
        client.post("/login", data={"email": "ghost@example.com", "password": "Wrong123!"}, follow_redirects=False).status_code
        for _ in range(6)
    ]

    assert statuses[:5] == [303] * 5
    assert statuses[5] == 429
