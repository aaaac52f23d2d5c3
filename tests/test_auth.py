def test_health_is_public(secured_client):
    resp = secured_client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["time"] > 0


def test_missing_key_is_unauthorized(secured_client):
    resp = secured_client.get("/bundles/abc/files")
    assert resp.status_code == 401
    assert resp.json() == {"ok": False, "error": "Missing API key"}


def test_wrong_key_is_forbidden(secured_client):
    for headers in ({"x-api-key": "wrong"}, {"Authorization": "Bearer wrong"}):
        resp = secured_client.post("/bundles", json={}, headers=headers)
        assert resp.status_code == 403
        assert resp.json() == {"ok": False, "error": "Invalid API key"}


def test_correct_key_via_either_header(secured_client, api_key):
    for headers in (
        {"x-api-key": api_key},
        {"Authorization": f"Bearer {api_key}"},
        {"Authorization": api_key},
    ):
        resp = secured_client.post("/bundles", json={}, headers=headers)
        assert resp.status_code == 200, resp.text


def test_x_api_key_takes_precedence(secured_client, api_key):
    resp = secured_client.get(
        "/bundles/abc/files",
        headers={"x-api-key": "wrong", "Authorization": f"Bearer {api_key}"},
    )
    assert resp.status_code == 403


def test_no_key_configured_lets_everything_through(client):
    resp = client.post("/bundles", json={}, headers={"x-api-key": "anything"})
    assert resp.status_code == 200
