import pytest


@pytest.fixture
def csrf_enabled(monkeypatch):
    monkeypatch.setenv("CSRF_PROTECTION", "true")


def test_unsafe_request_without_token_is_rejected(client, csrf_enabled):
    r = client.post("/api/session", json={"credential": "x", "password": "y"})
    assert r.status_code == 403
    assert r.json() == {"message": "Invalid CSRF token", "statusCode": 403}


def test_restored_token_allows_request(client, csrf_enabled, user_factory):
    user_factory("grace")
    r = client.get("/api/csrf/restore")
    assert r.status_code == 200
    token = r.json()["XSRF-Token"]
    assert r.cookies.get("XSRF-TOKEN") == token

    r = client.post(
        "/api/session",
        json={"credential": "grace", "password": "password"},
        headers={"XSRF-Token": token},
    )
    assert r.status_code == 200


def test_mismatched_header_is_rejected(client, csrf_enabled):
    client.get("/api/csrf/restore")
    r = client.delete("/api/session", headers={"XSRF-Token": "forged"})
    assert r.status_code == 403


def test_safe_methods_and_bearer_requests_are_exempt(client, csrf_enabled, user_factory, auth_headers):
    assert client.get("/api/groups").status_code == 200
    user = user_factory("bearer")
    r = client.post("/api/groups/999/membership", headers=auth_headers(user))
    assert r.status_code == 404


def test_non_ascii_token_is_rejected(client, csrf_enabled):
    client.get("/api/csrf/restore")
    r = client.delete("/api/session", headers={"XSRF-Token": "été".encode("latin-1")})
    assert r.status_code == 403
    assert r.json() == {"message": "Invalid CSRF token", "statusCode": 403}
