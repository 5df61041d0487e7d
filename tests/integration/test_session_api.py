from meetup.db import models

SIGNUP = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "username": "adalove",
    "password": "engine42",
}


def test_signup_sets_cookie_and_restores_session(client):
    r = client.post("/api/users", json=SIGNUP)
    assert r.status_code == 201
    user = r.json()["user"]
    assert user["firstName"] == "Ada"
    assert user["email"] == "ada@example.com"
    assert "hashedPassword" not in user and "hashed_password" not in user
    assert "token" in r.cookies

    r = client.get("/api/session")
    assert r.status_code == 200
    assert r.json()["user"]["username"] == "adalove"


def test_signup_duplicate_user(client, user_factory):
    user_factory("adalove", email="ada@example.com")
    r = client.post("/api/users", json=SIGNUP)
    assert r.status_code == 403
    body = r.json()
    assert body["message"] == "User already exists"
    assert body["statusCode"] == 403
    assert body["errors"] == {
        "email": "User with that email already exists",
        "username": "User with that username already exists",
    }


def test_signup_validation_error(client):
    r = client.post("/api/users", json={**SIGNUP, "email": "nope", "password": "123"})
    assert r.status_code == 400
    body = r.json()
    assert body["message"] == "Validation error"
    assert body["errors"] == {"email": "Invalid email", "password": "Password must be 6 characters or more"}


def test_login_with_username_or_email(client, user_factory):
    user_factory("grace", email="grace@example.com")
    r = client.post("/api/session", json={"credential": "grace", "password": "password"})
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "grace@example.com"

    r = client.post("/api/session", json={"credential": "GRACE@example.com", "password": "password"})
    assert r.status_code == 200
    assert r.json()["user"]["username"] == "grace"


def test_login_failures(client, user_factory):
    user_factory("grace")
    r = client.post("/api/session", json={"credential": "grace", "password": "wrong-password"})
    assert r.status_code == 401
    assert r.json() == {"message": "Invalid credentials", "statusCode": 401}

    r = client.post("/api/session", json={})
    assert r.status_code == 400
    assert set(r.json()["errors"]) == {"credential", "password"}


def test_logout_clears_session(client, user_factory):
    user_factory("grace")
    client.post("/api/session", json={"credential": "grace", "password": "password"})
    assert client.get("/api/session").json()["user"] is not None

    r = client.delete("/api/session")
    assert r.status_code == 200
    assert r.json() == {"message": "success"}
    assert client.get("/api/session").json() == {"user": None}


def test_invalid_cookie_is_cleared(client):
    client.cookies.set("token", "not-a-jwt")
    r = client.get("/api/session")
    assert r.json() == {"user": None}
    assert "token=" in r.headers.get("set-cookie", "")


def test_token_for_deleted_user_is_anonymous(client, db_session, user_factory, auth_headers):
    user = user_factory("ghost")
    headers = auth_headers(user)
    db_session.query(models.User).filter(models.User.id == user.id).delete()
    db_session.commit()
    r = client.get("/api/session", headers=headers)
    assert r.json() == {"user": None}


def test_bearer_token_authenticates(client, user_factory, auth_headers):
    user = user_factory("bearer")
    r = client.get("/api/session", headers=auth_headers(user))
    assert r.json()["user"]["id"] == user.id


def test_health_and_malformed_json(client):
    assert client.get("/health").json() == {"status": "ok"}
    r = client.post("/api/session", content="{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["message"] == "Validation error"
