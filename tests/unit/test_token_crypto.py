import time

import jwt

from meetup.utils import token_crypto


def test_hash_and_verify_password():
    encoded = token_crypto.hash_password("s3cr3t-value")
    assert encoded.startswith("$argon2id$")
    assert token_crypto.verify_password("s3cr3t-value", encoded)
    assert not token_crypto.verify_password("wrong-value", encoded)


def test_verify_password_handles_garbage():
    assert not token_crypto.verify_password("anything", "not-a-hash")
    assert not token_crypto.verify_password("", "$argon2id$whatever")
    assert not token_crypto.verify_password("anything", "")


def test_access_token_carries_user_data():
    token = token_crypto.create_access_token({"id": 7, "email": "a@b.io", "username": "ann"})
    assert token_crypto.decode_access_token(token) == {"id": 7, "email": "a@b.io", "username": "ann"}


def test_expired_token_is_rejected():
    token = token_crypto.create_access_token({"id": 7}, expires_in=-10)
    assert token_crypto.decode_access_token(token) is None


def test_tampered_and_foreign_tokens_are_rejected(monkeypatch):
    token = token_crypto.create_access_token({"id": 7})
    other = token_crypto.create_access_token({"id": 8})
    header, _, signature = token.split(".")
    swapped_payload = other.split(".")[1]
    assert token_crypto.decode_access_token(f"{header}.{swapped_payload}.{signature}") is None
    assert token_crypto.decode_access_token(None) is None
    assert token_crypto.decode_access_token("") is None

    now = int(time.time())
    foreign = jwt.encode({"data": {"id": 7}, "iat": now, "exp": now + 60}, "other-secret", algorithm="HS256")
    assert token_crypto.decode_access_token(foreign) is None


def test_token_without_user_id_is_rejected():
    now = int(time.time())
    token = jwt.encode(
        {"data": {"email": "a@b.io"}, "iat": now, "exp": now + 60},
        token_crypto.jwt_secret(),
        algorithm=token_crypto.JWT_ALGORITHM,
    )
    assert token_crypto.decode_access_token(token) is None


def test_csrf_tokens_are_unique():
    assert token_crypto.generate_csrf_token() != token_crypto.generate_csrf_token()
