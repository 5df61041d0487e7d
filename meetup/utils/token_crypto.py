"""
Password hashing and session token utilities.

Responsibilities:
- Hash passwords with Argon2id and verify them in constant time
- Sign session JWTs (HS256) carrying the user's public identity
- Decode and validate session JWTs, returning None on any failure
- Generate CSRF tokens for the double-submit cookie check
"""
from __future__ import annotations

import secrets
import time
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from meetup.utils.runtime import jwt_expires_in, jwt_secret

JWT_ALGORITHM = "HS256"

_argon2 = PasswordHasher(time_cost=2, memory_cost=19456, parallelism=1, hash_len=32, type=Type.ID)


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _argon2.hash(password)


def verify_password(password: str, encoded_hash: str) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _argon2.verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def create_access_token(user_data: Dict[str, Any], *, expires_in: Optional[int] = None) -> str:
    """Return a signed JWT whose ``data`` claim holds the user's safe fields."""
    now = int(time.time())
    lifetime = expires_in if expires_in is not None else jwt_expires_in()
    payload = {"data": user_data, "iat": now, "exp": now + lifetime}
    return jwt.encode(payload, jwt_secret(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the ``data`` claim of a valid token, or None.

    Expired, tampered and malformed tokens all yield None; callers treat
    the request as anonymous.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            jwt_secret(),
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.InvalidTokenError:
        return None
    data = payload.get("data")
    if not isinstance(data, dict) or "id" not in data:
        return None
    return data


def generate_csrf_token() -> str:
    return secrets.token_urlsafe(32)
