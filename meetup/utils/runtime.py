"""Runtime environment helpers for deployment-sensitive settings."""

import os
from typing import List

DEV_JWT_SECRET = "change-me"
DEFAULT_JWT_EXPIRES_IN = 604800  # one week


def app_env() -> str:
    return os.getenv("APP_ENV", "development").strip().lower()


def is_production() -> bool:
    """Return True when running in production; raise if misconfigured.

    Production deployments must provide their own JWT_SECRET. Signing
    session cookies with the development default would let anyone forge a
    session, so startup fails loudly instead.
    """
    if app_env() != "production":
        return False
    secret = os.getenv("JWT_SECRET", "")
    if not secret or secret == DEV_JWT_SECRET:
        raise RuntimeError("APP_ENV=production requires JWT_SECRET to be set to a non-default value")
    return True


def jwt_secret() -> str:
    return os.getenv("JWT_SECRET") or DEV_JWT_SECRET


def jwt_expires_in() -> int:
    """Token lifetime in seconds; falls back to one week on bad input."""
    raw = os.getenv("JWT_EXPIRES_IN", str(DEFAULT_JWT_EXPIRES_IN))
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_JWT_EXPIRES_IN
    return value if value > 0 else DEFAULT_JWT_EXPIRES_IN


def csrf_protection_enabled() -> bool:
    return os.getenv("CSRF_PROTECTION", "true").lower() == "true"


def cors_origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
