"""
Session cookie handling.

The session is a signed JWT stored in the ``token`` cookie. Requests may
instead present the same JWT as ``Authorization: Bearer <token>``.
"""
import logging
from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import users as user_repo
from meetup.utils.runtime import is_production, jwt_expires_in
from meetup.utils.token_crypto import create_access_token, decode_access_token

logger = logging.getLogger(__name__)

TOKEN_COOKIE = "token"
CSRF_COOKIE = "XSRF-TOKEN"
CSRF_HEADER = "XSRF-Token"


def session_claims(user: models.User) -> dict:
    return {"id": user.id, "email": user.email, "username": user.username}


def set_token_cookie(response: Response, user: models.User) -> str:
    """Sign a session token for ``user`` and attach it as the ``token`` cookie."""
    expires_in = jwt_expires_in()
    token = create_access_token(session_claims(user), expires_in=expires_in)
    secure = is_production()
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=expires_in,
        httponly=True,
        secure=secure,
        samesite="lax" if secure else None,
    )
    return token


def clear_token_cookie(response: Response) -> None:
    response.delete_cookie(TOKEN_COOKIE)


def extract_bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization") or ""
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def restore_user(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> Optional[models.User]:
    """Return the user behind the session token, or None for anonymous requests.

    A token that fails to verify, or that names a user who no longer exists,
    is treated as no session at all and the cookie is cleared.
    """
    bearer = extract_bearer_token(request)
    token = bearer or request.cookies.get(TOKEN_COOKIE)
    if not token:
        return None
    claims = decode_access_token(token)
    user = user_repo.get_user(db, claims["id"]) if claims else None
    if user is None:
        logger.info("session_restore_failed: source=%s", "bearer" if bearer else "cookie")
        if not bearer:
            clear_token_cookie(response)
        return None
    return user
