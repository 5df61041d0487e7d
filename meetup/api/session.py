"""
Session, signup and CSRF endpoints.

Login sets the ``token`` cookie; logout clears it. ``/csrf/restore`` hands
out the double-submit CSRF token used by browser clients.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from meetup.api.auth import CSRF_COOKIE, clear_token_cookie, set_token_cookie
from meetup.api.deps import get_current_user
from meetup.api.errors import ValidationFailed
from meetup.api.validation import validate_login, validate_signup
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import users as user_repo
from meetup.utils.runtime import is_production
from meetup.utils.token_crypto import generate_csrf_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["session"])


@router.get("/session")
def get_session(user: Optional[models.User] = Depends(get_current_user)):
    return {"user": user.to_safe_dict() if user else None}


@router.post("/session")
def login(
    response: Response,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
):
    credentials = validate_login(payload)
    user = user_repo.authenticate(db, credentials.credential, credentials.password)
    if user is None:
        logger.info("login_failed: credential=%s", credentials.credential)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    set_token_cookie(response, user)
    logger.info("login: user_id=%s", user.id)
    return {"user": user.to_safe_dict()}


@router.delete("/session")
def logout(response: Response):
    clear_token_cookie(response)
    return {"message": "success"}


@router.post("/users", status_code=status.HTTP_201_CREATED)
def signup(
    response: Response,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
):
    user_in = validate_signup(payload)
    errors = {}
    if user_repo.get_user_by_email(db, user_in.email):
        errors["email"] = "User with that email already exists"
    if user_repo.get_user_by_username(db, user_in.username):
        errors["username"] = "User with that username already exists"
    if errors:
        raise ValidationFailed(errors, message="User already exists", status_code=status.HTTP_403_FORBIDDEN)
    user = user_repo.create_user(db, user_in)
    set_token_cookie(response, user)
    logger.info("signup: user_id=%s username=%s", user.id, user.username)
    return {"user": user.to_safe_dict()}


@router.get("/csrf/restore")
def restore_csrf(response: Response):
    token = generate_csrf_token()
    secure = is_production()
    # Readable by browser scripts so they can echo it back in the header
    response.set_cookie(CSRF_COOKIE, token, httponly=False, secure=secure, samesite="lax" if secure else None)
    return {"XSRF-Token": token}
