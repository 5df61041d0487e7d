"""
User repository functions.

Lookup by id, email, username or login credential, and signup.
"""
from __future__ import annotations

from typing import Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from meetup.db import schemas, models
from meetup.utils import token_crypto


def _normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower()


def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == _normalize_email(email)).first()


def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(func.lower(models.User.username) == username.strip().lower()).first()


def get_user_by_credential(db: Session, credential: str) -> Optional[models.User]:
    """Find a user whose email or username matches the login credential."""
    value = credential.strip().lower()
    return (
        db.query(models.User)
        .filter(or_(models.User.email == value, func.lower(models.User.username) == value))
        .first()
    )


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    db_user = models.User(
        first_name=user.first_name,
        last_name=user.last_name,
        email=_normalize_email(user.email),
        username=user.username.strip(),
        hashed_password=token_crypto.hash_password(user.password),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def authenticate(db: Session, credential: str, password: str) -> Optional[models.User]:
    user = get_user_by_credential(db, credential)
    if user and token_crypto.verify_password(password, user.hashed_password):
        return user
    return None
