"""
API dependency helpers.

Provides the dependency-resolved user for routes.
"""
from typing import Optional

from fastapi import Depends

from meetup.api.auth import restore_user
from meetup.api.errors import authentication_required
from meetup.db import models

# Contract:
# get_current_user returns the User model or None for anonymous callers.
# require_auth returns the User model and raises 401 otherwise.


def get_current_user(user: Optional[models.User] = Depends(restore_user)) -> Optional[models.User]:
    return user


def require_auth(user: Optional[models.User] = Depends(restore_user)) -> models.User:
    if user is None:
        raise authentication_required()
    return user
