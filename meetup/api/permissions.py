"""
Permission checks for group resources.

Key helpers:
- resolve_group_role(db, group, user_id)
- require_organizer / require_host / require_member(db, group, user)
- can_remove_membership(role, actor_id, member_id)
- can_remove_attendance(role, actor_id, attendee_id)
- can_add_event_image(db, event, user)

Each ``require_*`` helper returns the caller's role and raises 403 when the
role is insufficient. Callers must have already resolved authentication
and resource existence.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from meetup.api.errors import forbidden
from meetup.db import models
from meetup.db.repositories import attendances as attendance_repo
from meetup.db.repositories import memberships as membership_repo
from meetup.utils.role_permissions import (
    ROLE_CO_HOST,
    ROLE_MEMBER,
    ROLE_ORGANIZER,
    role_allows_host,
    role_allows_manage,
    role_at_least,
)
from meetup.utils.statuses import ATTENDANCE_ATTENDING

logger = logging.getLogger(__name__)


def resolve_group_role(db: Session, group: models.Group, user_id: Optional[int]) -> Optional[str]:
    """Return the caller's role in ``group``.

    The organizer is derived from ``group.organizer_id``; every other role is
    the caller's membership status. Returns None for non-members.
    """
    if user_id is None:
        return None
    if group.organizer_id == user_id:
        return ROLE_ORGANIZER
    membership = membership_repo.get_membership(db, group.id, user_id)
    return membership.status if membership else None


def _deny(group: models.Group, user: models.User, role: Optional[str], needed: str):
    logger.warning("permission_denied: user_id=%s group_id=%s role=%s needed=%s", user.id, group.id, role, needed)
    return forbidden()


def require_organizer(db: Session, group: models.Group, user: models.User) -> str:
    role = resolve_group_role(db, group, user.id)
    if not role_allows_manage(role):
        raise _deny(group, user, role, ROLE_ORGANIZER)
    return role


def require_host(db: Session, group: models.Group, user: models.User) -> str:
    role = resolve_group_role(db, group, user.id)
    if not role_allows_host(role):
        raise _deny(group, user, role, ROLE_CO_HOST)
    return role


def require_member(db: Session, group: models.Group, user: models.User) -> str:
    role = resolve_group_role(db, group, user.id)
    if not role_at_least(role, ROLE_MEMBER):
        raise _deny(group, user, role, ROLE_MEMBER)
    return role


def can_remove_membership(role: Optional[str], actor_id: int, member_id: int) -> bool:
    """Hosts may remove anyone's membership; members may remove their own."""
    return role_allows_host(role) or actor_id == member_id


def can_remove_attendance(role: Optional[str], actor_id: int, attendee_id: int) -> bool:
    """Only the organizer or the attendee themself may remove an attendance."""
    return role_allows_manage(role) or actor_id == attendee_id


def can_add_event_image(db: Session, event: models.Event, user: models.User) -> bool:
    role = resolve_group_role(db, event.group, user.id)
    if role_allows_host(role):
        return True
    attendance = attendance_repo.get_attendance(db, event.id, user.id)
    return attendance is not None and attendance.status == ATTENDANCE_ATTENDING
