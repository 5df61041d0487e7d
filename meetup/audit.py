"""
Audit logging helpers and enums.

Centralized helpers to persist normalized audit records with consistent
schema; includes convenience wrappers per target type.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from meetup.db import models, schemas
from meetup.db.repositories import audits as audit_repo


class AuditAction(str, Enum):
    # Group
    GROUP_CREATE = "group_create"
    GROUP_UPDATE = "group_update"
    GROUP_DELETE = "group_delete"
    # Membership
    MEMBERSHIP_REQUEST = "membership_request"
    MEMBERSHIP_STATUS_CHANGE = "membership_status_change"
    MEMBERSHIP_REMOVE = "membership_remove"
    # Venue
    VENUE_CREATE = "venue_create"
    VENUE_UPDATE = "venue_update"
    # Event
    EVENT_CREATE = "event_create"
    EVENT_UPDATE = "event_update"
    EVENT_DELETE = "event_delete"
    # Attendance
    ATTENDANCE_STATUS_CHANGE = "attendance_status_change"
    ATTENDANCE_REMOVE = "attendance_remove"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[int] = None,
    actor_user_id: int,
    group_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> models.AuditLog:
    """Central audit logging helper.

    ``group_id`` must reference an existing group; pass None once the group
    has been deleted and keep its id in ``metadata`` instead.
    """
    # Persist plain string values, not Enum reprs
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    return audit_repo.create_audit_log(
        db,
        audit_log=audit_log,
        actor_user_id=actor_user_id,
        group_id=group_id,
    )


__all__ = ["AuditAction", "AuditStatus", "log", "log_membership", "log_attendance"]


def log_membership(
    db: Session,
    *,
    actor_user_id: int,
    membership: models.Membership,
    action: AuditAction,
    status: AuditStatus = AuditStatus.SUCCESS,
    metadata: Optional[Dict[str, Any]] = None,
):
    payload = {"member_id": membership.user_id, "status": membership.status}
    payload.update(metadata or {})
    return log(
        db,
        action=action,
        status=status,
        target_type="membership",
        target_id=membership.id,
        actor_user_id=actor_user_id,
        group_id=membership.group_id,
        metadata=payload,
    )


def log_attendance(db: Session, *, actor_user_id: int, attendance: models.Attendance, group_id: int, action: AuditAction, metadata: Optional[Dict[str, Any]] = None):
    payload = {"event_id": attendance.event_id, "user_id": attendance.user_id, "status": attendance.status}
    payload.update(metadata or {})
    return log(
        db,
        action=action,
        target_type="attendance",
        target_id=attendance.id,
        actor_user_id=actor_user_id,
        group_id=group_id,
        metadata=payload,
    )
