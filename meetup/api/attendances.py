"""
Attendance API endpoints.

Group members request attendance; hosts move requests to ``attending`` or
``waitlist``. Attendees may withdraw and the organizer may remove anyone.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from meetup import audit
from meetup.api import presenters
from meetup.api.deps import get_current_user, require_auth
from meetup.api.errors import ValidationFailed, forbidden
from meetup.api.events import get_event_or_404
from meetup.api.permissions import can_remove_attendance, require_host, require_member, resolve_group_role
from meetup.api.validation import ResourceId, validate_attendance_status, validate_attendee_reference
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import attendances as attendance_repo
from meetup.db.repositories import users as user_repo
from meetup.utils.role_permissions import role_allows_host
from meetup.utils.statuses import ATTENDANCE_PENDING

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events/{eventId}", tags=["attendances"])

ATTENDANCE_NOT_FOUND = "Attendance between the user and the event does not exist"


def _get_attendee_or_400(db: Session, user_id: int) -> models.User:
    attendee = user_repo.get_user(db, user_id)
    if attendee is None:
        raise ValidationFailed({"userId": "User couldn't be found"})
    return attendee


def _get_attendance_or_404(db: Session, event_id: int, user_id: int) -> models.Attendance:
    attendance = attendance_repo.get_attendance(db, event_id, user_id)
    if attendance is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ATTENDANCE_NOT_FOUND)
    return attendance


@router.get("/attendees")
def list_attendees(
    eventId: ResourceId,
    db: Session = Depends(get_db),
    user: Optional[models.User] = Depends(get_current_user),
):
    event = get_event_or_404(db, eventId)
    role = resolve_group_role(db, event.group, user.id if user else None)
    attendances = attendance_repo.get_event_attendances(db, event.id, include_pending=role_allows_host(role))
    return {"Attendees": [presenters.attendee_dict(attendance) for attendance in attendances]}


@router.post("/attendance")
def request_attendance(
    eventId: ResourceId,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    event = get_event_or_404(db, eventId)
    require_member(db, event.group, user)
    existing = attendance_repo.get_attendance(db, event.id, user.id)
    if existing is not None:
        if existing.status == ATTENDANCE_PENDING:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Attendance has already been requested")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is already an attendee of the event")
    attendance = attendance_repo.request_attendance(db, event.id, user.id)
    logger.info("attendance_requested: event_id=%s user_id=%s", event.id, user.id)
    return {"userId": attendance.user_id, "status": attendance.status}


@router.put("/attendance")
def change_attendance_status(
    eventId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    event = get_event_or_404(db, eventId)
    require_host(db, event.group, user)
    change = validate_attendance_status(payload)
    _get_attendee_or_400(db, change.user_id)
    attendance = _get_attendance_or_404(db, event.id, change.user_id)
    previous = attendance.status
    attendance = attendance_repo.update_attendance_status(db, attendance, change.status)
    audit.log_attendance(
        db,
        actor_user_id=user.id,
        attendance=attendance,
        group_id=event.group_id,
        action=audit.AuditAction.ATTENDANCE_STATUS_CHANGE,
        metadata={"previous_status": previous},
    )
    logger.info(
        "attendance_status_changed: event_id=%s user_id=%s from=%s to=%s",
        event.id, attendance.user_id, previous, attendance.status,
    )
    return presenters.attendance_dict(attendance)


@router.delete("/attendance")
def delete_attendance(
    eventId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    event = get_event_or_404(db, eventId)
    attendee_id = validate_attendee_reference(payload)
    _get_attendee_or_400(db, attendee_id)
    attendance = _get_attendance_or_404(db, event.id, attendee_id)
    role = resolve_group_role(db, event.group, user.id)
    if not can_remove_attendance(role, user.id, attendee_id):
        logger.warning("permission_denied: user_id=%s event_id=%s remove_attendee=%s", user.id, event.id, attendee_id)
        raise forbidden("Only the User or organizer may delete an Attendance")
    attendance_id, previous = attendance.id, attendance.status
    attendance_repo.delete_attendance(db, attendance)
    audit.log(
        db,
        action=audit.AuditAction.ATTENDANCE_REMOVE,
        target_type="attendance",
        target_id=attendance_id,
        actor_user_id=user.id,
        group_id=event.group_id,
        metadata={"event_id": event.id, "user_id": attendee_id, "status": previous},
    )
    return {"message": "Successfully deleted attendance from event"}
