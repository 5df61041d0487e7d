"""
Attendance repository functions.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from meetup.db import models
from meetup.utils.statuses import ATTENDANCE_PENDING


def get_attendance(db: Session, event_id: int, user_id: int) -> Optional[models.Attendance]:
    return (
        db.query(models.Attendance)
        .filter(models.Attendance.event_id == event_id, models.Attendance.user_id == user_id)
        .first()
    )


def get_event_attendances(db: Session, event_id: int, include_pending: bool = True) -> List[models.Attendance]:
    query = db.query(models.Attendance).filter(models.Attendance.event_id == event_id)
    if not include_pending:
        query = query.filter(models.Attendance.status != ATTENDANCE_PENDING)
    return query.order_by(models.Attendance.id).all()


def request_attendance(db: Session, event_id: int, user_id: int) -> models.Attendance:
    db_attendance = models.Attendance(event_id=event_id, user_id=user_id, status=ATTENDANCE_PENDING)
    db.add(db_attendance)
    db.commit()
    db.refresh(db_attendance)
    return db_attendance


def update_attendance_status(db: Session, db_attendance: models.Attendance, status: str) -> models.Attendance:
    db_attendance.status = status
    db.commit()
    db.refresh(db_attendance)
    return db_attendance


def delete_attendance(db: Session, db_attendance: models.Attendance) -> None:
    db.delete(db_attendance)
    db.commit()
