"""
Event repository functions.

Implements filtered, paginated event listing, CRUD for events and their
images, and the attendance counts used by list views.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from meetup.db import schemas, models
from meetup.utils.statuses import ATTENDANCE_ATTENDING


def get_event(db: Session, event_id: int) -> Optional[models.Event]:
    return db.query(models.Event).filter(models.Event.id == event_id).first()


def get_events(db: Session, query: schemas.EventQuery) -> List[models.Event]:
    """Return one page of events matching the query filters, ordered by start date.

    ``name`` matches as a substring; ``start_date`` keeps events starting on or
    after the given moment.
    """
    q = db.query(models.Event)
    if query.name:
        q = q.filter(models.Event.name.ilike(f"%{query.name}%"))
    if query.type:
        q = q.filter(models.Event.type == query.type)
    if query.start_date is not None:
        q = q.filter(models.Event.start_date >= query.start_date)
    offset = (query.page - 1) * query.size
    return q.order_by(models.Event.start_date, models.Event.id).offset(offset).limit(query.size).all()


def get_group_events(db: Session, group_id: int) -> List[models.Event]:
    return (
        db.query(models.Event)
        .filter(models.Event.group_id == group_id)
        .order_by(models.Event.start_date, models.Event.id)
        .all()
    )


def count_attending(db: Session, event_ids: Iterable[int]) -> Dict[int, int]:
    ids = list(event_ids)
    if not ids:
        return {}
    rows = (
        db.query(models.Attendance.event_id, func.count(models.Attendance.id))
        .filter(models.Attendance.event_id.in_(ids), models.Attendance.status == ATTENDANCE_ATTENDING)
        .group_by(models.Attendance.event_id)
        .all()
    )
    counts = {event_id: 0 for event_id in ids}
    counts.update({event_id: count for event_id, count in rows})
    return counts


def preview_images(db: Session, event_ids: Iterable[int]) -> Dict[int, Optional[str]]:
    ids = list(event_ids)
    previews: Dict[int, Optional[str]] = {event_id: None for event_id in ids}
    if not ids:
        return previews
    rows = (
        db.query(models.EventImage.event_id, models.EventImage.url)
        .filter(models.EventImage.event_id.in_(ids), models.EventImage.preview.is_(True))
        .order_by(models.EventImage.id)
        .all()
    )
    for event_id, url in rows:
        if previews.get(event_id) is None:
            previews[event_id] = url
    return previews


def create_event(db: Session, group_id: int, event: schemas.EventCreate) -> models.Event:
    db_event = models.Event(group_id=group_id, **event.model_dump())
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    return db_event


def update_event(db: Session, db_event: models.Event, event: schemas.EventUpdate) -> models.Event:
    for key, value in event.model_dump(exclude_unset=True).items():
        setattr(db_event, key, value)
    db.commit()
    db.refresh(db_event)
    return db_event


def delete_event(db: Session, db_event: models.Event) -> None:
    db.delete(db_event)
    db.commit()


def create_event_image(db: Session, event_id: int, image: schemas.ImageCreate) -> models.EventImage:
    db_image = models.EventImage(event_id=event_id, url=image.url, preview=image.preview)
    db.add(db_image)
    db.commit()
    db.refresh(db_image)
    return db_image


def get_event_image(db: Session, image_id: int) -> Optional[models.EventImage]:
    return db.query(models.EventImage).filter(models.EventImage.id == image_id).first()


def delete_event_image(db: Session, db_image: models.EventImage) -> None:
    db.delete(db_image)
    db.commit()
