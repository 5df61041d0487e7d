"""
Event API endpoints.

Event listings are public. Hosts of the owning group create, edit and
delete events; attendees and hosts may attach images.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session

from meetup import audit
from meetup.api import presenters
from meetup.api.deps import require_auth
from meetup.api.errors import forbidden, not_found
from meetup.api.groups import get_group_or_404
from meetup.api.permissions import can_add_event_image, require_host
from meetup.api.validation import (
    ResourceId,
    validate_event_create,
    validate_event_query,
    validate_event_update,
    validate_image,
)
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import events as event_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


def get_event_or_404(db: Session, event_id: int) -> models.Event:
    event = event_repo.get_event(db, event_id)
    if event is None:
        raise not_found("Event")
    return event


def _list_items(db: Session, events) -> list:
    ids = [event.id for event in events]
    counts = event_repo.count_attending(db, ids)
    previews = event_repo.preview_images(db, ids)
    return [presenters.event_list_item(event, counts.get(event.id, 0), previews.get(event.id)) for event in events]


@router.get("/events")
def list_events(request: Request, db: Session = Depends(get_db)):
    query = validate_event_query(request.query_params)
    events = event_repo.get_events(db, query)
    return {"Events": _list_items(db, events), "page": query.page, "size": query.size}


@router.get("/groups/{groupId}/events")
def list_group_events(groupId: ResourceId, db: Session = Depends(get_db)):
    group = get_group_or_404(db, groupId)
    return {"Events": _list_items(db, event_repo.get_group_events(db, group.id))}


@router.get("/events/{eventId}")
def get_event_details(eventId: ResourceId, db: Session = Depends(get_db)):
    event = get_event_or_404(db, eventId)
    counts = event_repo.count_attending(db, [event.id])
    return presenters.event_detail(event, counts.get(event.id, 0))


@router.post("/groups/{groupId}/events", status_code=status.HTTP_201_CREATED)
def create_event(
    groupId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    require_host(db, group, user)
    event_in = validate_event_create(payload, [venue.id for venue in group.venues])
    event = event_repo.create_event(db, group.id, event_in)
    audit.log(
        db,
        action=audit.AuditAction.EVENT_CREATE,
        target_type="event",
        target_id=event.id,
        actor_user_id=user.id,
        group_id=group.id,
        metadata={"name": event.name},
    )
    logger.info("event_created: event_id=%s group_id=%s", event.id, group.id)
    return presenters.event_dict(event)


@router.put("/events/{eventId}")
def update_event(
    eventId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    event = get_event_or_404(db, eventId)
    require_host(db, event.group, user)
    changes = validate_event_update(payload, [venue.id for venue in event.group.venues], event)
    event = event_repo.update_event(db, event, changes)
    audit.log(
        db,
        action=audit.AuditAction.EVENT_UPDATE,
        target_type="event",
        target_id=event.id,
        actor_user_id=user.id,
        group_id=event.group_id,
        metadata={"fields": sorted(changes.model_dump(exclude_unset=True))},
    )
    return presenters.event_dict(event)


@router.delete("/events/{eventId}")
def delete_event(
    eventId: ResourceId,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    event = get_event_or_404(db, eventId)
    require_host(db, event.group, user)
    event_id, group_id, name = event.id, event.group_id, event.name
    event_repo.delete_event(db, event)
    audit.log(
        db,
        action=audit.AuditAction.EVENT_DELETE,
        target_type="event",
        target_id=event_id,
        actor_user_id=user.id,
        group_id=group_id,
        metadata={"name": name},
    )
    logger.info("event_deleted: event_id=%s group_id=%s actor_id=%s", event_id, group_id, user.id)
    return {"message": "Successfully deleted"}


@router.post("/events/{eventId}/images")
def add_event_image(
    eventId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    event = get_event_or_404(db, eventId)
    if not can_add_event_image(db, event, user):
        logger.warning("permission_denied: user_id=%s event_id=%s action=add_image", user.id, event.id)
        raise forbidden()
    image_in = validate_image(payload)
    image = event_repo.create_event_image(db, event.id, image_in)
    return presenters.image_dict(image)
