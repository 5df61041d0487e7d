"""
Venue API endpoints. All venue operations require a host of the group.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from meetup import audit
from meetup.api import presenters
from meetup.api.deps import require_auth
from meetup.api.errors import not_found
from meetup.api.groups import get_group_or_404
from meetup.api.permissions import require_host
from meetup.api.validation import ResourceId, validate_venue_create, validate_venue_update
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import venues as venue_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["venues"])


@router.get("/groups/{groupId}/venues")
def list_group_venues(
    groupId: ResourceId,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    require_host(db, group, user)
    return {"Venues": [presenters.venue_dict(venue) for venue in venue_repo.get_group_venues(db, group.id)]}


@router.post("/groups/{groupId}/venues")
def create_venue(
    groupId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    require_host(db, group, user)
    venue_in = validate_venue_create(payload)
    venue = venue_repo.create_venue(db, group.id, venue_in)
    audit.log(
        db,
        action=audit.AuditAction.VENUE_CREATE,
        target_type="venue",
        target_id=venue.id,
        actor_user_id=user.id,
        group_id=group.id,
        metadata={"address": venue.address},
    )
    return presenters.venue_dict(venue)


@router.put("/venues/{venueId}")
def update_venue(
    venueId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    venue = venue_repo.get_venue(db, venueId)
    if venue is None:
        raise not_found("Venue")
    require_host(db, venue.group, user)
    changes = validate_venue_update(payload)
    venue = venue_repo.update_venue(db, venue, changes)
    audit.log(
        db,
        action=audit.AuditAction.VENUE_UPDATE,
        target_type="venue",
        target_id=venue.id,
        actor_user_id=user.id,
        group_id=venue.group_id,
        metadata={"fields": sorted(changes.model_dump(exclude_unset=True))},
    )
    return presenters.venue_dict(venue)
