"""
Image deletion endpoints for group and event images (hosts only).
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from meetup.api.deps import require_auth
from meetup.api.errors import not_found
from meetup.api.permissions import require_host
from meetup.api.validation import ResourceId
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import events as event_repo
from meetup.db.repositories import groups as group_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])

DELETED = {"message": "Successfully deleted", "statusCode": 200}


@router.delete("/group-images/{imageId}")
def delete_group_image(
    imageId: ResourceId,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    image = group_repo.get_group_image(db, imageId)
    if image is None:
        raise not_found("Group Image")
    require_host(db, image.group, user)
    group_repo.delete_group_image(db, image)
    logger.info("group_image_deleted: image_id=%s actor_id=%s", imageId, user.id)
    return dict(DELETED)


@router.delete("/event-images/{imageId}")
def delete_event_image(
    imageId: ResourceId,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    image = event_repo.get_event_image(db, imageId)
    if image is None:
        raise not_found("Event Image")
    require_host(db, image.event.group, user)
    event_repo.delete_event_image(db, image)
    logger.info("event_image_deleted: image_id=%s actor_id=%s", imageId, user.id)
    return dict(DELETED)
