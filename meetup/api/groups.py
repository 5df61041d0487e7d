"""
Group API endpoints.

Listing and detail views are public; creating requires a session and
editing, deleting and adding images require the group's organizer.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from meetup import audit
from meetup.api import presenters
from meetup.api.deps import require_auth
from meetup.api.errors import not_found
from meetup.api.permissions import require_organizer
from meetup.api.validation import ResourceId, validate_group_create, validate_group_update, validate_image
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import groups as group_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups", tags=["groups"])


def get_group_or_404(db: Session, group_id: int) -> models.Group:
    group = group_repo.get_group(db, group_id)
    if group is None:
        raise not_found("Group")
    return group


def _list_payload(db: Session, groups) -> dict:
    ids = [group.id for group in groups]
    counts = group_repo.count_members(db, ids)
    previews = group_repo.preview_images(db, ids)
    return {
        "Groups": [
            presenters.group_list_item(group, counts.get(group.id, 0), previews.get(group.id))
            for group in groups
        ]
    }


@router.get("")
def list_groups(db: Session = Depends(get_db)):
    return _list_payload(db, group_repo.get_groups(db))


@router.get("/current")
def list_current_user_groups(
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    return _list_payload(db, group_repo.get_groups_for_user(db, user.id))


@router.get("/{groupId}")
def get_group_details(groupId: ResourceId, db: Session = Depends(get_db)):
    group = get_group_or_404(db, groupId)
    counts = group_repo.count_members(db, [group.id])
    return presenters.group_detail(group, counts.get(group.id, 0))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_group(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group_in = validate_group_create(payload)
    group = group_repo.create_group(db, group_in, organizer_id=user.id)
    audit.log(
        db,
        action=audit.AuditAction.GROUP_CREATE,
        target_type="group",
        target_id=group.id,
        actor_user_id=user.id,
        group_id=group.id,
        metadata={"name": group.name},
    )
    logger.info("group_created: group_id=%s organizer_id=%s", group.id, user.id)
    return presenters.group_dict(group)


@router.put("/{groupId}")
def update_group(
    groupId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    require_organizer(db, group, user)
    changes = validate_group_update(payload)
    group = group_repo.update_group(db, group, changes)
    audit.log(
        db,
        action=audit.AuditAction.GROUP_UPDATE,
        target_type="group",
        target_id=group.id,
        actor_user_id=user.id,
        group_id=group.id,
        metadata={"fields": sorted(changes.model_dump(exclude_unset=True))},
    )
    return presenters.group_dict(group)


@router.delete("/{groupId}")
def delete_group(
    groupId: ResourceId,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    require_organizer(db, group, user)
    group_id, name = group.id, group.name
    group_repo.delete_group(db, group)
    audit.log(
        db,
        action=audit.AuditAction.GROUP_DELETE,
        target_type="group",
        target_id=group_id,
        actor_user_id=user.id,
        metadata={"name": name},
    )
    logger.info("group_deleted: group_id=%s actor_id=%s", group_id, user.id)
    return {"message": "Successfully deleted", "statusCode": 200}


@router.post("/{groupId}/images")
def add_group_image(
    groupId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    require_organizer(db, group, user)
    image_in = validate_image(payload)
    image = group_repo.create_group_image(db, group.id, image_in)
    return presenters.image_dict(image)
