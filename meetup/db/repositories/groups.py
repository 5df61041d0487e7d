"""
Group repository functions.

Implements CRUD for groups and their images, plus the aggregate lookups
(member counts, preview images) used by list views.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from meetup.db import schemas, models


def get_group(db: Session, group_id: int) -> Optional[models.Group]:
    return db.query(models.Group).filter(models.Group.id == group_id).first()


def get_groups(db: Session) -> List[models.Group]:
    return db.query(models.Group).order_by(models.Group.id).all()


def get_groups_for_user(db: Session, user_id: int) -> List[models.Group]:
    """Groups the user organizes or holds any membership in, without duplicates."""
    joined_ids = db.query(models.Membership.group_id).filter(models.Membership.user_id == user_id)
    return (
        db.query(models.Group)
        .filter((models.Group.organizer_id == user_id) | (models.Group.id.in_(joined_ids)))
        .order_by(models.Group.id)
        .all()
    )


def count_members(db: Session, group_ids: Iterable[int]) -> Dict[int, int]:
    ids = list(group_ids)
    if not ids:
        return {}
    rows = (
        db.query(models.Membership.group_id, func.count(models.Membership.id))
        .filter(models.Membership.group_id.in_(ids))
        .group_by(models.Membership.group_id)
        .all()
    )
    counts = {group_id: 0 for group_id in ids}
    counts.update({group_id: count for group_id, count in rows})
    return counts


def preview_images(db: Session, group_ids: Iterable[int]) -> Dict[int, Optional[str]]:
    """Map each group id to the url of its first preview image, or None."""
    ids = list(group_ids)
    previews: Dict[int, Optional[str]] = {group_id: None for group_id in ids}
    if not ids:
        return previews
    rows = (
        db.query(models.GroupImage.group_id, models.GroupImage.url)
        .filter(models.GroupImage.group_id.in_(ids), models.GroupImage.preview.is_(True))
        .order_by(models.GroupImage.id)
        .all()
    )
    for group_id, url in rows:
        if previews.get(group_id) is None:
            previews[group_id] = url
    return previews


def create_group(db: Session, group: schemas.GroupCreate, organizer_id: int) -> models.Group:
    db_group = models.Group(organizer_id=organizer_id, **group.model_dump())
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    return db_group


def update_group(db: Session, db_group: models.Group, group: schemas.GroupUpdate) -> models.Group:
    update_data = group.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_group, key, value)
    db.commit()
    db.refresh(db_group)
    return db_group


def delete_group(db: Session, db_group: models.Group) -> None:
    db.delete(db_group)
    db.commit()


def create_group_image(db: Session, group_id: int, image: schemas.ImageCreate) -> models.GroupImage:
    db_image = models.GroupImage(group_id=group_id, url=image.url, preview=image.preview)
    db.add(db_image)
    db.commit()
    db.refresh(db_image)
    return db_image


def get_group_image(db: Session, image_id: int) -> Optional[models.GroupImage]:
    return db.query(models.GroupImage).filter(models.GroupImage.id == image_id).first()


def delete_group_image(db: Session, db_image: models.GroupImage) -> None:
    db.delete(db_image)
    db.commit()
