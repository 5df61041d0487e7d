"""
Membership repository functions.

Implements lookup, request, status change and removal of group memberships.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from meetup.db import models
from meetup.utils.statuses import MEMBERSHIP_PENDING


def get_membership(db: Session, group_id: int, user_id: int) -> Optional[models.Membership]:
    return (
        db.query(models.Membership)
        .filter(models.Membership.group_id == group_id, models.Membership.user_id == user_id)
        .first()
    )


def get_group_memberships(db: Session, group_id: int, include_pending: bool = True) -> List[models.Membership]:
    query = db.query(models.Membership).filter(models.Membership.group_id == group_id)
    if not include_pending:
        query = query.filter(models.Membership.status != MEMBERSHIP_PENDING)
    return query.order_by(models.Membership.id).all()


def request_membership(db: Session, group_id: int, user_id: int) -> models.Membership:
    db_membership = models.Membership(group_id=group_id, user_id=user_id, status=MEMBERSHIP_PENDING)
    db.add(db_membership)
    db.commit()
    db.refresh(db_membership)
    return db_membership


def update_membership_status(db: Session, db_membership: models.Membership, status: str) -> models.Membership:
    db_membership.status = status
    db.commit()
    db.refresh(db_membership)
    return db_membership


def delete_membership(db: Session, db_membership: models.Membership) -> None:
    db.delete(db_membership)
    db.commit()
