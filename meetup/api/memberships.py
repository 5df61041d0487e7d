"""
Membership API endpoints.

Users request to join a group; hosts approve requests and the organizer
promotes members to co-host. Members may leave, and hosts may remove them.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from meetup import audit
from meetup.api import presenters
from meetup.api.deps import get_current_user, require_auth
from meetup.api.errors import ValidationFailed, forbidden
from meetup.api.groups import get_group_or_404
from meetup.api.permissions import can_remove_membership, require_host, resolve_group_role
from meetup.api.validation import ResourceId, validate_member_reference, validate_membership_status
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import memberships as membership_repo
from meetup.db.repositories import users as user_repo
from meetup.utils.role_permissions import role_allows_host, role_can_grant_status
from meetup.utils.statuses import MEMBERSHIP_PENDING

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/groups/{groupId}", tags=["memberships"])

MEMBERSHIP_NOT_FOUND = "Membership does not exist for this user"


def _get_member_or_400(db: Session, member_id: int) -> models.User:
    member = user_repo.get_user(db, member_id)
    if member is None:
        raise ValidationFailed({"memberId": "User couldn't be found"})
    return member


def _get_membership_or_404(db: Session, group_id: int, member_id: int) -> models.Membership:
    membership = membership_repo.get_membership(db, group_id, member_id)
    if membership is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MEMBERSHIP_NOT_FOUND)
    return membership


@router.get("/members")
def list_members(
    groupId: ResourceId,
    db: Session = Depends(get_db),
    user: Optional[models.User] = Depends(get_current_user),
):
    group = get_group_or_404(db, groupId)
    role = resolve_group_role(db, group, user.id if user else None)
    memberships = membership_repo.get_group_memberships(db, group.id, include_pending=role_allows_host(role))
    return {"Members": [presenters.member_dict(membership) for membership in memberships]}


@router.post("/membership")
def request_membership(
    groupId: ResourceId,
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    role = resolve_group_role(db, group, user.id)
    if role == MEMBERSHIP_PENDING:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Membership has already been requested")
    if role is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is already a member of the group")
    membership = membership_repo.request_membership(db, group.id, user.id)
    audit.log_membership(db, actor_user_id=user.id, membership=membership, action=audit.AuditAction.MEMBERSHIP_REQUEST)
    logger.info("membership_requested: group_id=%s user_id=%s", group.id, user.id)
    return {"memberId": membership.user_id, "status": membership.status}


@router.put("/membership")
def change_membership_status(
    groupId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    """Approve a pending member or promote a member to co-host.

    Any host may approve; only the organizer may grant ``co-host``.
    """
    group = get_group_or_404(db, groupId)
    role = require_host(db, group, user)
    change = validate_membership_status(payload)
    _get_member_or_400(db, change.member_id)
    membership = _get_membership_or_404(db, group.id, change.member_id)
    if not role_can_grant_status(role, change.status):
        logger.warning(
            "permission_denied: user_id=%s group_id=%s role=%s grant=%s",
            user.id, group.id, role, change.status,
        )
        audit.log_membership(
            db,
            actor_user_id=user.id,
            membership=membership,
            action=audit.AuditAction.MEMBERSHIP_STATUS_CHANGE,
            status=audit.AuditStatus.FAILURE,
            metadata={"requested_status": change.status},
        )
        raise forbidden()
    previous = membership.status
    membership = membership_repo.update_membership_status(db, membership, change.status)
    audit.log_membership(
        db,
        actor_user_id=user.id,
        membership=membership,
        action=audit.AuditAction.MEMBERSHIP_STATUS_CHANGE,
        metadata={"previous_status": previous},
    )
    logger.info(
        "membership_status_changed: group_id=%s member_id=%s from=%s to=%s",
        group.id, membership.user_id, previous, membership.status,
    )
    return presenters.membership_dict(membership)


@router.delete("/membership")
def delete_membership(
    groupId: ResourceId,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    member_id = validate_member_reference(payload)
    _get_member_or_400(db, member_id)
    membership = _get_membership_or_404(db, group.id, member_id)
    role = resolve_group_role(db, group, user.id)
    if not can_remove_membership(role, user.id, member_id):
        logger.warning("permission_denied: user_id=%s group_id=%s role=%s remove_member=%s", user.id, group.id, role, member_id)
        audit.log_membership(
            db,
            actor_user_id=user.id,
            membership=membership,
            action=audit.AuditAction.MEMBERSHIP_REMOVE,
            status=audit.AuditStatus.FAILURE,
        )
        raise forbidden()
    membership_id, previous = membership.id, membership.status
    membership_repo.delete_membership(db, membership)
    audit.log(
        db,
        action=audit.AuditAction.MEMBERSHIP_REMOVE,
        target_type="membership",
        target_id=membership_id,
        actor_user_id=user.id,
        group_id=group.id,
        metadata={"member_id": member_id, "status": previous},
    )
    logger.info("membership_removed: group_id=%s member_id=%s actor_id=%s", group.id, member_id, user.id)
    return {"message": "Successfully deleted membership from group"}
