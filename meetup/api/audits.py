"""
Audit log API endpoints.

Query and present a group's audit trail for its organizer.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from meetup.api import presenters
from meetup.api.deps import require_auth
from meetup.api.groups import get_group_or_404
from meetup.api.permissions import require_organizer
from meetup.api.validation import MAX_DB_INT, ResourceId
from meetup.db import models
from meetup.db.database import get_db
from meetup.db.repositories import audits as audit_repo

router = APIRouter(tags=["audits"])


@router.get("/groups/{groupId}/audits")
def list_group_audit_logs(
    groupId: ResourceId,
    action_type: Optional[str] = Query(default=None, alias="actionType"),
    skip: int = Query(default=0, ge=0, le=MAX_DB_INT),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    user: models.User = Depends(require_auth),
):
    group = get_group_or_404(db, groupId)
    require_organizer(db, group, user)
    logs = audit_repo.get_audit_logs(db, group_id=group.id, action_type=action_type, skip=skip, limit=limit)
    return {"Audits": [presenters.audit_dict(log) for log in logs]}
