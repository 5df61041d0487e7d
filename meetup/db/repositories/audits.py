"""
Audit trail persistence: append entries and page through a group's history.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from meetup.db import models, schemas


def create_audit_log(
    db: Session,
    audit_log: schemas.AuditLogCreate,
    actor_user_id: int,
    group_id: Optional[int] = None,
) -> models.AuditLog:
    entry = models.AuditLog(
        group_id=group_id,
        actor_user_id=actor_user_id,
        action_type=audit_log.action_type,
        target_type=audit_log.target_type,
        target_id=audit_log.target_id,
        status=audit_log.status,
        metadata_json=audit_log.metadata,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def get_audit_logs(
    db: Session,
    group_id: int,
    action_type: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[models.AuditLog]:
    """Newest first; ties on ``created_at`` fall back to insertion order."""
    query = db.query(models.AuditLog).filter(models.AuditLog.group_id == group_id)
    if action_type:
        query = query.filter(models.AuditLog.action_type == action_type)
    query = query.order_by(models.AuditLog.created_at.desc(), models.AuditLog.id.desc())
    return query.offset(skip).limit(limit).all()
