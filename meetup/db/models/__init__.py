"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes from one import path so
callers can write `from meetup.db import models` and `models.Group`.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .users import User
from .groups import Group, Membership, GroupImage, Venue
from .events import Event, Attendance, EventImage
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    # groups
    "Group",
    "Membership",
    "GroupImage",
    "Venue",
    # events
    "Event",
    "Attendance",
    "EventImage",
    # audit
    "AuditLog",
]
