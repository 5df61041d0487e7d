"""
Domain-split Pydantic schemas with a single import path.

These carry validated request payloads into the repository layer.
"""

from .users import UserBase, UserCreate, LoginRequest
from .groups import (
    GroupBase,
    GroupCreate,
    GroupUpdate,
    VenueBase,
    VenueCreate,
    VenueUpdate,
    ImageCreate,
    MembershipStatusUpdate,
)
from .events import (
    EventBase,
    EventCreate,
    EventUpdate,
    EventQuery,
    AttendanceStatusUpdate,
)
from .audits import AuditLogBase, AuditLogCreate

__all__ = [
    "UserBase",
    "UserCreate",
    "LoginRequest",
    "GroupBase",
    "GroupCreate",
    "GroupUpdate",
    "VenueBase",
    "VenueCreate",
    "VenueUpdate",
    "ImageCreate",
    "MembershipStatusUpdate",
    "EventBase",
    "EventCreate",
    "EventUpdate",
    "EventQuery",
    "AttendanceStatusUpdate",
    "AuditLogBase",
    "AuditLogCreate",
]
