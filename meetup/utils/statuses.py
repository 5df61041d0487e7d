"""
Status and type constants for groups, events, memberships and attendances.

Centralized definitions to avoid string literals scattered across the
codebase. The values are the ones stored in the database.
"""

from typing import FrozenSet

# Group / event types
TYPE_ONLINE = "Online"
TYPE_IN_PERSON = "In person"
ALL_TYPES: FrozenSet[str] = frozenset({TYPE_ONLINE, TYPE_IN_PERSON})

# Membership statuses
MEMBERSHIP_PENDING = "pending"
MEMBERSHIP_MEMBER = "member"
MEMBERSHIP_CO_HOST = "co-host"
ALL_MEMBERSHIP_STATUSES: FrozenSet[str] = frozenset({MEMBERSHIP_PENDING, MEMBERSHIP_MEMBER, MEMBERSHIP_CO_HOST})

# Attendance statuses
ATTENDANCE_PENDING = "pending"
ATTENDANCE_WAITLIST = "waitlist"
ATTENDANCE_ATTENDING = "attending"
ALL_ATTENDANCE_STATUSES: FrozenSet[str] = frozenset({ATTENDANCE_PENDING, ATTENDANCE_WAITLIST, ATTENDANCE_ATTENDING})


def is_valid_type(value) -> bool:
    """Return True if the value is one of the supported group/event types."""
    return isinstance(value, str) and value in ALL_TYPES

