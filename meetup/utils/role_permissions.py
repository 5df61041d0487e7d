"""
Role utilities for group participants.

A caller's role in a group is derived, never stored as such: the organizer
is the group's creator and every other role comes from the membership
status. Roles are ranked so that endpoint policies can ask for a minimum.
"""

from typing import Dict, FrozenSet, Optional

from meetup.utils.statuses import MEMBERSHIP_CO_HOST, MEMBERSHIP_MEMBER, MEMBERSHIP_PENDING

# Central role constants to ensure consistency across the codebase
ROLE_ORGANIZER = "organizer"
ROLE_CO_HOST = MEMBERSHIP_CO_HOST
ROLE_MEMBER = MEMBERSHIP_MEMBER
ROLE_PENDING = MEMBERSHIP_PENDING

ROLE_RANKS: Dict[str, int] = {
    ROLE_ORGANIZER: 3,
    ROLE_CO_HOST: 2,
    ROLE_MEMBER: 1,
    ROLE_PENDING: 0,
}

HOST_ROLES: FrozenSet[str] = frozenset({ROLE_ORGANIZER, ROLE_CO_HOST})

# Membership status a role may grant when changing someone else's status.
# Approving a pending request needs a host; promoting to co-host needs the organizer.
STATUS_GRANT_REQUIREMENTS: Dict[str, str] = {
    MEMBERSHIP_MEMBER: ROLE_CO_HOST,
    MEMBERSHIP_CO_HOST: ROLE_ORGANIZER,
}


def role_rank(role: Optional[str]) -> int:
    """Return the numeric rank of a role; unknown or missing roles rank -1."""
    if role is None:
        return -1
    return ROLE_RANKS.get(role, -1)


def role_at_least(role: Optional[str], minimum: str) -> bool:
    """Return True if ``role`` ranks at or above ``minimum``.

    Raises:
        ValueError: If ``minimum`` is not a known role
    """
    if minimum not in ROLE_RANKS:
        raise ValueError(f"Unknown role: {minimum}. Allowed roles: {sorted(ROLE_RANKS)}")
    return role_rank(role) >= ROLE_RANKS[minimum]


def role_allows_host(role: Optional[str]) -> bool:
    """Return True if the role may act as a host of the group."""
    return role in HOST_ROLES


def role_allows_manage(role: Optional[str]) -> bool:
    """Return True if the role may manage the group itself (organizer only)."""
    return role == ROLE_ORGANIZER


def role_can_grant_status(role: Optional[str], target_status: str) -> bool:
    """Return True if ``role`` may set another member's status to ``target_status``."""
    required = STATUS_GRANT_REQUIREMENTS.get(target_status)
    if required is None:
        return False
    return role_at_least(role, required)
