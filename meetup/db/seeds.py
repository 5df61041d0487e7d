"""
Demo seed data.

``seed_all`` inserts a small, fixed data set (users, groups, memberships,
images, venues, events and attendances) and ``unseed_all`` removes it.
Rows refer to each other by position in the lists below, so seeding works
on a database whose ids do not start at 1.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from meetup.db import models
from meetup.utils import token_crypto
from meetup.utils.statuses import (
    ALL_MEMBERSHIP_STATUSES,
    ATTENDANCE_ATTENDING,
    ATTENDANCE_PENDING,
    ATTENDANCE_WAITLIST,
    MEMBERSHIP_CO_HOST,
    MEMBERSHIP_MEMBER,
    MEMBERSHIP_PENDING,
    TYPE_IN_PERSON,
    TYPE_ONLINE,
)

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

USERS: List[Dict] = [
    {"first_name": "Demo", "last_name": "Lition", "email": "demo@user.io", "username": "Demo-lition"},
    {"first_name": "Fake", "last_name": "User", "email": "user1@user.io", "username": "FakeUser1"},
    {"first_name": "Another", "last_name": "Fake", "email": "user2@user.io", "username": "FakeUser2"},
    {"first_name": "Last", "last_name": "Seeded", "email": "user3@user.io", "username": "FakeUser3"},
]

# organizer is a 1-based position in USERS
GROUPS: List[Dict] = [
    {
        "organizer": 4,
        "name": "Evening Tennis on the Water",
        "about": "Enjoy rounds of tennis with a tight-knit group of people on the water facing the Brooklyn Bridge. Singles or doubles.",
        "type": TYPE_IN_PERSON,
        "private": True,
        "city": "New York",
        "state": "NY",
    },
    {
        "organizer": 4,
        "name": "Online Chess Club",
        "about": "Weekly rapid and blitz tournaments for players of every level, followed by a relaxed review of the best games.",
        "type": TYPE_ONLINE,
        "private": False,
        "city": "Chicago",
        "state": "IL",
    },
    {
        "organizer": 4,
        "name": "Trail Runners of the Bay",
        "about": "Early weekend runs through the hills around the bay, with routes for beginners and seasoned ultra runners alike.",
        "type": TYPE_IN_PERSON,
        "private": False,
        "city": "San Francisco",
        "state": "CA",
    },
    {
        "organizer": 2,
        "name": "Sourdough Bakers Circle",
        "about": "Share starters, trade recipes and troubleshoot loaves together in monthly video calls and the occasional bake-off.",
        "type": TYPE_ONLINE,
        "private": True,
        "city": "Austin",
        "state": "TX",
    },
]

# (user position, group position, status)
MEMBERSHIPS = [
    (1, 4, MEMBERSHIP_CO_HOST),
    (1, 1, MEMBERSHIP_CO_HOST),
    (1, 2, MEMBERSHIP_CO_HOST),
    (1, 3, MEMBERSHIP_MEMBER),
    (2, 1, MEMBERSHIP_PENDING),
    (2, 2, MEMBERSHIP_CO_HOST),
    (2, 3, MEMBERSHIP_PENDING),
    (3, 1, MEMBERSHIP_PENDING),
    (3, 2, MEMBERSHIP_PENDING),
    (3, 3, MEMBERSHIP_CO_HOST),
]

GROUP_IMAGES = [
    (1, "https://images.example.com/groups/tennis.jpg", True),
    (2, "https://images.example.com/groups/chess.jpg", True),
    (3, "https://images.example.com/groups/trail.jpg", True),
    (3, "https://images.example.com/groups/trail-2.jpg", False),
]

VENUES = [
    (1, {"address": "334 Furman St", "city": "Brooklyn", "state": "NY", "lat": 40.6985, "lng": -73.9996}),
    (3, {"address": "1 Marina Blvd", "city": "San Francisco", "state": "CA", "lat": 37.8060, "lng": -122.4330}),
]

# (group position, venue position or None, fields)
EVENTS = [
    (1, 1, {
        "name": "Tennis Doubles Night",
        "description": "Friendly doubles rotation under the lights.",
        "type": TYPE_IN_PERSON,
        "capacity": 12,
        "price": 15.0,
        "start_date": datetime(2030, 6, 12, 18, 0, 0),
        "end_date": datetime(2030, 6, 12, 21, 0, 0),
    }),
    (2, None, {
        "name": "Blitz Arena",
        "description": "Three-minute games, ten rounds, prizes for the top three.",
        "type": TYPE_ONLINE,
        "capacity": 50,
        "price": 0.0,
        "start_date": datetime(2030, 7, 1, 19, 0, 0),
        "end_date": datetime(2030, 7, 1, 21, 30, 0),
    }),
    (3, 2, {
        "name": "Sunrise Hill Repeats",
        "description": "Six repeats on the marina hill, coffee afterwards.",
        "type": TYPE_IN_PERSON,
        "capacity": 25,
        "price": 5.0,
        "start_date": datetime(2030, 8, 3, 6, 30, 0),
        "end_date": datetime(2030, 8, 3, 8, 0, 0),
    }),
]

# (event position, user position, status)
ATTENDANCES = [
    (1, 1, ATTENDANCE_ATTENDING),
    (1, 2, ATTENDANCE_PENDING),
    (2, 1, ATTENDANCE_ATTENDING),
    (2, 2, ATTENDANCE_WAITLIST),
    (3, 3, ATTENDANCE_ATTENDING),
]

EVENT_IMAGES = [
    (1, "https://images.example.com/events/doubles.jpg", True),
    (3, "https://images.example.com/events/hill.jpg", True),
]


def seed_all(db: Session) -> Dict[str, int]:
    """Insert the demo data set and return the number of rows per table."""
    password_hash = token_crypto.hash_password(DEMO_PASSWORD)
    users = [models.User(hashed_password=password_hash, **fields) for fields in USERS]
    db.add_all(users)
    db.flush()

    groups = []
    for fields in GROUPS:
        data = dict(fields)
        organizer = users[data.pop("organizer") - 1]
        groups.append(models.Group(organizer_id=organizer.id, **data))
    db.add_all(groups)
    db.flush()

    db.add_all(
        models.Membership(user_id=users[u - 1].id, group_id=groups[g - 1].id, status=status)
        for u, g, status in MEMBERSHIPS
    )
    db.add_all(
        models.GroupImage(group_id=groups[g - 1].id, url=url, preview=preview)
        for g, url, preview in GROUP_IMAGES
    )
    venues = [models.Venue(group_id=groups[g - 1].id, **fields) for g, fields in VENUES]
    db.add_all(venues)
    db.flush()

    events = [
        models.Event(
            group_id=groups[g - 1].id,
            venue_id=venues[v - 1].id if v else None,
            **fields,
        )
        for g, v, fields in EVENTS
    ]
    db.add_all(events)
    db.flush()

    db.add_all(
        models.Attendance(event_id=events[e - 1].id, user_id=users[u - 1].id, status=status)
        for e, u, status in ATTENDANCES
    )
    db.add_all(
        models.EventImage(event_id=events[e - 1].id, url=url, preview=preview)
        for e, url, preview in EVENT_IMAGES
    )
    db.commit()

    counts = {
        "users": len(USERS),
        "groups": len(GROUPS),
        "memberships": len(MEMBERSHIPS),
        "group_images": len(GROUP_IMAGES),
        "venues": len(VENUES),
        "events": len(EVENTS),
        "attendances": len(ATTENDANCES),
        "event_images": len(EVENT_IMAGES),
    }
    logger.info("seed_complete: %s", " ".join(f"{k}={v}" for k, v in counts.items()))
    return counts


def unseed_all(db: Session) -> None:
    """Remove the demo users and everything hanging off them.

    Every group a demo user organizes goes, including ones created through
    the API after seeding. Memberships of demo users or those groups are
    deleted by status first; deleting the groups then cascades to their
    images, venues, events and attendances.
    """
    usernames = [fields["username"] for fields in USERS]
    user_ids = [uid for (uid,) in db.query(models.User.id).filter(models.User.username.in_(usernames))]
    group_ids = [gid for (gid,) in db.query(models.Group.id).filter(models.Group.organizer_id.in_(user_ids))]
    db.query(models.Membership).filter(
        models.Membership.status.in_(sorted(ALL_MEMBERSHIP_STATUSES)),
        or_(models.Membership.user_id.in_(user_ids), models.Membership.group_id.in_(group_ids)),
    ).delete(synchronize_session=False)
    db.query(models.Attendance).filter(models.Attendance.user_id.in_(user_ids)).delete(synchronize_session=False)
    db.query(models.AuditLog).filter(models.AuditLog.actor_user_id.in_(user_ids)).delete(synchronize_session=False)
    for group in db.query(models.Group).filter(models.Group.id.in_(group_ids)).all():
        db.delete(group)
    db.flush()
    db.query(models.User).filter(models.User.id.in_(user_ids)).delete(synchronize_session=False)
    db.commit()
    logger.info("unseed_complete: users=%s groups=%s", len(user_ids), len(group_ids))
