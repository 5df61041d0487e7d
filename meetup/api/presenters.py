"""
Response shaping for API payloads.

Models are rendered into camelCase dicts; timestamps use the
``YYYY-MM-DD HH:MM:SS`` format and nested collections use capitalized keys.
"""
from datetime import datetime
from typing import Optional

from meetup.db import models

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def fmt_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(DATETIME_FORMAT)


def user_summary(user: models.User) -> dict:
    return {"id": user.id, "firstName": user.first_name, "lastName": user.last_name}


def group_dict(group: models.Group) -> dict:
    return {
        "id": group.id,
        "organizerId": group.organizer_id,
        "name": group.name,
        "about": group.about,
        "type": group.type,
        "private": group.private,
        "city": group.city,
        "state": group.state,
        "createdAt": fmt_datetime(group.created_at),
        "updatedAt": fmt_datetime(group.updated_at),
    }


def group_list_item(group: models.Group, num_members: int, preview_image: Optional[str]) -> dict:
    data = group_dict(group)
    data["numMembers"] = num_members
    data["previewImage"] = preview_image
    return data


def image_dict(image) -> dict:
    return {"id": image.id, "url": image.url, "preview": image.preview}


def venue_dict(venue: models.Venue) -> dict:
    return {
        "id": venue.id,
        "groupId": venue.group_id,
        "address": venue.address,
        "city": venue.city,
        "state": venue.state,
        "lat": venue.lat,
        "lng": venue.lng,
    }


def group_detail(group: models.Group, num_members: int) -> dict:
    data = group_dict(group)
    data["numMembers"] = num_members
    data["GroupImages"] = [image_dict(image) for image in group.images]
    data["Organizer"] = user_summary(group.organizer)
    data["Venues"] = [venue_dict(venue) for venue in group.venues]
    return data


def membership_dict(membership: models.Membership) -> dict:
    return {
        "id": membership.id,
        "groupId": membership.group_id,
        "memberId": membership.user_id,
        "status": membership.status,
    }


def member_dict(membership: models.Membership) -> dict:
    data = user_summary(membership.user)
    data["Membership"] = {"status": membership.status}
    return data


def event_dict(event: models.Event) -> dict:
    return {
        "id": event.id,
        "groupId": event.group_id,
        "venueId": event.venue_id,
        "name": event.name,
        "description": event.description,
        "type": event.type,
        "capacity": event.capacity,
        "price": event.price,
        "startDate": fmt_datetime(event.start_date),
        "endDate": fmt_datetime(event.end_date),
    }


def event_list_item(event: models.Event, num_attending: int, preview_image: Optional[str]) -> dict:
    venue = event.venue
    return {
        "id": event.id,
        "groupId": event.group_id,
        "venueId": event.venue_id,
        "name": event.name,
        "type": event.type,
        "startDate": fmt_datetime(event.start_date),
        "endDate": fmt_datetime(event.end_date),
        "numAttending": num_attending,
        "previewImage": preview_image,
        "Group": {
            "id": event.group.id,
            "name": event.group.name,
            "city": event.group.city,
            "state": event.group.state,
        },
        "Venue": {"id": venue.id, "city": venue.city, "state": venue.state} if venue else None,
    }


def event_detail(event: models.Event, num_attending: int) -> dict:
    data = event_dict(event)
    data["numAttending"] = num_attending
    group = event.group
    data["Group"] = {
        "id": group.id,
        "name": group.name,
        "private": group.private,
        "city": group.city,
        "state": group.state,
    }
    venue = event.venue
    data["Venue"] = (
        {
            "id": venue.id,
            "address": venue.address,
            "city": venue.city,
            "state": venue.state,
            "lat": venue.lat,
            "lng": venue.lng,
        }
        if venue
        else None
    )
    data["EventImages"] = [image_dict(image) for image in event.images]
    return data


def attendance_dict(attendance: models.Attendance) -> dict:
    return {
        "id": attendance.id,
        "eventId": attendance.event_id,
        "userId": attendance.user_id,
        "status": attendance.status,
    }


def attendee_dict(attendance: models.Attendance) -> dict:
    data = user_summary(attendance.user)
    data["Attendance"] = {"status": attendance.status}
    return data


def audit_dict(log: models.AuditLog) -> dict:
    return {
        "id": log.id,
        "groupId": log.group_id,
        "actorUserId": log.actor_user_id,
        "actionType": log.action_type,
        "targetType": log.target_type,
        "targetId": log.target_id,
        "status": log.status,
        "metadata": log.metadata_json,
        "createdAt": fmt_datetime(log.created_at),
    }
