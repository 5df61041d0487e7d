"""
Request validation chains.

Each ``validate_*`` function inspects a raw JSON body (camelCase keys),
collects every field error, and either raises ``ValidationFailed`` or
returns the matching Pydantic schema for the repository layer.

Error keys are the request field names so clients can map them to inputs.
"""
import math
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Annotated, Any, Dict, Iterable, Optional

from fastapi import Path

from meetup.api.errors import ValidationFailed
from meetup.db import models, schemas
from meetup.utils.statuses import (
    ALL_TYPES,
    ATTENDANCE_ATTENDING,
    ATTENDANCE_PENDING,
    ATTENDANCE_WAITLIST,
    MEMBERSHIP_CO_HOST,
    MEMBERSHIP_MEMBER,
    MEMBERSHIP_PENDING,
    is_valid_type,
)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

GROUP_NAME_MAX = 60
GROUP_ABOUT_MIN = 50
USERNAME_MIN = 4
PASSWORD_MIN = 6
EVENT_NAME_MIN = 5
MAX_PAGE = 10
MAX_SIZE = 20
FIRST_NAME_MAX = 50
LAST_NAME_MAX = 50
USERNAME_MAX = 30
EMAIL_MAX = 256
PLACE_MAX = 100
ADDRESS_MAX = 255
EVENT_NAME_MAX = 255

# Largest value an Integer column holds on every supported backend
MAX_DB_INT = 2**31 - 1

ResourceId = Annotated[int, Path(le=MAX_DB_INT)]


def _raise_if(errors: Dict[str, str]) -> None:
    if errors:
        raise ValidationFailed(errors)


def _as_body(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationFailed({"body": "Request body must be a JSON object"})
    return payload


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is never a number here
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def is_integer(value: Any) -> bool:
    """Return True for whole numbers that fit an Integer column."""
    if isinstance(value, float):
        if not value.is_integer():
            return False
    elif not isinstance(value, int) or isinstance(value, bool):
        return False
    return -MAX_DB_INT <= value <= MAX_DB_INT


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string into a naive UTC datetime, or None when invalid."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed


def utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


# --- session -----------------------------------------------------------------

def validate_login(payload: Any) -> schemas.LoginRequest:
    body = _as_body(payload)
    errors: Dict[str, str] = {}
    credential = body.get("credential")
    password = body.get("password")
    if is_blank(credential) or not isinstance(credential, str):
        errors["credential"] = "Email or username is required"
    if is_blank(password) or not isinstance(password, str):
        errors["password"] = "Password is required"
    _raise_if(errors)
    return schemas.LoginRequest(credential=credential, password=password)


def validate_signup(payload: Any) -> schemas.UserCreate:
    body = _as_body(payload)
    errors: Dict[str, str] = {}
    email = body.get("email")
    username = body.get("username")
    first_name = body.get("firstName")
    last_name = body.get("lastName")
    password = body.get("password")

    if not isinstance(email, str) or not EMAIL_RE.match(email.strip()):
        errors["email"] = "Invalid email"
    elif len(email.strip()) > EMAIL_MAX:
        errors["email"] = "Email must be 256 characters or less"
    if not isinstance(username, str) or len(username.strip()) < USERNAME_MIN:
        errors["username"] = "Username is required"
    elif EMAIL_RE.match(username.strip()):
        errors["username"] = "Username cannot be an email"
    elif len(username.strip()) > USERNAME_MAX:
        errors["username"] = "Username must be 30 characters or less"
    if is_blank(first_name) or not isinstance(first_name, str):
        errors["firstName"] = "First Name is required"
    elif len(first_name.strip()) > FIRST_NAME_MAX:
        errors["firstName"] = "First Name must be 50 characters or less"
    if is_blank(last_name) or not isinstance(last_name, str):
        errors["lastName"] = "Last Name is required"
    elif len(last_name.strip()) > LAST_NAME_MAX:
        errors["lastName"] = "Last Name must be 50 characters or less"
    if not isinstance(password, str) or len(password) < PASSWORD_MIN:
        errors["password"] = "Password must be 6 characters or more"
    _raise_if(errors)
    return schemas.UserCreate(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        email=email.strip(),
        username=username.strip(),
        password=password,
    )


# --- groups ------------------------------------------------------------------

def _group_errors(body: Mapping[str, Any], partial: bool) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    def checked(field: str) -> bool:
        return not partial or field in body

    if checked("name"):
        name = body.get("name")
        if is_blank(name) or not isinstance(name, str) or len(name) > GROUP_NAME_MAX:
            errors["name"] = "Name must be 60 characters or less"
    if checked("about"):
        about = body.get("about")
        if not isinstance(about, str) or len(about) < GROUP_ABOUT_MIN:
            errors["about"] = "About must be 50 characters or more"
    if checked("type") and not is_valid_type(body.get("type")):
        errors["type"] = "Type must be 'Online' or 'In person'"
    if checked("private") and not isinstance(body.get("private"), bool):
        errors["private"] = "Private must be a boolean"
    for field, message in (("city", "City is required"), ("state", "State is required")):
        value = body.get(field)
        if checked(field) and (is_blank(value) or not isinstance(value, str) or len(value) > PLACE_MAX):
            errors[field] = message
    return errors


_GROUP_FIELDS = ("name", "about", "type", "private", "city", "state")


def validate_group_create(payload: Any) -> schemas.GroupCreate:
    body = _as_body(payload)
    _raise_if(_group_errors(body, partial=False))
    return schemas.GroupCreate(**{field: body[field] for field in _GROUP_FIELDS})


def validate_group_update(payload: Any) -> schemas.GroupUpdate:
    """Validate only the fields present; an explicit ``private: false`` is kept."""
    body = _as_body(payload)
    _raise_if(_group_errors(body, partial=True))
    return schemas.GroupUpdate(**{field: body[field] for field in _GROUP_FIELDS if field in body})


# --- venues ------------------------------------------------------------------

_VENUE_FIELDS = ("address", "city", "state", "lat", "lng")


def _venue_errors(body: Mapping[str, Any], partial: bool) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    def checked(field: str) -> bool:
        return not partial or field in body

    for field, message, limit in (
        ("address", "Street address is required", ADDRESS_MAX),
        ("city", "City is required", PLACE_MAX),
        ("state", "State is required", PLACE_MAX),
    ):
        value = body.get(field)
        if checked(field) and (is_blank(value) or not isinstance(value, str) or len(value) > limit):
            errors[field] = message
    lat = body.get("lat")
    if checked("lat") and not (is_number(lat) and -90 <= lat <= 90):
        errors["lat"] = "Latitude is not valid"
    lng = body.get("lng")
    if checked("lng") and not (is_number(lng) and -180 <= lng <= 180):
        errors["lng"] = "Longitude is not valid"
    return errors


def validate_venue_create(payload: Any) -> schemas.VenueCreate:
    body = _as_body(payload)
    _raise_if(_venue_errors(body, partial=False))
    return schemas.VenueCreate(**{field: body[field] for field in _VENUE_FIELDS})


def validate_venue_update(payload: Any) -> schemas.VenueUpdate:
    body = _as_body(payload)
    _raise_if(_venue_errors(body, partial=True))
    return schemas.VenueUpdate(**{field: body[field] for field in _VENUE_FIELDS if field in body})


# --- events ------------------------------------------------------------------

_EVENT_FIELDS = {
    "venueId": "venue_id",
    "name": "name",
    "type": "type",
    "capacity": "capacity",
    "price": "price",
    "description": "description",
    "startDate": "start_date",
    "endDate": "end_date",
}


def _event_errors(
    body: Mapping[str, Any],
    venue_ids: Iterable[int],
    partial: bool,
    now: datetime,
    current: Optional[models.Event] = None,
) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    allowed_venues = set(venue_ids)

    def checked(field: str) -> bool:
        return not partial or field in body

    venue_id = body.get("venueId")
    if "venueId" in body and venue_id is not None:
        if not is_integer(venue_id) or int(venue_id) not in allowed_venues:
            errors["venueId"] = "Venue does not exist"
    name = body.get("name")
    if checked("name") and (not isinstance(name, str) or len(name.strip()) < EVENT_NAME_MIN):
        errors["name"] = "Name must be at least 5 characters"
    elif checked("name") and len(name.strip()) > EVENT_NAME_MAX:
        errors["name"] = "Name must be 255 characters or less"
    if checked("type") and not is_valid_type(body.get("type")):
        errors["type"] = "Type must be Online or In person"
    if checked("capacity") and not is_integer(body.get("capacity")):
        errors["capacity"] = "Capacity must be an integer"
    price = body.get("price")
    if checked("price") and not (is_number(price) and price >= 0):
        errors["price"] = "Price is invalid"
    description = body.get("description")
    if checked("description") and (is_blank(description) or not isinstance(description, str)):
        errors["description"] = "Description is required"

    start = parse_datetime(body.get("startDate")) if "startDate" in body else None
    end = parse_datetime(body.get("endDate")) if "endDate" in body else None
    if checked("startDate") and (start is None or start <= now):
        errors["startDate"] = "Start date must be in the future"
    if checked("endDate") and end is None:
        errors["endDate"] = "End date is less than start date"

    # Ordering is checked against stored values for fields the body omits
    effective_start = start if "startDate" in body else (current.start_date if current else None)
    effective_end = end if "endDate" in body else (current.end_date if current else None)
    if (
        "endDate" not in errors
        and ("startDate" in body or "endDate" in body)
        and effective_start is not None
        and effective_end is not None
        and effective_end <= effective_start
    ):
        errors["endDate"] = "End date is less than start date"
    return errors


def _event_values(body: Mapping[str, Any], only_present: bool) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for key, attr in _EVENT_FIELDS.items():
        if only_present and key not in body:
            continue
        value = body.get(key)
        if key in ("startDate", "endDate"):
            value = parse_datetime(value)
        elif key in ("capacity", "venueId") and value is not None:
            value = int(value)
        elif key in ("name", "description"):
            value = value.strip()
        values[attr] = value
    return values


def validate_event_create(payload: Any, venue_ids: Iterable[int], now: Optional[datetime] = None) -> schemas.EventCreate:
    """Validate a new event; ``venue_ids`` are the venues of the event's group."""
    body = _as_body(payload)
    _raise_if(_event_errors(body, venue_ids, partial=False, now=now or utc_now()))
    return schemas.EventCreate(**_event_values(body, only_present=False))


def validate_event_update(
    payload: Any,
    venue_ids: Iterable[int],
    current: models.Event,
    now: Optional[datetime] = None,
) -> schemas.EventUpdate:
    body = _as_body(payload)
    _raise_if(_event_errors(body, venue_ids, partial=True, now=now or utc_now(), current=current))
    return schemas.EventUpdate(**_event_values(body, only_present=True))


def _query_int(raw: Optional[str], default: int) -> Optional[int]:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return None


def validate_event_query(params: Mapping[str, str]) -> schemas.EventQuery:
    """Validate ``GET /api/events`` query parameters.

    ``page`` is capped at 10 and ``size`` at 20; larger values are clamped
    rather than rejected.
    """
    errors: Dict[str, str] = {}
    page = _query_int(params.get("page"), 1)
    if page is None or page < 1:
        errors["page"] = "Page must be greater than or equal to 1"
    size = _query_int(params.get("size"), MAX_SIZE)
    if size is None or size < 1:
        errors["size"] = "Size must be greater than or equal to 1"
    name = params.get("name")
    if name is not None and not name.strip():
        errors["name"] = "Name must be a string"
    event_type = params.get("type")
    if event_type is not None and event_type not in ALL_TYPES:
        errors["type"] = "Type must be 'Online' or 'In Person'"
    start_raw = params.get("startDate")
    start_date = None
    if start_raw is not None:
        start_date = parse_datetime(start_raw)
        if start_date is None:
            errors["startDate"] = "Start date must be a valid datetime"
    _raise_if(errors)
    return schemas.EventQuery(
        page=min(page, MAX_PAGE),
        size=min(size, MAX_SIZE),
        name=name.strip() if name else None,
        type=event_type,
        start_date=start_date,
    )


# --- statuses ----------------------------------------------------------------

def _require_id(body: Mapping[str, Any], field: str, errors: Dict[str, str]) -> Optional[int]:
    value = body.get(field)
    if not is_integer(value):
        errors[field] = "User couldn't be found"
        return None
    return int(value)


def validate_member_reference(payload: Any) -> int:
    body = _as_body(payload)
    errors: Dict[str, str] = {}
    member_id = _require_id(body, "memberId", errors)
    _raise_if(errors)
    return member_id


def validate_membership_status(payload: Any) -> schemas.MembershipStatusUpdate:
    body = _as_body(payload)
    errors: Dict[str, str] = {}
    member_id = _require_id(body, "memberId", errors)
    status = body.get("status")
    if status == MEMBERSHIP_PENDING:
        errors["status"] = "Cannot change a membership status to pending"
    elif status not in (MEMBERSHIP_MEMBER, MEMBERSHIP_CO_HOST):
        errors["status"] = "Status must be 'member' or 'co-host'"
    _raise_if(errors)
    return schemas.MembershipStatusUpdate(member_id=member_id, status=status)


def validate_attendee_reference(payload: Any) -> int:
    body = _as_body(payload)
    errors: Dict[str, str] = {}
    user_id = _require_id(body, "userId", errors)
    _raise_if(errors)
    return user_id


def validate_attendance_status(payload: Any) -> schemas.AttendanceStatusUpdate:
    body = _as_body(payload)
    errors: Dict[str, str] = {}
    user_id = _require_id(body, "userId", errors)
    status = body.get("status")
    if status == ATTENDANCE_PENDING:
        errors["status"] = "Cannot change an attendance status to pending"
    elif status not in (ATTENDANCE_ATTENDING, ATTENDANCE_WAITLIST):
        errors["status"] = "Status must be 'attending' or 'waitlist'"
    _raise_if(errors)
    return schemas.AttendanceStatusUpdate(user_id=user_id, status=status)


# --- images ------------------------------------------------------------------

def validate_image(payload: Any) -> schemas.ImageCreate:
    body = _as_body(payload)
    errors: Dict[str, str] = {}
    url = body.get("url")
    if is_blank(url) or not isinstance(url, str):
        errors["url"] = "Url is required"
    preview = body.get("preview", False)
    if not isinstance(preview, bool):
        errors["preview"] = "Preview must be a boolean"
    _raise_if(errors)
    return schemas.ImageCreate(url=url.strip(), preview=preview)
