from datetime import datetime

import pytest

from meetup.api import validation
from meetup.api.errors import ValidationFailed

NOW = datetime(2030, 1, 1, 12, 0, 0)
ABOUT = "x" * 50


def _errors(fn, *args, **kwargs):
    with pytest.raises(ValidationFailed) as exc:
        fn(*args, **kwargs)
    assert exc.value.status_code == 400
    return exc.value.errors


def _group_body(**overrides):
    body = {"name": "Book Club", "about": ABOUT, "type": "Online", "private": True, "city": "Boston", "state": "MA"}
    body.update(overrides)
    return body


def _event_body(**overrides):
    body = {
        "venueId": None,
        "name": "Reading Night",
        "type": "In person",
        "capacity": 10,
        "price": 18.5,
        "description": "Bring a book.",
        "startDate": "2030-02-01 19:00:00",
        "endDate": "2030-02-01 21:00:00",
    }
    body.update(overrides)
    return body


def test_group_create_collects_every_error():
    errors = _errors(validation.validate_group_create, {"name": "n" * 61, "about": "short", "type": "Hybrid", "private": "yes"})
    assert errors == {
        "name": "Name must be 60 characters or less",
        "about": "About must be 50 characters or more",
        "type": "Type must be 'Online' or 'In person'",
        "private": "Private must be a boolean",
        "city": "City is required",
        "state": "State is required",
    }


def test_group_create_returns_schema():
    group = validation.validate_group_create(_group_body())
    assert group.name == "Book Club"
    assert group.private is True


def test_group_update_checks_only_present_fields():
    update = validation.validate_group_update({"private": False})
    assert update.model_dump(exclude_unset=True) == {"private": False}
    errors = _errors(validation.validate_group_update, {"type": "Virtual"})
    assert list(errors) == ["type"]


def test_private_must_be_a_real_boolean():
    errors = _errors(validation.validate_group_create, _group_body(private="true"))
    assert errors == {"private": "Private must be a boolean"}


def test_body_must_be_an_object():
    errors = _errors(validation.validate_group_create, None)
    assert "body" in errors


def test_signup_rules():
    errors = _errors(
        validation.validate_signup,
        {"email": "nope", "username": "a@b.io", "firstName": "", "password": "123"},
    )
    assert errors == {
        "email": "Invalid email",
        "username": "Username cannot be an email",
        "firstName": "First Name is required",
        "lastName": "Last Name is required",
        "password": "Password must be 6 characters or more",
    }
    assert _errors(validation.validate_signup, {"username": "abc"})["username"] == "Username is required"


def test_login_rules():
    errors = _errors(validation.validate_login, {"credential": " "})
    assert errors == {"credential": "Email or username is required", "password": "Password is required"}


def test_venue_ranges():
    errors = _errors(
        validation.validate_venue_create,
        {"address": "", "city": "Boston", "state": "MA", "lat": 91, "lng": "east"},
    )
    assert errors == {
        "address": "Street address is required",
        "lat": "Latitude is not valid",
        "lng": "Longitude is not valid",
    }
    venue = validation.validate_venue_update({"lat": -90})
    assert venue.model_dump(exclude_unset=True) == {"lat": -90.0}


def test_event_create_valid():
    event = validation.validate_event_create(_event_body(venueId=3), venue_ids=[3], now=NOW)
    assert event.venue_id == 3
    assert event.start_date == datetime(2030, 2, 1, 19, 0, 0)
    assert event.price == 18.5


def test_event_create_errors():
    body = _event_body(
        venueId=99,
        name="Hey",
        type="Hybrid",
        capacity=2.5,
        price=-1,
        description="",
        startDate="2029-01-01 10:00:00",
        endDate="2028-01-01 10:00:00",
    )
    errors = _errors(validation.validate_event_create, body, venue_ids=[1], now=NOW)
    assert errors == {
        "venueId": "Venue does not exist",
        "name": "Name must be at least 5 characters",
        "type": "Type must be Online or In person",
        "capacity": "Capacity must be an integer",
        "price": "Price is invalid",
        "description": "Description is required",
        "startDate": "Start date must be in the future",
        "endDate": "End date is less than start date",
    }


def test_event_price_rejects_boolean():
    errors = _errors(validation.validate_event_create, _event_body(price=True), venue_ids=[], now=NOW)
    assert errors == {"price": "Price is invalid"}


def test_event_timezone_offsets_normalize_to_utc():
    event = validation.validate_event_create(
        _event_body(startDate="2030-02-01T19:00:00+02:00", endDate="2030-02-01T21:00:00Z"),
        venue_ids=[],
        now=NOW,
    )
    assert event.start_date == datetime(2030, 2, 1, 17, 0, 0)
    assert event.end_date == datetime(2030, 2, 1, 21, 0, 0)


class _StoredEvent:
    start_date = datetime(2030, 3, 1, 10, 0, 0)
    end_date = datetime(2030, 3, 1, 12, 0, 0)


def test_event_update_rechecks_ordering_against_stored_dates():
    errors = _errors(
        validation.validate_event_update,
        {"endDate": "2030-03-01 09:00:00"},
        venue_ids=[],
        current=_StoredEvent(),
        now=NOW,
    )
    assert errors == {"endDate": "End date is less than start date"}

    update = validation.validate_event_update({"name": "Renamed event"}, venue_ids=[], current=_StoredEvent(), now=NOW)
    assert update.model_dump(exclude_unset=True) == {"name": "Renamed event"}


def test_event_query_defaults_and_caps():
    query = validation.validate_event_query({})
    assert (query.page, query.size) == (1, 20)
    query = validation.validate_event_query({"page": "50", "size": "100", "type": "Online"})
    assert (query.page, query.size, query.type) == (10, 20, "Online")


def test_event_query_errors():
    errors = _errors(
        validation.validate_event_query,
        {"page": "0", "size": "abc", "type": "Virtual", "startDate": "tomorrow"},
    )
    assert errors == {
        "page": "Page must be greater than or equal to 1",
        "size": "Size must be greater than or equal to 1",
        "type": "Type must be 'Online' or 'In Person'",
        "startDate": "Start date must be a valid datetime",
    }


def test_status_changes_cannot_target_pending():
    errors = _errors(validation.validate_membership_status, {"memberId": 2, "status": "pending"})
    assert errors == {"status": "Cannot change a membership status to pending"}
    errors = _errors(validation.validate_attendance_status, {"userId": 2, "status": "pending"})
    assert errors == {"status": "Cannot change an attendance status to pending"}
    change = validation.validate_membership_status({"memberId": 2, "status": "co-host"})
    assert (change.member_id, change.status) == (2, "co-host")


def test_member_reference_requires_integer():
    errors = _errors(validation.validate_member_reference, {"memberId": "two"})
    assert errors == {"memberId": "User couldn't be found"}
    assert validation.validate_attendee_reference({"userId": 4}) == 4


def test_image_rules():
    errors = _errors(validation.validate_image, {"preview": "yes"})
    assert errors == {"url": "Url is required", "preview": "Preview must be a boolean"}
    image = validation.validate_image({"url": "https://img.example/a.png"})
    assert image.preview is False


@pytest.mark.parametrize("bad_type", [[], {}, ["Online"], 1])
def test_non_string_type_is_a_field_error(bad_type):
    errors = _errors(validation.validate_group_create, _group_body(type=bad_type))
    assert errors == {"type": "Type must be 'Online' or 'In person'"}
    errors = _errors(validation.validate_event_create, _event_body(type=bad_type), venue_ids=[], now=NOW)
    assert errors == {"type": "Type must be Online or In person"}


@pytest.mark.parametrize("bad_status", [[], {}, None, 2])
def test_non_string_status_is_a_field_error(bad_status):
    errors = _errors(validation.validate_membership_status, {"memberId": 2, "status": bad_status})
    assert errors == {"status": "Status must be 'member' or 'co-host'"}
    errors = _errors(validation.validate_attendance_status, {"userId": 2, "status": bad_status})
    assert errors == {"status": "Status must be 'attending' or 'waitlist'"}


def test_oversized_integers_are_rejected():
    huge = 10**20
    assert _errors(validation.validate_member_reference, {"memberId": huge}) == {"memberId": "User couldn't be found"}
    assert _errors(validation.validate_attendee_reference, {"userId": float(huge)}) == {"userId": "User couldn't be found"}
    errors = _errors(
        validation.validate_event_create,
        _event_body(venueId=huge, capacity=validation.MAX_DB_INT + 1),
        venue_ids=[1],
        now=NOW,
    )
    assert errors == {"venueId": "Venue does not exist", "capacity": "Capacity must be an integer"}
    assert validation.is_integer(validation.MAX_DB_INT)


@pytest.mark.parametrize("price", [float("inf"), float("nan"), 10**400])
def test_non_finite_price_is_invalid(price):
    errors = _errors(validation.validate_event_create, _event_body(price=price), venue_ids=[], now=NOW)
    assert errors == {"price": "Price is invalid"}


def test_non_finite_coordinates_are_invalid():
    errors = _errors(validation.validate_venue_update, {"lat": float("nan"), "lng": float("-inf")})
    assert errors == {"lat": "Latitude is not valid", "lng": "Longitude is not valid"}


def test_signup_enforces_column_lengths():
    errors = _errors(
        validation.validate_signup,
        {
            "email": "a" * 260 + "@b.io",
            "username": "u" * 31,
            "firstName": "F" * 51,
            "lastName": "L" * 51,
            "password": "secret",
        },
    )
    assert errors == {
        "email": "Email must be 256 characters or less",
        "username": "Username must be 30 characters or less",
        "firstName": "First Name must be 50 characters or less",
        "lastName": "Last Name must be 50 characters or less",
    }


def test_place_fields_enforce_column_lengths():
    errors = _errors(validation.validate_group_update, {"city": "c" * 101})
    assert errors == {"city": "City is required"}
    errors = _errors(validation.validate_venue_update, {"address": "a" * 256})
    assert errors == {"address": "Street address is required"}
    errors = _errors(validation.validate_event_update, {"name": "n" * 256}, venue_ids=[], current=_StoredEvent(), now=NOW)
    assert errors == {"name": "Name must be 255 characters or less"}
