import pytest

from meetup.utils import role_permissions as rp


def test_role_ranking_order():
    assert rp.role_rank("organizer") > rp.role_rank("co-host") > rp.role_rank("member") > rp.role_rank("pending")
    assert rp.role_rank(None) == -1
    assert rp.role_rank("stranger") == -1


@pytest.mark.parametrize(
    "role,minimum,expected",
    [
        ("organizer", "co-host", True),
        ("co-host", "co-host", True),
        ("member", "co-host", False),
        ("member", "member", True),
        ("pending", "member", False),
        (None, "pending", False),
    ],
)
def test_role_at_least(role, minimum, expected):
    assert rp.role_at_least(role, minimum) is expected


def test_role_at_least_rejects_unknown_minimum():
    with pytest.raises(ValueError, match="Unknown role"):
        rp.role_at_least("member", "admin")


def test_host_and_manage_roles():
    assert rp.role_allows_host("organizer")
    assert rp.role_allows_host("co-host")
    assert not rp.role_allows_host("member")
    assert rp.role_allows_manage("organizer")
    assert not rp.role_allows_manage("co-host")


def test_status_grants():
    # approving a request needs a host, promoting to co-host needs the organizer
    assert rp.role_can_grant_status("co-host", "member")
    assert rp.role_can_grant_status("organizer", "member")
    assert not rp.role_can_grant_status("member", "member")
    assert rp.role_can_grant_status("organizer", "co-host")
    assert not rp.role_can_grant_status("co-host", "co-host")
    assert not rp.role_can_grant_status("organizer", "pending")
