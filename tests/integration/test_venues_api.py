VENUE = {"address": "1 Park Ave", "city": "Denver", "state": "CO", "lat": 39.7, "lng": -104.9}


def test_list_venues_requires_host(client, group_with_roles, venue_factory, auth_headers):
    ctx = group_with_roles
    gid = ctx["group"].id
    venue = venue_factory(ctx["group"])

    assert client.get(f"/api/groups/{gid}/venues").status_code == 401
    assert client.get(f"/api/groups/{gid}/venues", headers=auth_headers(ctx["member"])).status_code == 403
    r = client.get(f"/api/groups/{gid}/venues", headers=auth_headers(ctx["co_host"]))
    assert r.status_code == 200
    assert r.json() == {
        "Venues": [
            {"id": venue.id, "groupId": gid, "address": "123 Main St", "city": "Denver", "state": "CO", "lat": 39.74, "lng": -104.99}
        ]
    }


def test_create_venue(client, group_with_roles, auth_headers):
    ctx = group_with_roles
    gid = ctx["group"].id
    r = client.post(f"/api/groups/{gid}/venues", json=VENUE, headers=auth_headers(ctx["member"]))
    assert r.status_code == 403

    r = client.post(f"/api/groups/{gid}/venues", json=VENUE, headers=auth_headers(ctx["organizer"]))
    assert r.status_code == 200
    body = r.json()
    assert body["groupId"] == gid
    assert body["address"] == "1 Park Ave"

    r = client.post(f"/api/groups/{gid}/venues", json={**VENUE, "lat": 100, "city": ""}, headers=auth_headers(ctx["organizer"]))
    assert r.status_code == 400
    assert r.json()["errors"] == {"city": "City is required", "lat": "Latitude is not valid"}

    assert client.post("/api/groups/9999/venues", json=VENUE, headers=auth_headers(ctx["organizer"])).status_code == 404


def test_update_venue(client, group_with_roles, venue_factory, auth_headers):
    ctx = group_with_roles
    venue = venue_factory(ctx["group"])

    r = client.put("/api/venues/9999", json={"city": "Aspen"}, headers=auth_headers(ctx["organizer"]))
    assert r.status_code == 404
    assert r.json()["message"] == "Venue couldn't be found"

    r = client.put(f"/api/venues/{venue.id}", json={"city": "Aspen"}, headers=auth_headers(ctx["outsider"]))
    assert r.status_code == 403

    r = client.put(f"/api/venues/{venue.id}", json={"city": "Aspen", "lng": 10.5}, headers=auth_headers(ctx["co_host"]))
    assert r.status_code == 200
    body = r.json()
    assert body["city"] == "Aspen"
    assert body["lng"] == 10.5
    assert body["address"] == "123 Main St"
