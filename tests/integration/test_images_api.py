from meetup.db import models


def _group_image(db_session, group):
    image = models.GroupImage(group_id=group.id, url="https://img/g.png", preview=True)
    db_session.add(image)
    db_session.commit()
    db_session.refresh(image)
    return image


def _event_image(db_session, event):
    image = models.EventImage(event_id=event.id, url="https://img/e.png", preview=True)
    db_session.add(image)
    db_session.commit()
    db_session.refresh(image)
    return image


def test_delete_group_image(client, db_session, group_with_roles, auth_headers):
    ctx = group_with_roles
    image = _group_image(db_session, ctx["group"])
    image_id = image.id

    assert client.delete(f"/api/group-images/{image_id}").status_code == 401
    assert client.delete(f"/api/group-images/{image_id}", headers=auth_headers(ctx["member"])).status_code == 403

    r = client.delete(f"/api/group-images/{image_id}", headers=auth_headers(ctx["co_host"]))
    assert r.status_code == 200
    assert r.json() == {"message": "Successfully deleted", "statusCode": 200}

    r = client.delete(f"/api/group-images/{image_id}", headers=auth_headers(ctx["organizer"]))
    assert r.status_code == 404
    assert r.json() == {"message": "Group Image couldn't be found", "statusCode": 404}


def test_delete_event_image(client, db_session, group_with_roles, event_factory, attendance_factory, auth_headers):
    ctx = group_with_roles
    event = event_factory(ctx["group"])
    attendance_factory(event, ctx["member"], "attending")
    image = _event_image(db_session, event)
    image_id = image.id

    # attendees may upload event images but only hosts delete them
    assert client.delete(f"/api/event-images/{image_id}", headers=auth_headers(ctx["member"])).status_code == 403

    r = client.delete(f"/api/event-images/{image_id}", headers=auth_headers(ctx["organizer"]))
    assert r.status_code == 200
    assert r.json() == {"message": "Successfully deleted", "statusCode": 200}

    r = client.delete(f"/api/event-images/{image_id}", headers=auth_headers(ctx["organizer"]))
    assert r.status_code == 404
    assert r.json()["message"] == "Event Image couldn't be found"
