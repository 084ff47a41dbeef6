from choukwa.models import Notification


def test_official_is_notified_of_new_complaint(client, world, submit_complaint):
    complaint_id = submit_complaint()

    response = client.get("/api/official/notifications", headers=world.mp_headers)
    assert response.status_code == 200
    assert response.json["unread"] == 1
    assert response.json["data"][0]["complaint_id"] == complaint_id

    # The local deputy only hears about municipal complaints
    response = client.get("/api/official/notifications", headers=world.deputy_headers)
    assert response.json["total"] == 0


def test_citizen_notified_on_reply(client, world, submit_complaint):
    complaint_id = submit_complaint()
    client.post(
        f"/api/official/complaints/{complaint_id}/reply",
        json={"reply": "Nous avons saisi la direction régionale."},
        headers=world.mp_headers,
    )

    response = client.get("/api/citizen/notifications", headers=world.citizen_headers)
    assert response.json["unread"] == 1
    notification_id = response.json["data"][0]["id"]

    response = client.post(
        f"/api/citizen/notifications/{notification_id}/read",
        headers=world.citizen_headers,
    )
    assert response.status_code == 200

    response = client.get("/api/citizen/notifications", headers=world.citizen_headers)
    assert response.json["unread"] == 0
    assert response.json["data"][0]["read"] is True


def test_read_all_only_touches_own(client, world, submit_complaint):
    submit_complaint()
    submit_complaint(content="Éclairage public en panne dans la rue.")
    client.post(
        "/api/citizen/notifications/read-all", headers=world.citizen_headers
    )
    assert Notification.query.filter_by(read=False).count() == 2

    response = client.post(
        "/api/official/notifications/read-all", headers=world.mp_headers
    )
    assert response.json["updated"] == 2
    assert Notification.query.filter_by(read=False).count() == 0


def test_cannot_read_someone_elses_notification(client, world, submit_complaint):
    submit_complaint()
    notification = Notification.query.first()
    response = client.post(
        f"/api/citizen/notifications/{notification.id}/read",
        headers=world.citizen_headers,
    )
    assert response.status_code == 404
