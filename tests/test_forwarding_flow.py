from choukwa.models import Complaint, ComplaintAuditLog, LocalDeputy, Notification


def _complaint(complaint_id):
    return Complaint.query.filter_by(id=complaint_id).one()


def _actions(complaint_id):
    return [
        e.action
        for e in ComplaintAuditLog.query.filter_by(complaint_id=complaint_id)
        .order_by(ComplaintAuditLog.id)
        .all()
    ]


def test_forward_candidates_cover_complaint_location(client, world, db, submit_complaint):
    db.session.add(
        LocalDeputy(name="Autre", wilaya_id=world.geo.sfax.id, daira_id=world.geo.sfax_ville.id)
    )
    db.session.commit()
    complaint_id = submit_complaint()

    response = client.get(
        f"/api/official/complaints/{complaint_id}/deputies", headers=world.mp_headers
    )
    assert response.status_code == 200
    assert [d["id"] for d in response.json] == [world.deputy.id]


def test_system_forward_hands_complaint_to_deputy(client, world, submit_complaint):
    complaint_id = submit_complaint()

    response = client.post(
        f"/api/official/complaints/{complaint_id}/forward",
        json={"deputy_id": world.deputy.id, "method": "system", "notes": "À traiter"},
        headers=world.mp_headers,
    )
    assert response.status_code == 200
    assert response.json["whatsapp_url"] is None

    complaint = _complaint(complaint_id)
    assert complaint.status == "forwarded"
    assert complaint.assigned_to == "local_deputy"
    assert complaint.local_deputy_id == world.deputy.id
    assert complaint.forwarded_to_deputy_id == world.deputy.id
    assert complaint.forwarding_method == "system"
    assert complaint.forwarded_at is not None
    assert _actions(complaint_id) == ["created", "forwarded_to_deputy"]
    assert Notification.query.filter_by(account_id=world.deputy_account.id).count() == 1

    # The deputy now owns it
    response = client.post(
        f"/api/official/complaints/{complaint_id}/reply",
        json={"reply": "Les travaux commencent lundi."},
        headers=world.deputy_headers,
    )
    assert response.status_code == 200
    assert _complaint(complaint_id).status == "replied"


def test_whatsapp_forward_returns_deep_link(client, world, submit_complaint):
    complaint_id = submit_complaint()

    response = client.post(
        f"/api/official/complaints/{complaint_id}/forward",
        json={"deputy_id": world.deputy.id, "method": "whatsapp"},
        headers=world.mp_headers,
    )
    assert response.status_code == 200
    assert response.json["whatsapp_url"].startswith("https://wa.me/21698765432?text=")

    complaint = _complaint(complaint_id)
    assert complaint.status == "forwarded"
    assert complaint.assigned_to == "mp"
    assert complaint.forwarding_method == "whatsapp"
    assert _actions(complaint_id) == ["created", "forwarded_via_whatsapp"]


def test_whatsapp_forward_without_number_changes_nothing(client, world, db, submit_complaint):
    world.deputy.whatsapp_number = None
    world.deputy.phone = None
    db.session.commit()
    complaint_id = submit_complaint()

    response = client.post(
        f"/api/official/complaints/{complaint_id}/forward",
        json={"deputy_id": world.deputy.id, "method": "whatsapp"},
        headers=world.mp_headers,
    )
    assert response.status_code == 400

    complaint = _complaint(complaint_id)
    assert complaint.status == "pending"
    assert complaint.forwarded_to is None
    assert complaint.forwarded_to_deputy_id is None
    assert _actions(complaint_id) == ["created"]


def test_forward_to_deputy_outside_location_is_refused(client, world, db, submit_complaint):
    other = LocalDeputy(
        name="Autre", wilaya_id=world.geo.sfax.id, daira_id=world.geo.sfax_ville.id
    )
    db.session.add(other)
    db.session.commit()
    complaint_id = submit_complaint()

    response = client.post(
        f"/api/official/complaints/{complaint_id}/forward",
        json={"deputy_id": other.id},
        headers=world.mp_headers,
    )
    assert response.status_code == 400
    assert _complaint(complaint_id).status == "pending"


def test_forward_unknown_method_or_deputy(client, world, submit_complaint):
    complaint_id = submit_complaint()
    url = f"/api/official/complaints/{complaint_id}/forward"

    response = client.post(
        url, json={"deputy_id": world.deputy.id, "method": "fax"}, headers=world.mp_headers
    )
    assert response.status_code == 400

    response = client.post(url, json={"deputy_id": 9999}, headers=world.mp_headers)
    assert response.status_code == 404

    response = client.post(url, json={}, headers=world.mp_headers)
    assert response.status_code == 400


def test_local_deputy_cannot_forward(client, world, submit_complaint):
    complaint_id = submit_complaint(category="municipal", daira_id=world.geo.carthage.id)
    response = client.post(
        f"/api/official/complaints/{complaint_id}/forward",
        json={"deputy_id": world.deputy.id},
        headers=world.deputy_headers,
    )
    assert response.status_code == 403


def test_replied_complaint_cannot_be_forwarded(client, world, submit_complaint):
    complaint_id = submit_complaint()
    client.post(
        f"/api/official/complaints/{complaint_id}/reply",
        json={"reply": "Réglé."},
        headers=world.mp_headers,
    )
    response = client.post(
        f"/api/official/complaints/{complaint_id}/forward",
        json={"deputy_id": world.deputy.id},
        headers=world.mp_headers,
    )
    assert response.status_code == 409


def test_forward_to_ministry_generates_letter(client, world, submit_complaint):
    complaint_id = submit_complaint(category="health")

    response = client.post(
        f"/api/official/complaints/{complaint_id}/forward-ministry",
        headers=world.mp_headers,
    )
    assert response.status_code == 200
    assert response.json["ministry"] == "Ministère de la Santé"
    assert "Ministère de la Santé" in response.json["letter"]

    complaint = _complaint(complaint_id)
    assert complaint.status == "forwarded"
    assert complaint.forwarded_to == "Ministère de la Santé"
    assert complaint.official_letter == response.json["letter"]
    assert _actions(complaint_id) == ["created", "forwarded_to_ministry"]


def test_mp_loses_hand_after_system_forward(client, world, submit_complaint):
    complaint_id = submit_complaint()
    client.post(
        f"/api/official/complaints/{complaint_id}/forward",
        json={"deputy_id": world.deputy.id, "method": "system"},
        headers=world.mp_headers,
    )
    response = client.post(
        f"/api/official/complaints/{complaint_id}/view", headers=world.deputy_headers
    )
    assert response.status_code == 200
    assert _complaint(complaint_id).status == "viewed"

    base = f"/api/official/complaints/{complaint_id}"
    for path, payload in (
        ("/cabinet", None),
        ("/reply", {"reply": "Réponse du député."}),
        ("/forward", {"deputy_id": world.deputy.id, "method": "whatsapp"}),
        ("/forward-ministry", None),
    ):
        response = client.post(base + path, json=payload, headers=world.mp_headers)
        assert response.status_code == 403, path

    # Still readable, with nothing left to do
    response = client.get(base, headers=world.mp_headers)
    assert response.status_code == 200
    assert response.json["allowed_statuses"] == []

    complaint = _complaint(complaint_id)
    assert complaint.status == "viewed"
    assert complaint.assigned_to == "local_deputy"
