from datetime import datetime, timedelta
from choukwa.models import Complaint


def test_mp_report_counts_own_complaints(client, world, submit_complaint):
    submit_complaint(category="health")
    replied = submit_complaint(category="education", content="Classe surchargée au collège.")
    submit_complaint(category="municipal", daira_id=world.geo.carthage.id)
    client.post(
        f"/api/official/complaints/{replied}/reply",
        json={"reply": "Un enseignant sera affecté."},
        headers=world.mp_headers,
    )

    response = client.get("/api/official/report", headers=world.mp_headers)
    assert response.status_code == 200
    summary = response.json["summary"]
    assert summary["total"] == 2
    assert summary["replied"] == 1
    assert summary["response_rate"] == 50
    assert len(response.json["monthly"]) == 6
    assert response.json["monthly"][-1]["count"] == 2


def test_report_period_filter(client, world, db, submit_complaint):
    complaint_id = submit_complaint()
    complaint = Complaint.query.filter_by(id=complaint_id).one()
    complaint.created_at = datetime.utcnow() - timedelta(days=400)
    db.session.commit()

    response = client.get("/api/official/report?period=week", headers=world.mp_headers)
    assert response.json["summary"]["total"] == 0

    response = client.get("/api/official/report?period=all", headers=world.mp_headers)
    assert response.json["summary"]["total"] == 1
    assert response.json["summary"]["overdue"] == 1


def test_invalid_period(client, world):
    response = client.get("/api/official/report?period=decade", headers=world.mp_headers)
    assert response.status_code == 400


def test_admin_report_by_wilaya(client, world, submit_complaint):
    submit_complaint()
    response = client.get("/api/admin/report", headers=world.admin_headers)
    assert response.status_code == 200
    assert response.json["by_location"][0]["name"] == "Tunis"
    assert response.json["officials"]["mps"] == 1
    assert response.json["officials"]["local_deputies"] == 1

    response = client.get("/api/admin/report?group_by=mutamadiya", headers=world.admin_headers)
    assert response.status_code == 400


def test_report_with_no_complaints(client, world):
    response = client.get("/api/official/report", headers=world.deputy_headers)
    assert response.status_code == 200
    assert response.json["summary"]["response_rate"] == 0
