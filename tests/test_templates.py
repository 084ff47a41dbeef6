from choukwa.models import ReplyTemplate


def test_template_crud(client, world):
    response = client.post(
        "/api/official/templates",
        json={"title": "Rendez-vous", "content": "Je vous propose un rendez-vous.", "category": "social"},
        headers=world.mp_headers,
    )
    assert response.status_code == 201
    template_id = response.json["id"]

    response = client.put(
        f"/api/official/templates/{template_id}",
        json={"title": "Rendez-vous au bureau"},
        headers=world.deputy_headers,
    )
    assert response.status_code == 200
    assert response.json["title"] == "Rendez-vous au bureau"

    response = client.delete(
        f"/api/official/templates/{template_id}", headers=world.mp_headers
    )
    assert response.status_code == 200
    assert ReplyTemplate.query.count() == 0


def test_defaults_listed_first_and_protected(client, world, db):
    default = ReplyTemplate(title="Accusé de réception", content="Bien reçu.", is_default=True)
    custom = ReplyTemplate(title="A - perso", content="Texte")
    db.session.add_all([default, custom])
    db.session.commit()

    response = client.get("/api/official/templates", headers=world.mp_headers)
    assert [t["title"] for t in response.json] == ["Accusé de réception", "A - perso"]

    response = client.delete(
        f"/api/official/templates/{default.id}", headers=world.mp_headers
    )
    assert response.status_code == 409
    assert ReplyTemplate.query.count() == 2


def test_template_validation(client, world):
    response = client.post(
        "/api/official/templates", json={"title": "Vide"}, headers=world.mp_headers
    )
    assert response.status_code == 400

    response = client.post(
        "/api/official/templates",
        json={"title": "T", "content": "C", "category": "weather"},
        headers=world.mp_headers,
    )
    assert response.status_code == 400


def test_citizens_have_no_templates(client, world):
    response = client.get("/api/official/templates", headers=world.citizen_headers)
    assert response.status_code == 403
