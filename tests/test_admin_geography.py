from choukwa.models import Wilaya, Daira, Mutamadiya


def test_create_wilaya_and_daira(client, world):
    response = client.post(
        "/api/admin/geography/wilayas",
        json={"name": "Gabès", "code": "51"},
        headers=world.admin_headers,
    )
    assert response.status_code == 201
    wilaya_id = response.json["id"]

    response = client.post(
        "/api/admin/geography/dairas",
        json={"name": "El Hamma", "wilaya_id": wilaya_id},
        headers=world.admin_headers,
    )
    assert response.status_code == 201
    assert Daira.query.filter_by(wilaya_id=wilaya_id).count() == 1


def test_duplicate_wilaya(client, world):
    response = client.post(
        "/api/admin/geography/wilayas", json={"name": "Tunis"}, headers=world.admin_headers
    )
    assert response.status_code == 409


def test_validation_messages(client, world):
    response = client.post(
        "/api/admin/geography/wilayas", json={"name": " "}, headers=world.admin_headers
    )
    assert response.status_code == 400
    assert "obligatoire" in response.json["message"]

    response = client.post(
        "/api/admin/geography/dairas",
        json={"name": "X", "wilaya_id": "abc"},
        headers=world.admin_headers,
    )
    assert response.status_code == 400

    response = client.post(
        "/api/admin/geography/dairas",
        json={"name": "X", "wilaya_id": 9999},
        headers=world.admin_headers,
    )
    assert response.status_code == 404


def test_mutamadiya_inherits_wilaya_of_daira(client, world):
    response = client.post(
        "/api/admin/geography/mutamadiyat",
        json={"name": "Sidi Bou Said", "daira_id": world.geo.carthage.id},
        headers=world.admin_headers,
    )
    assert response.status_code == 201
    assert response.json["wilaya_id"] == world.geo.tunis.id


def test_delete_parent_with_children_is_refused(client, world, db):
    db.session.add(
        Mutamadiya(name="Sidi Bou Said", daira_id=world.geo.carthage.id, wilaya_id=world.geo.tunis.id)
    )
    db.session.commit()

    response = client.delete(
        f"/api/admin/geography/wilayas/{world.geo.tunis.id}", headers=world.admin_headers
    )
    assert response.status_code == 400
    assert "Carthage" in response.json["message"]

    response = client.delete(
        f"/api/admin/geography/dairas/{world.geo.carthage.id}", headers=world.admin_headers
    )
    assert response.status_code == 400
    assert "Sidi Bou Said" in response.json["message"]


def test_delete_empty_daira(client, world):
    response = client.delete(
        f"/api/admin/geography/dairas/{world.geo.marsa.id}", headers=world.admin_headers
    )
    assert response.status_code == 200
    assert Daira.query.filter_by(name="La Marsa").first() is None


def test_update_wilaya(client, world):
    response = client.put(
        f"/api/admin/geography/wilayas/{world.geo.sfax.id}",
        json={"name": "Sfax (nouveau)"},
        headers=world.admin_headers,
    )
    assert response.status_code == 200
    assert Wilaya.query.filter_by(name="Sfax (nouveau)").count() == 1


def test_geography_requires_admin(client, world):
    response = client.get("/api/admin/geography/wilayas", headers=world.mp_headers)
    assert response.status_code == 403


def test_public_geography_lookups(client, world):
    response = client.get("/api/shared/geography")
    assert response.status_code == 200
    assert {w["name"] for w in response.json["wilayas"]} == {"Tunis", "Sfax"}

    response = client.get(f"/api/shared/wilayas/{world.geo.tunis.id}/dairas")
    assert [d["name"] for d in response.json] == ["Carthage", "La Marsa"]
