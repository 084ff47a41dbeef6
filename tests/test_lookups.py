from choukwa.models import MP, Mutamadiya


def test_categories_and_statuses(client):
    response = client.get("/api/shared/categories")
    assert response.status_code == 200
    categories = response.json["categories"]
    assert len(categories) == 21
    municipal = [c for c in categories if c["municipal"]]
    assert [c["id"] for c in municipal] == ["municipal"]
    assert municipal[0]["ministry"] is None
    assert {s["id"] for s in response.json["statuses"]} >= {"pending", "replied", "resolved"}


def test_geography_cascade(client, geo, db):
    db.session.add(
        Mutamadiya(name="Sidi Bou Said", daira_id=geo.carthage.id, wilaya_id=geo.tunis.id)
    )
    db.session.commit()

    response = client.get(f"/api/shared/wilayas/{geo.tunis.id}/dairas")
    assert [d["name"] for d in response.json] == ["Carthage", "La Marsa"]

    response = client.get(f"/api/shared/dairas/{geo.carthage.id}/mutamadiyat")
    assert [m["name"] for m in response.json] == ["Sidi Bou Said"]

    response = client.get("/api/shared/geography")
    assert len(response.json["wilayas"]) == 2
    assert len(response.json["dairas"]) == 3


def test_mp_directory(client, world, db):
    db.session.add_all(
        [
            MP(name="Sami Gharbi", wilaya="Sfax", wilaya_id=world.geo.sfax.id, is_active=True),
            MP(name="Inactive Member", wilaya="Tunis", wilaya_id=world.geo.tunis.id, is_active=False),
        ]
    )
    db.session.commit()

    response = client.get("/api/shared/mps")
    assert [m["name"] for m in response.json] == ["Amina Ben Salah", "Sami Gharbi"]

    response = client.get(f"/api/shared/mps?wilaya_id={world.geo.sfax.id}")
    assert [m["name"] for m in response.json] == ["Sami Gharbi"]

    response = client.get("/api/shared/mps?search=amina")
    assert len(response.json) == 1

    response = client.get(f"/api/shared/mps/{world.mp.id}")
    assert response.json["wilaya"] == "Tunis"

    response = client.get("/api/shared/mps/999")
    assert response.status_code == 404
