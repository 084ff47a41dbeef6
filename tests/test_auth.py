import pytest
from choukwa.models import Account
from choukwa.extensions import bcrypt


def test_app_health(client):
    response = client.get("/api/auth/health")
    assert response.status_code == 200
    assert response.json["status"] == "healthy"


def test_login_success(client, make_account):
    account = make_account("citizen", password="secret123", phone="98765432")

    response = client.post(
        "/api/auth/login", json={"phone": "98 765 432", "password": "secret123"}
    )
    assert response.status_code == 200
    assert "token" in response.json
    assert response.json["user"]["id"] == account.id


def test_login_invalid_credentials(client, make_account):
    make_account("citizen", password="secret123", phone="98765432")
    response = client.post(
        "/api/auth/login",
        json={"phone": "98765432", "password": "wrong"},
    )
    assert response.status_code == 401


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"phone": "98765432"})
    assert response.status_code == 400


def test_login_inactive_account(client, make_account, db):
    account = make_account("citizen", password="secret123", phone="98765432")
    account.active = False
    db.session.commit()

    response = client.post(
        "/api/auth/login", json={"phone": "98765432", "password": "secret123"}
    )
    assert response.status_code == 403


def test_register_citizen(client, geo):
    response = client.post(
        "/api/auth/register",
        json={
            "phone": "55 123 456",
            "name": "Salma",
            "password": "secret123",
            "wilaya_id": geo.tunis.id,
        },
    )
    assert response.status_code == 201
    assert "token" in response.json

    account = Account.query.filter_by(phone="55123456").one()
    assert account.role == "citizen"
    assert bcrypt.check_password_hash(account.password_hash, "secret123")


def test_register_duplicate_phone(client, make_account):
    make_account("citizen", phone="55123456")
    response = client.post(
        "/api/auth/register",
        json={"phone": "55123456", "name": "Salma", "password": "secret123"},
    )
    assert response.status_code == 409


@pytest.mark.parametrize(
    "payload",
    [
        {"phone": "12", "name": "Salma", "password": "secret123"},
        {"phone": "55123456", "name": "", "password": "secret123"},
        {"phone": "55123456", "name": "Salma", "password": "123"},
    ],
)
def test_register_validation(client, payload):
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 400


def test_me_endpoint(client, world):
    response = client.get("/api/auth/me", headers=world.mp_headers)
    assert response.status_code == 200
    assert response.json["role"] == "mp"
    assert response.json["official_id"] == world.mp.id


def test_update_me(client, world):
    response = client.put(
        "/api/auth/me",
        json={"name": "Nouveau Nom", "wilaya_id": world.geo.sfax.id},
        headers=world.citizen_headers,
    )
    assert response.status_code == 200
    assert response.json["name"] == "Nouveau Nom"
    assert response.json["wilaya_id"] == world.geo.sfax.id


def test_logout_revokes_token(client, world):
    response = client.post("/api/auth/logout", headers=world.citizen_headers)
    assert response.status_code == 200

    response = client.get("/api/auth/me", headers=world.citizen_headers)
    assert response.status_code == 401
