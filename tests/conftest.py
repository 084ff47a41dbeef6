import pytest
from types import SimpleNamespace
from flask_jwt_extended import create_access_token
from choukwa import create_app
from choukwa.config import TestConfig
from choukwa.extensions import db as _db, bcrypt
from choukwa.models import Account, Wilaya, Daira, MP, LocalDeputy
from choukwa.utils.session import SessionContext


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


def headers_for(account):
    token = create_access_token(
        identity=str(account.id),
        additional_claims=SessionContext.from_account(account).claims(),
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_account(db):
    counter = {"n": 0}

    def _make(role="citizen", password="secret123", **kwargs):
        counter["n"] += 1
        account = Account(
            phone=kwargs.pop("phone", f"2000{counter['n']:04d}"),
            name=kwargs.pop("name", f"{role} {counter['n']}"),
            password_hash=bcrypt.generate_password_hash(password).decode("utf-8"),
            role=role,
            active=True,
            **kwargs,
        )
        db.session.add(account)
        db.session.commit()
        return account

    return _make


@pytest.fixture
def geo(db):
    tunis = Wilaya(name="Tunis", code="11")
    sfax = Wilaya(name="Sfax", code="34")
    db.session.add_all([tunis, sfax])
    db.session.flush()

    carthage = Daira(name="Carthage", wilaya_id=tunis.id)
    marsa = Daira(name="La Marsa", wilaya_id=tunis.id)
    sfax_ville = Daira(name="Sfax Ville", wilaya_id=sfax.id)
    db.session.add_all([carthage, marsa, sfax_ville])
    db.session.commit()

    return SimpleNamespace(
        tunis=tunis, sfax=sfax, carthage=carthage, marsa=marsa, sfax_ville=sfax_ville
    )


@pytest.fixture
def world(db, geo, make_account):
    """One MP and one local deputy in Tunis, with their accounts, a citizen and an admin."""
    mp = MP(name="Amina Ben Salah", wilaya="Tunis", wilaya_id=geo.tunis.id, is_active=True)
    deputy = LocalDeputy(
        name="Karim Trabelsi",
        wilaya_id=geo.tunis.id,
        daira_id=geo.carthage.id,
        phone="22 333 444",
        whatsapp_number="+216 98 765 432",
        is_active=True,
    )
    db.session.add_all([mp, deputy])
    db.session.commit()

    citizen = make_account("citizen", wilaya_id=geo.tunis.id)
    mp_account = make_account("mp", mp_id=mp.id, name=mp.name)
    deputy_account = make_account("local_deputy", local_deputy_id=deputy.id, name=deputy.name)
    admin = make_account("admin")

    return SimpleNamespace(
        geo=geo,
        mp=mp,
        deputy=deputy,
        citizen=citizen,
        mp_account=mp_account,
        deputy_account=deputy_account,
        admin=admin,
        citizen_headers=headers_for(citizen),
        mp_headers=headers_for(mp_account),
        deputy_headers=headers_for(deputy_account),
        admin_headers=headers_for(admin),
    )


@pytest.fixture
def submit_complaint(client, world):
    def _submit(category="health", daira_id=None, content="La route principale est fermée depuis un mois."):
        payload = {
            "content": content,
            "category": category,
            "wilaya_id": world.geo.tunis.id,
        }
        if daira_id:
            payload["daira_id"] = daira_id
        response = client.post(
            "/api/citizen/complaints", json=payload, headers=world.citizen_headers
        )
        assert response.status_code == 201, response.json
        return response.json["complaint"]["id"]

    return _submit


@pytest.fixture
def auth_headers(app):
    """Authorization header factory for any account"""
    return headers_for
