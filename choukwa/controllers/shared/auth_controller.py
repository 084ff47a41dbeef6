import logging
from flask import request, jsonify
from flask_jwt_extended import create_access_token, get_jwt
from sqlalchemy import text
from choukwa.extensions import bcrypt, db
from choukwa.models import Account, TokenBlocklist
from choukwa.services import registration_service
from choukwa.services.geography import GeoResolver
from choukwa.utils.session import SessionContext, current_session
from choukwa.utils.validators import normalize_account_phone, validate_string

logger = logging.getLogger(__name__)


def _token_for(account):
    ctx = SessionContext.from_account(account)
    return create_access_token(identity=str(account.id), additional_claims=ctx.claims())


def login():
    data = request.get_json() or {}

    phone = normalize_account_phone(data.get("phone"))
    password = data.get("password")

    if not phone or not password:
        return jsonify({"message": "Données manquantes"}), 400

    account = Account.query.filter_by(phone=phone).first()

    if account and bcrypt.check_password_hash(account.password_hash, password):
        if not account.active:
            return jsonify({"message": "Compte désactivé"}), 403
        logger.info("Login: account %s (%s)", account.id, account.role)
        return jsonify({"token": _token_for(account), "user": account.to_dict()}), 200

    return jsonify({"message": "Identifiants invalides"}), 401


def logout():
    db.session.add(TokenBlocklist(jti=get_jwt()["jti"]))
    db.session.commit()
    return jsonify({"message": "Déconnexion réussie"}), 200


def register_citizen():
    data = request.get_json() or {}

    phone = normalize_account_phone(data.get("phone"))
    if not phone:
        return jsonify({"message": "Numéro de téléphone invalide."}), 400

    ok, msg = validate_string(data.get("name"), "Nom", max_len=150)
    if not ok:
        return jsonify({"message": msg}), 400

    password = data.get("password") or ""
    if len(password) < registration_service.MIN_PASSWORD_LENGTH:
        return (
            jsonify(
                {
                    "message": "Le mot de passe doit contenir au moins "
                    f"{registration_service.MIN_PASSWORD_LENGTH} caractères."
                }
            ),
            400,
        )

    if registration_service.phone_taken(phone):
        return jsonify({"message": "Un compte existe déjà pour ce numéro."}), 409

    wilaya_id = data.get("wilaya_id")
    if wilaya_id and GeoResolver().wilaya_name(wilaya_id) is None:
        return jsonify({"message": "Wilaya invalide."}), 400

    account = Account(
        phone=phone,
        name=data["name"].strip(),
        password_hash=registration_service.hash_password(password),
        role="citizen",
        wilaya_id=wilaya_id or None,
        active=True,
    )
    db.session.add(account)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception("Citizen registration failed for %s", phone)
        return jsonify({"message": "Erreur lors de l'inscription."}), 500

    return jsonify({"token": _token_for(account), "user": account.to_dict()}), 201


def request_official_registration():
    registration = registration_service.submit(request.get_json() or {})
    db.session.commit()
    return (
        jsonify(
            {
                "message": "Demande envoyée, elle sera examinée par un administrateur.",
                "id": registration.id,
            }
        ),
        201,
    )


def me():
    account = db.session.get(Account, current_session().account_id)
    if not account:
        return jsonify({"message": "Utilisateur introuvable"}), 404
    return jsonify(account.to_dict()), 200


def update_me():
    account = db.session.get(Account, current_session().account_id)
    if not account:
        return jsonify({"message": "Utilisateur introuvable"}), 404
    data = request.get_json() or {}

    if "name" in data:
        ok, msg = validate_string(data.get("name"), "Nom", max_len=150)
        if not ok:
            return jsonify({"message": msg}), 400
        account.name = data["name"].strip()

    if "wilaya_id" in data:
        wilaya_id = data.get("wilaya_id")
        if wilaya_id and GeoResolver().wilaya_name(wilaya_id) is None:
            return jsonify({"message": "Wilaya invalide."}), 400
        account.wilaya_id = wilaya_id or None

    if data.get("password"):
        if len(data["password"]) < registration_service.MIN_PASSWORD_LENGTH:
            return jsonify({"message": "Mot de passe trop court."}), 400
        account.password_hash = registration_service.hash_password(data["password"])

    try:
        db.session.commit()
        return jsonify(account.to_dict()), 200
    except Exception:
        db.session.rollback()
        logger.exception("Profile update failed for account %s", account.id)
        return jsonify({"message": "Erreur lors de la mise à jour."}), 500


def check_health():
    health_status = {"status": "healthy", "services": {"database": "unhealthy"}}

    try:
        db.session.execute(text("SELECT 1"))
        health_status["services"]["database"] = "healthy"
        return jsonify(health_status), 200
    except Exception as e:
        logger.error("Health check failed: %s", e)
        health_status["status"] = "unhealthy"
        health_status["error"] = str(e)
        return jsonify(health_status), 500
