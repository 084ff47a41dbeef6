"""Sign-up requests of MPs and local deputies, reviewed by an admin."""
import logging
from datetime import datetime

from choukwa.extensions import db, bcrypt
from choukwa.models import Account, PendingRegistration, MP, LocalDeputy
from choukwa.models.account import OFFICIAL_ROLES
from choukwa.services.errors import ServiceError, NotFoundError, ConflictError
from choukwa.services.geography import GeoResolver
from choukwa.utils.validators import normalize_account_phone, validate_string

logger = logging.getLogger(__name__)

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"

MIN_PASSWORD_LENGTH = 6


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode("utf-8")


def phone_taken(phone):
    return Account.query.filter_by(phone=phone).first() is not None


def submit(data, geo=None):
    geo = geo or GeoResolver()

    phone = normalize_account_phone(data.get("phone"))
    if not phone:
        raise ServiceError("Numéro de téléphone invalide.")

    ok, msg = validate_string(data.get("name"), "Nom", max_len=150)
    if not ok:
        raise ServiceError(msg)

    role = data.get("role")
    if role not in OFFICIAL_ROLES:
        raise ServiceError("Rôle invalide, 'mp' ou 'local_deputy' attendu.")

    password = data.get("password") or ""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ServiceError(
            f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères."
        )

    try:
        wilaya_id = int(data.get("wilaya_id"))
    except (TypeError, ValueError):
        raise ServiceError("Wilaya invalide.")
    if geo.wilaya_name(wilaya_id) is None:
        raise ServiceError("Wilaya invalide.")

    daira_id = data.get("daira_id")
    if daira_id in (None, ""):
        daira_id = None
        if role == "local_deputy":
            raise ServiceError("La daïra est obligatoire pour un député local.")
    else:
        try:
            daira_id = int(daira_id)
        except (TypeError, ValueError):
            raise ServiceError("Daïra invalide.")
        if not geo.daira_belongs_to(daira_id, wilaya_id):
            raise ServiceError("La daïra n'appartient pas à la wilaya choisie.")

    if phone_taken(phone):
        raise ConflictError("Un compte existe déjà pour ce numéro.")
    if PendingRegistration.query.filter_by(phone=phone, status=PENDING).first():
        raise ConflictError("Une demande est déjà en attente pour ce numéro.")

    registration = PendingRegistration(
        phone=phone,
        name=data["name"].strip(),
        role=role,
        password_hash=hash_password(password),
        wilaya_id=wilaya_id,
        daira_id=daira_id,
        status=PENDING,
    )
    db.session.add(registration)
    logger.info("Registration request for %s (%s)", phone, role)
    return registration


def _get_pending(registration_id):
    registration = db.session.get(PendingRegistration, registration_id)
    if not registration:
        raise NotFoundError("Demande d'inscription introuvable.")
    if registration.status != PENDING:
        raise ConflictError("Cette demande a déjà été traitée.")
    return registration


def approve(registration_id, reviewer_id):
    """Create the official and its account from a pending request.

    Exactly one MP or LocalDeputy row is created per approval.
    """
    registration = _get_pending(registration_id)
    if phone_taken(registration.phone):
        raise ConflictError("Un compte existe déjà pour ce numéro.")

    account = Account(
        phone=registration.phone,
        name=registration.name,
        password_hash=registration.password_hash,
        role=registration.role,
        wilaya_id=registration.wilaya_id,
        active=True,
    )

    if registration.role == "mp":
        official = MP(
            name=registration.name,
            wilaya=registration.wilaya.name if registration.wilaya else None,
            wilaya_id=registration.wilaya_id,
            daira=registration.daira.name if registration.daira else None,
            daira_id=registration.daira_id,
            phone=registration.phone,
            is_active=True,
        )
    else:
        official = LocalDeputy(
            name=registration.name,
            wilaya_id=registration.wilaya_id,
            daira_id=registration.daira_id,
            phone=registration.phone,
            whatsapp_number=registration.phone,
            is_active=True,
        )
    db.session.add(official)
    db.session.flush()

    if registration.role == "mp":
        account.mp_id = official.id
    else:
        account.local_deputy_id = official.id
    db.session.add(account)

    registration.status = APPROVED
    registration.reviewed_at = datetime.utcnow()
    registration.reviewed_by = reviewer_id

    logger.info(
        "Registration %s approved by %s: %s #%s",
        registration.id,
        reviewer_id,
        registration.role,
        official.id,
    )
    return official


def reject(registration_id, reviewer_id):
    registration = _get_pending(registration_id)
    registration.status = REJECTED
    registration.reviewed_at = datetime.utcnow()
    registration.reviewed_by = reviewer_id
    logger.info("Registration %s rejected by %s", registration.id, reviewer_id)
    return registration
