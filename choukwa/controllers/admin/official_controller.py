import logging
from flask import request, jsonify
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from choukwa.extensions import db
from choukwa.models import Account, Complaint, MP, LocalDeputy, Wilaya, Daira
from choukwa.services.directory import import_mps
from choukwa.services.geography import GeoResolver
from choukwa.utils.pagination import paginate
from choukwa.utils.validators import (
    validate_string,
    validate_int,
    normalize_account_phone,
)

logger = logging.getLogger(__name__)

MP_FIELDS = ("bloc", "email", "bio", "image", "profile_url")
DEPUTY_FIELDS = ("email", "bio", "image")


def _blocked(reason):
    return (
        jsonify({"message": f"Action bloquée : {reason}. Désactivez-le plutôt."}),
        400,
    )


def _delete(official, message):
    try:
        db.session.delete(official)
        db.session.commit()
        return jsonify({"message": message}), 200
    except IntegrityError:
        db.session.rollback()
        logger.exception("Official deletion failed")
        return _blocked("cet élu est encore lié à d'autres données")


def _phones(data, fields):
    """Normalized phone fields of ``data``, or an error message"""
    result = {}
    for field in fields:
        if field not in data:
            continue
        if not data[field]:
            result[field] = None
            continue
        phone = normalize_account_phone(data[field])
        if not phone:
            return None, f"Numéro invalide pour '{field}'."
        result[field] = phone
    return result, None


# --- MPS ---


def list_mps():
    search = request.args.get("search", "")
    wilaya_id = request.args.get("wilaya_id", type=int)
    active = request.args.get("active", "all")

    query = MP.query
    if search:
        query = query.filter(
            or_(MP.name.ilike(f"%{search}%"), MP.bloc.ilike(f"%{search}%"))
        )
    if wilaya_id:
        query = query.filter(MP.wilaya_id == wilaya_id)
    if active != "all":
        query = query.filter(MP.is_active == (active == "true"))

    paginated = paginate(query.order_by(MP.name.asc()))
    return (
        jsonify(
            {
                "data": [m.to_dict() for m in paginated["items"]],
                "total": paginated["total"],
            }
        ),
        200,
    )


def create_mp():
    data = request.json or {}

    ok, msg = validate_string(data.get("name"), "Nom", max_len=150)
    if not ok:
        return jsonify({"message": msg}), 400

    ok, wil_id = validate_int(data.get("wilaya_id"), "Wilaya")
    if not ok:
        return jsonify({"message": wil_id}), 400
    wilaya = db.session.get(Wilaya, wil_id)
    if not wilaya:
        return jsonify({"message": "Wilaya introuvable."}), 404

    daira = None
    if data.get("daira_id"):
        daira = db.session.get(Daira, data["daira_id"])
        if not daira or daira.wilaya_id != wilaya.id:
            return jsonify({"message": "La daïra n'appartient pas à la wilaya."}), 400

    phones, err = _phones(data, ("phone",))
    if err:
        return jsonify({"message": err}), 400

    mp = MP(
        name=data["name"].strip(),
        wilaya=wilaya.name,
        wilaya_id=wilaya.id,
        daira=daira.name if daira else data.get("daira"),
        daira_id=daira.id if daira else None,
        phone=phones.get("phone"),
        is_active=data.get("is_active", True),
        **{f: data.get(f) for f in MP_FIELDS},
    )
    try:
        db.session.add(mp)
        db.session.commit()
        return jsonify({"message": "Député créé", "id": mp.id}), 201
    except Exception:
        db.session.rollback()
        logger.exception("MP creation failed")
        return jsonify({"message": "Erreur lors de la création."}), 500


def update_mp(mp_id):
    mp = db.get_or_404(MP, mp_id)
    data = request.json or {}

    if "name" in data:
        ok, msg = validate_string(data.get("name"), "Nom", max_len=150)
        if not ok:
            return jsonify({"message": msg}), 400
        mp.name = data["name"].strip()

    if "wilaya_id" in data:
        wilaya = db.session.get(Wilaya, data["wilaya_id"])
        if not wilaya:
            return jsonify({"message": "Wilaya introuvable."}), 404
        if wilaya.id != mp.wilaya_id and "daira_id" not in data:
            mp.daira_id = None
            mp.daira = None
        mp.wilaya_id = wilaya.id
        mp.wilaya = wilaya.name

    if "daira_id" in data:
        daira = db.session.get(Daira, data["daira_id"]) if data["daira_id"] else None
        if data["daira_id"] and (not daira or daira.wilaya_id != mp.wilaya_id):
            return jsonify({"message": "La daïra n'appartient pas à la wilaya."}), 400
        mp.daira_id = daira.id if daira else None
        mp.daira = daira.name if daira else None

    phones, err = _phones(data, ("phone",))
    if err:
        return jsonify({"message": err}), 400
    for field, value in phones.items():
        setattr(mp, field, value)

    for field in MP_FIELDS + ("is_active",):
        if field in data:
            setattr(mp, field, data[field])

    try:
        db.session.commit()
        return jsonify({"message": "Député mis à jour"}), 200
    except Exception:
        db.session.rollback()
        logger.exception("MP %s update failed", mp_id)
        return jsonify({"message": "Erreur lors de la mise à jour."}), 500


def toggle_mp(mp_id):
    mp = db.get_or_404(MP, mp_id)
    mp.is_active = not mp.is_active
    db.session.commit()
    return jsonify({"message": "Statut mis à jour", "is_active": mp.is_active}), 200


def delete_mp(mp_id):
    mp = db.get_or_404(MP, mp_id)
    in_use = (
        Complaint.query.filter_by(mp_id=mp.id).first() is not None
        or Account.query.filter_by(mp_id=mp.id).first() is not None
    )
    if in_use:
        return _blocked("ce député a des plaintes ou un compte rattachés")
    return _delete(mp, "Député supprimé.")


def import_mp_rows():
    data = request.json or {}
    rows = data.get("rows")
    if not isinstance(rows, list) or not rows:
        return jsonify({"message": "Aucune ligne à importer."}), 400

    created, skipped = import_mps(rows)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception("MP import failed")
        return jsonify({"message": "Erreur lors de l'import."}), 500

    return (
        jsonify(
            {
                "message": f"{len(created)} député(s) importé(s)",
                "created": len(created),
                "skipped": skipped,
            }
        ),
        201,
    )


# --- LOCAL DEPUTIES ---


def list_deputies():
    search = request.args.get("search", "")
    wilaya_id = request.args.get("wilaya_id", type=int)
    daira_id = request.args.get("daira_id", type=int)

    query = LocalDeputy.query
    if search:
        query = query.filter(LocalDeputy.name.ilike(f"%{search}%"))
    if wilaya_id:
        query = query.filter(LocalDeputy.wilaya_id == wilaya_id)
    if daira_id:
        query = query.filter(LocalDeputy.daira_id == daira_id)

    paginated = paginate(query.order_by(LocalDeputy.name.asc()))
    return (
        jsonify(
            {
                "data": [d.to_dict() for d in paginated["items"]],
                "total": paginated["total"],
            }
        ),
        200,
    )


def create_deputy():
    data = request.json or {}

    ok, msg = validate_string(data.get("name"), "Nom", max_len=150)
    if not ok:
        return jsonify({"message": msg}), 400

    ok, wil_id = validate_int(data.get("wilaya_id"), "Wilaya")
    if not ok:
        return jsonify({"message": wil_id}), 400
    ok, daira_id = validate_int(data.get("daira_id"), "Daïra")
    if not ok:
        return jsonify({"message": daira_id}), 400
    if not GeoResolver().daira_belongs_to(daira_id, wil_id):
        return jsonify({"message": "La daïra n'appartient pas à la wilaya."}), 400

    phones, err = _phones(data, ("phone", "whatsapp_number"))
    if err:
        return jsonify({"message": err}), 400

    deputy = LocalDeputy(
        name=data["name"].strip(),
        wilaya_id=wil_id,
        daira_id=daira_id,
        phone=phones.get("phone"),
        whatsapp_number=phones.get("whatsapp_number"),
        is_active=data.get("is_active", True),
        **{f: data.get(f) for f in DEPUTY_FIELDS},
    )
    try:
        db.session.add(deputy)
        db.session.commit()
        return jsonify({"message": "Député local créé", "id": deputy.id}), 201
    except Exception:
        db.session.rollback()
        logger.exception("Local deputy creation failed")
        return jsonify({"message": "Erreur lors de la création."}), 500


def update_deputy(deputy_id):
    deputy = db.get_or_404(LocalDeputy, deputy_id)
    data = request.json or {}

    if "name" in data:
        ok, msg = validate_string(data.get("name"), "Nom", max_len=150)
        if not ok:
            return jsonify({"message": msg}), 400
        deputy.name = data["name"].strip()

    if "wilaya_id" in data or "daira_id" in data:
        wil_id = data.get("wilaya_id", deputy.wilaya_id)
        daira_id = data.get("daira_id", deputy.daira_id)
        if not GeoResolver().daira_belongs_to(daira_id, wil_id):
            return jsonify({"message": "La daïra n'appartient pas à la wilaya."}), 400
        deputy.wilaya_id = wil_id
        deputy.daira_id = daira_id

    phones, err = _phones(data, ("phone", "whatsapp_number"))
    if err:
        return jsonify({"message": err}), 400
    for field, value in phones.items():
        setattr(deputy, field, value)

    for field in DEPUTY_FIELDS + ("is_active",):
        if field in data:
            setattr(deputy, field, data[field])

    try:
        db.session.commit()
        return jsonify({"message": "Député local mis à jour"}), 200
    except Exception:
        db.session.rollback()
        logger.exception("Local deputy %s update failed", deputy_id)
        return jsonify({"message": "Erreur lors de la mise à jour."}), 500


def toggle_deputy(deputy_id):
    deputy = db.get_or_404(LocalDeputy, deputy_id)
    deputy.is_active = not deputy.is_active
    db.session.commit()
    return jsonify({"message": "Statut mis à jour", "is_active": deputy.is_active}), 200


def delete_deputy(deputy_id):
    deputy = db.get_or_404(LocalDeputy, deputy_id)
    in_use = (
        Complaint.query.filter(
            or_(
                Complaint.local_deputy_id == deputy.id,
                Complaint.forwarded_to_deputy_id == deputy.id,
            )
        ).first()
        is not None
        or Account.query.filter_by(local_deputy_id=deputy.id).first() is not None
    )
    if in_use:
        return _blocked("ce député local a des plaintes ou un compte rattachés")
    return _delete(deputy, "Député local supprimé.")
