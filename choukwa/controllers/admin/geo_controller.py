import logging
from flask import request, jsonify
from choukwa.extensions import db
from choukwa.models.geography import Wilaya, Daira, Mutamadiya
from sqlalchemy.exc import IntegrityError
from choukwa.utils.validators import validate_string, validate_int

logger = logging.getLogger(__name__)


def _blocked(kind, children):
    names = ", ".join(children)
    return (
        jsonify(
            {
                "message": f"Suppression impossible : {kind} contient : {names}. "
                "Supprimez ou réaffectez-les d'abord."
            }
        ),
        400,
    )


def _delete(row, label):
    try:
        db.session.delete(row)
        db.session.commit()
        return jsonify({"message": f"{label} '{row.name}' supprimée."}), 200
    except IntegrityError:
        db.session.rollback()
        return (
            jsonify(
                {
                    "message": "Erreur d'intégrité : cet élément est encore lié à d'autres données."
                }
            ),
            400,
        )


# --- WILAYAS ---


def list_wilayas():
    wilayas = Wilaya.query.order_by(Wilaya.code, Wilaya.name).all()
    return (
        jsonify(
            [
                {
                    "id": w.id,
                    "name": w.name,
                    "code": w.code,
                    "dairas_count": len(w.dairas),
                }
                for w in wilayas
            ]
        ),
        200,
    )


def create_wilaya():
    data = request.json or {}
    ok, msg = validate_string(data.get("name"), "Nom de wilaya")
    if not ok:
        return jsonify({"message": msg}), 400

    ok, msg = validate_string(data.get("code"), "Code", max_len=10, required=False)
    if not ok:
        return jsonify({"message": msg}), 400

    if Wilaya.query.filter_by(name=data["name"].strip()).first():
        return jsonify({"message": "Cette wilaya existe déjà."}), 409

    try:
        new_wil = Wilaya(name=data["name"].strip(), code=data.get("code"))
        db.session.add(new_wil)
        db.session.commit()
        return jsonify(new_wil.to_dict()), 201
    except Exception:
        db.session.rollback()
        logger.exception("Wilaya creation failed")
        return jsonify({"message": "Erreur lors de la création."}), 500


def update_wilaya(id):
    wil = db.get_or_404(Wilaya, id)
    data = request.json or {}

    if "name" in data:
        ok, msg = validate_string(data.get("name"), "Nom de wilaya")
        if not ok:
            return jsonify({"message": msg}), 400
        wil.name = data["name"].strip()
    wil.code = data.get("code", wil.code)

    try:
        db.session.commit()
        return jsonify(wil.to_dict()), 200
    except IntegrityError:
        db.session.rollback()
        return jsonify({"message": "Cette wilaya existe déjà."}), 409


def delete_wilaya(id):
    wil = db.get_or_404(Wilaya, id)
    if wil.dairas:
        return _blocked("cette wilaya", [d.name for d in wil.dairas])
    return _delete(wil, "Wilaya")


# --- DAIRAS ---


def list_dairas():
    query = Daira.query
    wilaya_id = request.args.get("wilaya_id", type=int)
    if wilaya_id:
        query = query.filter(Daira.wilaya_id == wilaya_id)
    dairas = query.order_by(Daira.name.asc()).all()
    return (
        jsonify(
            [
                {
                    "id": d.id,
                    "name": d.name,
                    "wilaya_id": d.wilaya_id,
                    "wilaya_name": d.wilaya.name if d.wilaya else "N/A",
                }
                for d in dairas
            ]
        ),
        200,
    )


def create_daira():
    data = request.json or {}
    ok, msg = validate_string(data.get("name"), "Nom de daïra", max_len=150)
    if not ok:
        return jsonify({"message": msg}), 400

    ok, wil_id = validate_int(data.get("wilaya_id"), "Wilaya")
    if not ok:
        return jsonify({"message": wil_id}), 400

    if not db.session.get(Wilaya, wil_id):
        return jsonify({"message": "La wilaya parente n'existe pas."}), 404

    try:
        new_daira = Daira(name=data["name"].strip(), wilaya_id=wil_id)
        db.session.add(new_daira)
        db.session.commit()
        return jsonify(new_daira.to_dict()), 201
    except Exception:
        db.session.rollback()
        logger.exception("Daira creation failed")
        return jsonify({"message": "Erreur lors de la création."}), 500


def update_daira(id):
    daira = db.get_or_404(Daira, id)
    data = request.json or {}

    if "name" in data:
        ok, msg = validate_string(data.get("name"), "Nom de daïra", max_len=150)
        if not ok:
            return jsonify({"message": msg}), 400
        daira.name = data["name"].strip()

    if "wilaya_id" in data:
        ok, wil_id = validate_int(data.get("wilaya_id"), "Wilaya")
        if not ok:
            return jsonify({"message": wil_id}), 400
        if not db.session.get(Wilaya, wil_id):
            return jsonify({"message": "La wilaya parente n'existe pas."}), 404
        daira.wilaya_id = wil_id
        # Mutamadiyat follow their daira
        for m in daira.mutamadiyat:
            m.wilaya_id = wil_id

    db.session.commit()
    return jsonify(daira.to_dict()), 200


def delete_daira(id):
    daira = db.get_or_404(Daira, id)
    if daira.mutamadiyat:
        return _blocked("cette daïra", [m.name for m in daira.mutamadiyat])
    return _delete(daira, "Daïra")


# --- MUTAMADIYAT ---


def list_mutamadiyat():
    query = Mutamadiya.query
    daira_id = request.args.get("daira_id", type=int)
    if daira_id:
        query = query.filter(Mutamadiya.daira_id == daira_id)
    return jsonify([m.to_dict() for m in query.order_by(Mutamadiya.name).all()]), 200


def create_mutamadiya():
    data = request.json or {}
    ok, msg = validate_string(data.get("name"), "Nom de mutamadiya", max_len=150)
    if not ok:
        return jsonify({"message": msg}), 400

    ok, daira_id = validate_int(data.get("daira_id"), "Daïra")
    if not ok:
        return jsonify({"message": daira_id}), 400

    daira = db.session.get(Daira, daira_id)
    if not daira:
        return jsonify({"message": "La daïra parente n'existe pas."}), 404

    try:
        new_m = Mutamadiya(
            name=data["name"].strip(), daira_id=daira.id, wilaya_id=daira.wilaya_id
        )
        db.session.add(new_m)
        db.session.commit()
        return jsonify(new_m.to_dict()), 201
    except Exception:
        db.session.rollback()
        logger.exception("Mutamadiya creation failed")
        return jsonify({"message": "Erreur lors de la création."}), 500


def update_mutamadiya(id):
    m = db.get_or_404(Mutamadiya, id)
    data = request.json or {}
    if "name" in data:
        ok, msg = validate_string(data.get("name"), "Nom de mutamadiya", max_len=150)
        if not ok:
            return jsonify({"message": msg}), 400
        m.name = data["name"].strip()
    db.session.commit()
    return jsonify(m.to_dict()), 200


def delete_mutamadiya(id):
    m = db.get_or_404(Mutamadiya, id)
    return _delete(m, "Mutamadiya")
