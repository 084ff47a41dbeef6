import logging
from datetime import date
from flask import request, jsonify
from choukwa.extensions import db
from choukwa.models import CoordinationEntry
from choukwa.models.complaint import CONTACT_TYPES
from choukwa.services.complaint_service import ComplaintService
from choukwa.utils.session import current_session
from choukwa.utils.validators import validate_string

logger = logging.getLogger(__name__)


def _validate(data, partial=False):
    for field in ("entity", "notes", "contact_person"):
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            return f"Le champ '{field}' doit être un texte."
    if not partial or "entity" in data:
        ok, msg = validate_string(data.get("entity"), "Organisme", max_len=200)
        if not ok:
            return msg
    if not partial or "notes" in data:
        ok, msg = validate_string(data.get("notes"), "Notes", max_len=5000)
        if not ok:
            return msg
    if "contact_type" in data and data["contact_type"] not in CONTACT_TYPES:
        return "Type de contact invalide."
    if "documents" in data and not isinstance(data["documents"] or [], list):
        return "Le champ 'documents' doit être une liste."
    if data.get("date"):
        try:
            date.fromisoformat(data["date"])
        except (TypeError, ValueError):
            return "Date invalide (AAAA-MM-JJ attendu)."
    return None


def _get_entry(complaint_id, entry_id):
    ComplaintService(current_session()).get(complaint_id)
    return CoordinationEntry.query.filter_by(
        id=entry_id, complaint_id=complaint_id
    ).first_or_404()


def list_entries(complaint_id):
    complaint = ComplaintService(current_session()).get(complaint_id)
    return jsonify([e.to_dict() for e in complaint.coordination_entries]), 200


def create_entry(complaint_id):
    ctx = current_session()
    complaint = ComplaintService(ctx).get(complaint_id)
    data = request.get_json() or {}

    err = _validate(data)
    if err:
        return jsonify({"message": err}), 400

    entry = CoordinationEntry(
        complaint_id=complaint.id,
        date=date.fromisoformat(data["date"]) if data.get("date") else date.today(),
        entity=data["entity"].strip(),
        contact_type=data.get("contact_type", "phone"),
        contact_person=data.get("contact_person"),
        notes=data["notes"].strip(),
        documents=data.get("documents") or [],
        author=ctx.display_name,
        author_role=ctx.role,
    )
    db.session.add(entry)
    try:
        db.session.commit()
        return jsonify(entry.to_dict()), 201
    except Exception:
        db.session.rollback()
        logger.exception("Coordination entry creation failed")
        return jsonify({"message": "Erreur lors de la création."}), 500


def update_entry(complaint_id, entry_id):
    entry = _get_entry(complaint_id, entry_id)
    data = request.get_json() or {}

    err = _validate(data, partial=True)
    if err:
        return jsonify({"message": err}), 400

    if data.get("date"):
        entry.date = date.fromisoformat(data["date"])
    entry.entity = data.get("entity", entry.entity).strip()
    entry.contact_type = data.get("contact_type", entry.contact_type)
    entry.contact_person = data.get("contact_person", entry.contact_person)
    entry.notes = data.get("notes", entry.notes).strip()
    if "documents" in data:
        entry.documents = data["documents"] or []

    try:
        db.session.commit()
        return jsonify(entry.to_dict()), 200
    except Exception:
        db.session.rollback()
        logger.exception("Coordination entry %s update failed", entry_id)
        return jsonify({"message": "Erreur lors de la mise à jour."}), 500


def delete_entry(complaint_id, entry_id):
    entry = _get_entry(complaint_id, entry_id)
    try:
        db.session.delete(entry)
        db.session.commit()
        return jsonify({"message": "Entrée supprimée."}), 200
    except Exception:
        db.session.rollback()
        logger.exception("Coordination entry %s deletion failed", entry_id)
        return jsonify({"message": "Erreur lors de la suppression."}), 500
