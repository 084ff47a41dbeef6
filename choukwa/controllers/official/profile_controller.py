import logging
from flask import request, jsonify
from choukwa.extensions import db
from choukwa.models import MP, LocalDeputy
from choukwa.utils.session import current_session
from choukwa.utils.validators import normalize_account_phone

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "mp": ("bio", "phone", "email", "image"),
    "local_deputy": ("bio", "phone", "email", "image", "whatsapp_number"),
}
PHONE_FIELDS = ("phone", "whatsapp_number")


def _official(ctx):
    model = MP if ctx.role == "mp" else LocalDeputy
    return db.session.get(model, ctx.official_id) if ctx.official_id else None


def get_profile():
    official = _official(current_session())
    if not official:
        return jsonify({"message": "Profil introuvable"}), 404
    return jsonify(official.to_dict()), 200


def update_profile():
    ctx = current_session()
    official = _official(ctx)
    if not official:
        return jsonify({"message": "Profil introuvable"}), 404
    data = request.get_json() or {}

    for field in EDITABLE_FIELDS[ctx.role]:
        if field not in data:
            continue
        value = data[field]
        if field in PHONE_FIELDS and value:
            value = normalize_account_phone(value)
            if not value:
                return jsonify({"message": f"Numéro invalide pour '{field}'."}), 400
        setattr(official, field, value or None)

    try:
        db.session.commit()
        return jsonify(official.to_dict()), 200
    except Exception:
        db.session.rollback()
        logger.exception("Profile update failed for %s #%s", ctx.role, ctx.official_id)
        return jsonify({"message": "Erreur lors de la mise à jour."}), 500
