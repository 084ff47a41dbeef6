import logging
from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from choukwa.extensions import db
from choukwa.models import MP
from choukwa.services import lifecycle
from choukwa.services.categories import category_list
from choukwa.services.geography import GeoResolver

logger = logging.getLogger(__name__)


def get_geography_tree():
    """Wilayas, dairas and mutamadiyat for cascading selects"""
    try:
        return jsonify(GeoResolver().tree()), 200
    except SQLAlchemyError:
        logger.exception("Geography lookup failed")
        return jsonify({"wilayas": [], "dairas": [], "mutamadiyat": []}), 200


def get_dairas(wilaya_id):
    geo = GeoResolver()
    return jsonify([d.to_dict() for d in geo.dairas_of(wilaya_id)]), 200


def get_mutamadiyat(daira_id):
    geo = GeoResolver()
    return jsonify([m.to_dict() for m in geo.mutamadiyat_of(daira_id)]), 200


def get_categories():
    return (
        jsonify(
            {
                "categories": category_list(),
                "statuses": [
                    {"id": s, "name": lifecycle.STATUS_LABELS[s]}
                    for s in lifecycle.STATUSES
                ],
            }
        ),
        200,
    )


def list_mps():
    wilaya_id = request.args.get("wilaya_id", type=int)
    search = request.args.get("search", "")

    query = MP.query.filter_by(is_active=True)
    if wilaya_id:
        query = query.filter(MP.wilaya_id == wilaya_id)
    if search:
        query = query.filter(MP.name.ilike(f"%{search}%"))

    try:
        mps = query.order_by(MP.name.asc()).all()
    except SQLAlchemyError:
        logger.exception("MP directory lookup failed")
        mps = []
    return jsonify([m.to_dict() for m in mps]), 200


def get_mp(mp_id):
    mp = db.get_or_404(MP, mp_id)
    return jsonify(mp.to_dict()), 200
