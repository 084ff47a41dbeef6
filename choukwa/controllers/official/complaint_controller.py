import logging
from datetime import datetime, timedelta
from flask import request, jsonify, current_app
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from choukwa.extensions import db
from choukwa.models import Complaint, LocalDeputy
from choukwa.repositories import AuditLogRepository
from choukwa.schemas.complaint_schema import complaint_schema, complaints_schema
from choukwa.services import lifecycle
from choukwa.services.complaint_service import ComplaintService
from choukwa.utils.pagination import paginate
from choukwa.utils.session import current_session
from choukwa.utils.validators import parse_date_arg

logger = logging.getLogger(__name__)


def scoped_query(ctx):
    """Complaints an official is responsible for"""
    query = Complaint.query
    if ctx.role == "mp":
        return query.filter(Complaint.mp_id == ctx.official_id)
    return query.filter(
        or_(
            Complaint.local_deputy_id == ctx.official_id,
            Complaint.forwarded_to_deputy_id == ctx.official_id,
        )
    )


def _commit(payload, error_message, status=200):
    try:
        db.session.commit()
        return jsonify(payload), status
    except Exception:
        db.session.rollback()
        logger.exception(error_message)
        return jsonify({"message": error_message}), 500


def list_complaints():
    ctx = current_session()
    query = scoped_query(ctx)

    status = request.args.get("status")
    if status and status != "all":
        query = query.filter(Complaint.status == status)

    category = request.args.get("category")
    if category and category != "all":
        query = query.filter(Complaint.category == category)

    wilaya_id = request.args.get("wilaya_id", type=int)
    if wilaya_id:
        query = query.filter(Complaint.wilaya_id == wilaya_id)

    daira_id = request.args.get("daira_id", type=int)
    if daira_id:
        query = query.filter(Complaint.daira_id == daira_id)

    search = request.args.get("search")
    if search:
        query = query.filter(
            or_(
                Complaint.content.ilike(f"%{search}%"),
                Complaint.id.ilike(f"{search}%"),
                Complaint.user_phone.ilike(f"%{search}%"),
            )
        )

    date_from = parse_date_arg(request.args.get("date_from"))
    date_to = parse_date_arg(request.args.get("date_to"), end_of_day=True)
    if date_from:
        query = query.filter(Complaint.created_at >= date_from)
    if date_to:
        query = query.filter(Complaint.created_at <= date_to)

    if request.args.get("overdue") == "true":
        limit = datetime.utcnow() - timedelta(
            days=current_app.config["OVERDUE_AFTER_DAYS"]
        )
        query = query.filter(
            Complaint.status.in_(lifecycle.OPEN_STATUSES),
            Complaint.created_at < limit,
        )

    if request.args.get("urgent") == "true":
        query = query.filter(Complaint.priority == "urgent")

    try:
        paginated = paginate(query.order_by(Complaint.created_at.desc()))
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Complaint queue lookup failed")
        return jsonify({"data": [], "total": 0}), 200
    return (
        jsonify(
            {
                "data": complaints_schema.dump(paginated["items"]),
                "total": paginated["total"],
            }
        ),
        200,
    )


def get_complaint(complaint_id):
    ctx = current_session()
    service = ComplaintService(ctx)
    complaint = service.get(complaint_id)
    data = complaint_schema.dump(complaint)
    data["allowed_statuses"] = (
        lifecycle.allowed_targets(complaint.status, ctx.role)
        if service.can_act(complaint)
        else []
    )
    return jsonify(data), 200


def mark_viewed(complaint_id):
    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    if not service.mark_viewed(complaint):
        return jsonify({"message": "Aucun changement", "status": complaint.status}), 200
    return _commit(
        {"message": "Plainte consultée", "status": complaint.status},
        "Erreur lors de la mise à jour.",
    )


def reply(complaint_id):
    data = request.get_json() or {}
    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    service.reply(complaint, data.get("reply"))
    return _commit(
        {"message": "Réponse envoyée", "complaint": complaint_schema.dump(complaint)},
        "Erreur lors de l'envoi de la réponse.",
    )


def change_status(complaint_id):
    data = request.get_json() or {}
    if not data.get("status"):
        return jsonify({"message": "Le champ 'status' est obligatoire."}), 400

    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    service.change_status(complaint, data["status"], notes=data.get("notes"))
    return _commit(
        {"message": "Statut mis à jour", "status": complaint.status},
        "Erreur lors de la mise à jour du statut.",
    )


def toggle_cabinet(complaint_id):
    """Send to the MP's cabinet, or bring it back to the pending queue"""
    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    target = (
        lifecycle.PENDING
        if complaint.status == lifecycle.IN_CABINET
        else lifecycle.IN_CABINET
    )
    service.change_status(complaint, target)
    return _commit(
        {"message": "Statut mis à jour", "status": complaint.status},
        "Erreur lors de la mise à jour du statut.",
    )


def forward(complaint_id):
    data = request.get_json() or {}
    if not data.get("deputy_id"):
        return jsonify({"message": "Le député local est obligatoire."}), 400

    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    link = service.forward_to_deputy(
        complaint,
        data["deputy_id"],
        method=data.get("method", "system"),
        notes=data.get("notes"),
        country_code=current_app.config["WHATSAPP_COUNTRY_CODE"],
    )
    return _commit(
        {
            "message": "Plainte transférée",
            "status": complaint.status,
            "whatsapp_url": link,
        },
        "Erreur lors du transfert.",
    )


def forward_to_ministry(complaint_id):
    data = request.get_json(silent=True) or {}
    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    letter = service.forward_to_ministry(complaint, notes=data.get("notes"))
    return _commit(
        {
            "message": "Lettre officielle générée",
            "ministry": complaint.ministry,
            "letter": letter,
        },
        "Erreur lors du transfert.",
    )


def set_priority(complaint_id):
    data = request.get_json() or {}
    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    service.set_priority(complaint, data.get("priority"))
    return _commit(
        {"message": "Priorité mise à jour", "priority": complaint.priority},
        "Erreur lors de la mise à jour.",
    )


def add_note(complaint_id):
    data = request.get_json() or {}
    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    service.add_note(complaint, data.get("note"))
    return _commit(
        {"message": "Note ajoutée", "internal_notes": complaint.internal_notes},
        "Erreur lors de l'ajout de la note.",
        201,
    )


def get_audit_trail(complaint_id):
    complaint = ComplaintService(current_session()).get(complaint_id)
    entries = AuditLogRepository().for_complaint(complaint.id)
    return jsonify([e.to_dict() for e in entries]), 200


def list_forward_candidates(complaint_id):
    """Active local deputies covering the complaint's location"""
    complaint = ComplaintService(current_session()).get(complaint_id)
    query = LocalDeputy.query.filter_by(wilaya_id=complaint.wilaya_id, is_active=True)
    if complaint.daira_id:
        query = query.filter_by(daira_id=complaint.daira_id)
    deputies = query.order_by(LocalDeputy.name.asc()).all()
    return jsonify([d.to_dict() for d in deputies]), 200
