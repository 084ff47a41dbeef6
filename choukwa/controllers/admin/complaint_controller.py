import logging
from flask import request, jsonify
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from choukwa.extensions import db
from choukwa.models import Complaint
from choukwa.repositories import AuditLogRepository, ComplaintRepository, MPRepository
from choukwa.schemas.complaint_schema import complaint_schema, complaints_schema
from choukwa.services.complaint_service import ComplaintService
from choukwa.utils.pagination import paginate
from choukwa.utils.session import current_session
from choukwa.utils.validators import parse_date_arg

logger = logging.getLogger(__name__)


def list_complaints():
    query = Complaint.query

    for arg in ("status", "category", "assigned_to", "priority"):
        value = request.args.get(arg)
        if value and value != "all":
            query = query.filter(getattr(Complaint, arg) == value)

    for arg in ("wilaya_id", "daira_id", "mp_id", "local_deputy_id"):
        value = request.args.get(arg, type=int)
        if value:
            query = query.filter(getattr(Complaint, arg) == value)

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

    try:
        paginated = paginate(query.order_by(Complaint.created_at.desc()))
        status_counts = ComplaintRepository().status_counts()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Admin complaint list failed")
        return jsonify({"data": [], "total": 0, "status_counts": {}}), 200
    return (
        jsonify(
            {
                "data": complaints_schema.dump(paginated["items"]),
                "total": paginated["total"],
                "status_counts": status_counts,
            }
        ),
        200,
    )


def get_complaint(complaint_id):
    complaint = ComplaintService(current_session()).get(complaint_id)
    data = complaint_schema.dump(complaint)
    data["audit"] = [
        e.to_dict() for e in AuditLogRepository().for_complaint(complaint.id)
    ]
    return jsonify(data), 200


def update_complaint(complaint_id):
    service = ComplaintService(current_session())
    complaint = service.get(complaint_id)
    service.admin_update(complaint, request.json or {})
    try:
        db.session.commit()
        return jsonify(complaint_schema.dump(complaint)), 200
    except Exception:
        db.session.rollback()
        logger.exception("Complaint %s update failed", complaint_id)
        return jsonify({"message": "Erreur lors de la mise à jour."}), 500


def delete_complaint(complaint_id):
    repo = ComplaintRepository()
    complaint = repo.get(complaint_id)
    if not complaint:
        return jsonify({"message": "Plainte introuvable."}), 404
    mp_id = complaint.mp_id
    try:
        repo.delete(complaint)
        db.session.flush()
        if mp_id:
            MPRepository().refresh_stats(mp_id)
        db.session.commit()
        logger.info("Complaint %s deleted by admin", complaint_id)
        return jsonify({"message": "Plainte supprimée."}), 200
    except Exception:
        db.session.rollback()
        logger.exception("Complaint %s deletion failed", complaint_id)
        return jsonify({"message": "Erreur lors de la suppression."}), 500
