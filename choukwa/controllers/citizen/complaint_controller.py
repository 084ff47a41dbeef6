import logging
from flask import request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from choukwa.extensions import db
from choukwa.models import Account, Complaint
from choukwa.schemas.complaint_schema import (
    citizen_complaint_schema,
    citizen_complaints_schema,
)
from choukwa.services.complaint_service import ComplaintService
from choukwa.utils.pagination import paginate
from choukwa.utils.session import current_session

logger = logging.getLogger(__name__)


def list_my_complaints():
    ctx = current_session()
    status = request.args.get("status")

    query = Complaint.query.filter(Complaint.user_id == ctx.account_id)
    if status and status != "all":
        query = query.filter(Complaint.status == status)

    try:
        paginated = paginate(query.order_by(Complaint.created_at.desc()))
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Complaint list of account %s failed", ctx.account_id)
        return jsonify({"data": [], "total": 0}), 200
    return (
        jsonify(
            {
                "data": citizen_complaints_schema.dump(paginated["items"]),
                "total": paginated["total"],
            }
        ),
        200,
    )


def submit_complaint():
    data = dict(request.get_json() or {})
    ctx = current_session()
    account = db.session.get(Account, ctx.account_id)
    if account:
        data["user_phone"] = account.phone
    service = ComplaintService(ctx)

    complaint = service.submit(
        data,
        max_images=current_app.config["MAX_COMPLAINT_IMAGES"],
        min_length=current_app.config["MIN_COMPLAINT_LENGTH"],
    )

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception("Complaint submission failed")
        return jsonify({"message": "Erreur lors de l'envoi de la plainte."}), 500

    return (
        jsonify(
            {
                "message": "Plainte envoyée",
                "complaint": citizen_complaint_schema.dump(complaint),
            }
        ),
        201,
    )


def get_my_complaint(complaint_id):
    complaint = ComplaintService(current_session()).get(complaint_id)
    return jsonify(citizen_complaint_schema.dump(complaint)), 200
