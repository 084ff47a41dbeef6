from flask import request, jsonify
from choukwa.extensions import db
from choukwa.models import PendingRegistration
from choukwa.services import registration_service
from choukwa.utils.pagination import paginate
from choukwa.utils.session import current_session


def list_registrations():
    status = request.args.get("status", "pending")
    query = PendingRegistration.query
    if status != "all":
        query = query.filter(PendingRegistration.status == status)

    paginated = paginate(query.order_by(PendingRegistration.created_at.desc()))
    return (
        jsonify(
            {
                "data": [r.to_dict() for r in paginated["items"]],
                "total": paginated["total"],
            }
        ),
        200,
    )


def approve_registration(registration_id):
    official = registration_service.approve(
        registration_id, current_session().account_id
    )
    db.session.commit()
    return (
        jsonify({"message": "Inscription approuvée", "official": official.to_dict()}),
        200,
    )


def reject_registration(registration_id):
    registration_service.reject(registration_id, current_session().account_id)
    db.session.commit()
    return jsonify({"message": "Inscription rejetée"}), 200
