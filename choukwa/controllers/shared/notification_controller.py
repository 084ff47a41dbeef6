import logging
from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from choukwa.extensions import db
from choukwa.models import Notification
from choukwa.utils.pagination import paginate
from choukwa.utils.session import current_session

logger = logging.getLogger(__name__)


def list_notifications():
    ctx = current_session()
    query = Notification.query.filter_by(account_id=ctx.account_id)
    try:
        unread = query.filter_by(read=False).count()
        paginated = paginate(
            query.order_by(Notification.created_at.desc(), Notification.id.desc())
        )
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Notification list of account %s failed", ctx.account_id)
        return jsonify({"data": [], "total": 0, "unread": 0}), 200
    return (
        jsonify(
            {
                "data": [n.to_dict() for n in paginated["items"]],
                "total": paginated["total"],
                "unread": unread,
            }
        ),
        200,
    )


def mark_read(notification_id):
    ctx = current_session()
    notification = Notification.query.filter_by(
        id=notification_id, account_id=ctx.account_id
    ).first_or_404()
    notification.read = True
    db.session.commit()
    return jsonify({"message": "Notification lue"}), 200


def mark_all_read():
    ctx = current_session()
    updated = Notification.query.filter_by(account_id=ctx.account_id, read=False).update(
        {"read": True}
    )
    db.session.commit()
    return jsonify({"message": "Notifications lues", "updated": updated}), 200
