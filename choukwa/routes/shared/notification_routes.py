from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.shared import notification_controller

# Mounted under both the citizen and the official groups
notification_bp = Blueprint("notifications", __name__)


@notification_bp.route("", methods=["GET"])
@jwt_required()
def list_notifs():
    return notification_controller.list_notifications()


@notification_bp.route("/<int:id>/read", methods=["POST"])
@jwt_required()
def read_notif(id):
    return notification_controller.mark_read(id)


@notification_bp.route("/read-all", methods=["POST"])
@jwt_required()
def read_all_notifs():
    return notification_controller.mark_all_read()
