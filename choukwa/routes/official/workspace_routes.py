from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.official import profile_controller, report_controller
from choukwa.utils.decorators import OFFICIALS, roles_required

workspace_bp = Blueprint("official_workspace", __name__)


@workspace_bp.route("/report", methods=["GET"])
@jwt_required()
@roles_required(OFFICIALS)
def report():
    return report_controller.get_report()


@workspace_bp.route("/profile", methods=["GET"])
@jwt_required()
@roles_required(OFFICIALS)
def get_profile():
    return profile_controller.get_profile()


@workspace_bp.route("/profile", methods=["PUT"])
@jwt_required()
@roles_required(OFFICIALS)
def update_profile():
    return profile_controller.update_profile()
