from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.admin import report_controller
from choukwa.utils.decorators import ADMIN, roles_required

report_bp = Blueprint("admin_report", __name__)


@report_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def global_report():
    return report_controller.get_report()
