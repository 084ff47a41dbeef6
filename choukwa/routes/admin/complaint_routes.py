from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.admin import complaint_controller
from choukwa.utils.decorators import ADMIN, roles_required

complaint_bp = Blueprint("admin_complaints", __name__)


@complaint_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def list_all():
    return complaint_controller.list_complaints()


@complaint_bp.route("/<string:complaint_id>", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def detail(complaint_id):
    return complaint_controller.get_complaint(complaint_id)


@complaint_bp.route("/<string:complaint_id>", methods=["PUT"])
@jwt_required()
@roles_required(ADMIN)
def edit(complaint_id):
    return complaint_controller.update_complaint(complaint_id)


@complaint_bp.route("/<string:complaint_id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def remove(complaint_id):
    return complaint_controller.delete_complaint(complaint_id)
