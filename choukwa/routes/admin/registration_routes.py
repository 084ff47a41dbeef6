from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.admin import registration_controller
from choukwa.utils.decorators import ADMIN, roles_required

registration_bp = Blueprint("admin_registrations", __name__)


@registration_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def list_regs():
    return registration_controller.list_registrations()


@registration_bp.route("/<int:id>/approve", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def approve(id):
    return registration_controller.approve_registration(id)


@registration_bp.route("/<int:id>/reject", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def reject(id):
    return registration_controller.reject_registration(id)
