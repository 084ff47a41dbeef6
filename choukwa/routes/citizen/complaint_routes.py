from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.citizen import complaint_controller
from choukwa.utils.decorators import CITIZEN, roles_required

complaint_bp = Blueprint("citizen_complaints", __name__)


@complaint_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(CITIZEN)
def list_mine():
    return complaint_controller.list_my_complaints()


@complaint_bp.route("", methods=["POST"])
@jwt_required()
@roles_required(CITIZEN)
def submit():
    return complaint_controller.submit_complaint()


@complaint_bp.route("/<string:complaint_id>", methods=["GET"])
@jwt_required()
@roles_required(CITIZEN)
def get_mine(complaint_id):
    return complaint_controller.get_my_complaint(complaint_id)
