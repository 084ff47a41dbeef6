from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.official import complaint_controller, coordination_controller
from choukwa.utils.decorators import MP, OFFICIALS, roles_required

complaint_bp = Blueprint("official_complaints", __name__)


@complaint_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(OFFICIALS)
def queue():
    return complaint_controller.list_complaints()


@complaint_bp.route("/<string:complaint_id>", methods=["GET"])
@jwt_required()
@roles_required(OFFICIALS)
def detail(complaint_id):
    return complaint_controller.get_complaint(complaint_id)


# Transitions
@complaint_bp.route("/<string:complaint_id>/view", methods=["POST"])
@jwt_required()
@roles_required(OFFICIALS)
def view(complaint_id):
    return complaint_controller.mark_viewed(complaint_id)


@complaint_bp.route("/<string:complaint_id>/reply", methods=["POST"])
@jwt_required()
@roles_required(OFFICIALS)
def reply(complaint_id):
    return complaint_controller.reply(complaint_id)


@complaint_bp.route("/<string:complaint_id>/status", methods=["POST"])
@jwt_required()
@roles_required(OFFICIALS)
def status(complaint_id):
    return complaint_controller.change_status(complaint_id)


@complaint_bp.route("/<string:complaint_id>/cabinet", methods=["POST"])
@jwt_required()
@roles_required(MP)
def cabinet(complaint_id):
    return complaint_controller.toggle_cabinet(complaint_id)


@complaint_bp.route("/<string:complaint_id>/forward", methods=["POST"])
@jwt_required()
@roles_required(MP)
def forward(complaint_id):
    return complaint_controller.forward(complaint_id)


@complaint_bp.route("/<string:complaint_id>/forward-ministry", methods=["POST"])
@jwt_required()
@roles_required(MP)
def forward_ministry(complaint_id):
    return complaint_controller.forward_to_ministry(complaint_id)


@complaint_bp.route("/<string:complaint_id>/deputies", methods=["GET"])
@jwt_required()
@roles_required(MP)
def forward_candidates(complaint_id):
    return complaint_controller.list_forward_candidates(complaint_id)


@complaint_bp.route("/<string:complaint_id>/priority", methods=["POST"])
@jwt_required()
@roles_required(OFFICIALS)
def priority(complaint_id):
    return complaint_controller.set_priority(complaint_id)


@complaint_bp.route("/<string:complaint_id>/notes", methods=["POST"])
@jwt_required()
@roles_required(OFFICIALS)
def notes(complaint_id):
    return complaint_controller.add_note(complaint_id)


@complaint_bp.route("/<string:complaint_id>/audit", methods=["GET"])
@jwt_required()
@roles_required(OFFICIALS)
def audit(complaint_id):
    return complaint_controller.get_audit_trail(complaint_id)


# Coordination log
@complaint_bp.route("/<string:complaint_id>/coordination", methods=["GET"])
@jwt_required()
@roles_required(OFFICIALS)
def list_coordination(complaint_id):
    return coordination_controller.list_entries(complaint_id)


@complaint_bp.route("/<string:complaint_id>/coordination", methods=["POST"])
@jwt_required()
@roles_required(OFFICIALS)
def create_coordination(complaint_id):
    return coordination_controller.create_entry(complaint_id)


@complaint_bp.route(
    "/<string:complaint_id>/coordination/<int:entry_id>", methods=["PUT"]
)
@jwt_required()
@roles_required(OFFICIALS)
def update_coordination(complaint_id, entry_id):
    return coordination_controller.update_entry(complaint_id, entry_id)


@complaint_bp.route(
    "/<string:complaint_id>/coordination/<int:entry_id>", methods=["DELETE"]
)
@jwt_required()
@roles_required(OFFICIALS)
def delete_coordination(complaint_id, entry_id):
    return coordination_controller.delete_entry(complaint_id, entry_id)
