from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.admin import official_controller
from choukwa.utils.decorators import ADMIN, roles_required

mp_bp = Blueprint("admin_mps", __name__)
deputy_bp = Blueprint("admin_deputies", __name__)


# MPs
@mp_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def list_mps():
    return official_controller.list_mps()


@mp_bp.route("", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def create_mp():
    return official_controller.create_mp()


@mp_bp.route("/import", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def import_mps():
    return official_controller.import_mp_rows()


@mp_bp.route("/<int:id>", methods=["PUT"])
@jwt_required()
@roles_required(ADMIN)
def update_mp(id):
    return official_controller.update_mp(id)


@mp_bp.route("/<int:id>/toggle", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def toggle_mp(id):
    return official_controller.toggle_mp(id)


@mp_bp.route("/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def delete_mp(id):
    return official_controller.delete_mp(id)


# Local deputies
@deputy_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def list_deputies():
    return official_controller.list_deputies()


@deputy_bp.route("", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def create_deputy():
    return official_controller.create_deputy()


@deputy_bp.route("/<int:id>", methods=["PUT"])
@jwt_required()
@roles_required(ADMIN)
def update_deputy(id):
    return official_controller.update_deputy(id)


@deputy_bp.route("/<int:id>/toggle", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def toggle_deputy(id):
    return official_controller.toggle_deputy(id)


@deputy_bp.route("/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def delete_deputy(id):
    return official_controller.delete_deputy(id)
