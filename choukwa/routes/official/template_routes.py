from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.official import template_controller
from choukwa.utils.decorators import OFFICIALS, roles_required

template_bp = Blueprint("templates", __name__)


@template_bp.route("", methods=["GET"])
@jwt_required()
@roles_required(OFFICIALS)
def list_tpls():
    return template_controller.list_templates()


@template_bp.route("", methods=["POST"])
@jwt_required()
@roles_required(OFFICIALS)
def create_tpl():
    return template_controller.create_template()


@template_bp.route("/<int:id>", methods=["PUT"])
@jwt_required()
@roles_required(OFFICIALS)
def update_tpl(id):
    return template_controller.update_template(id)


@template_bp.route("/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(OFFICIALS)
def delete_tpl(id):
    return template_controller.delete_template(id)
