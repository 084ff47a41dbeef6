from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.admin import geo_controller
from choukwa.utils.decorators import ADMIN, roles_required

geo_bp = Blueprint("admin_geo", __name__)


# Wilayas
@geo_bp.route("/wilayas", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def get_wilayas():
    return geo_controller.list_wilayas()


@geo_bp.route("/wilayas", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def post_wilaya():
    return geo_controller.create_wilaya()


@geo_bp.route("/wilayas/<int:id>", methods=["PUT"])
@jwt_required()
@roles_required(ADMIN)
def put_wilaya(id):
    return geo_controller.update_wilaya(id)


@geo_bp.route("/wilayas/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def del_wilaya(id):
    return geo_controller.delete_wilaya(id)


# Dairas
@geo_bp.route("/dairas", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def get_dairas():
    return geo_controller.list_dairas()


@geo_bp.route("/dairas", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def post_daira():
    return geo_controller.create_daira()


@geo_bp.route("/dairas/<int:id>", methods=["PUT"])
@jwt_required()
@roles_required(ADMIN)
def put_daira(id):
    return geo_controller.update_daira(id)


@geo_bp.route("/dairas/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def del_daira(id):
    return geo_controller.delete_daira(id)


# Mutamadiyat
@geo_bp.route("/mutamadiyat", methods=["GET"])
@jwt_required()
@roles_required(ADMIN)
def get_mutamadiyat():
    return geo_controller.list_mutamadiyat()


@geo_bp.route("/mutamadiyat", methods=["POST"])
@jwt_required()
@roles_required(ADMIN)
def post_mutamadiya():
    return geo_controller.create_mutamadiya()


@geo_bp.route("/mutamadiyat/<int:id>", methods=["PUT"])
@jwt_required()
@roles_required(ADMIN)
def put_mutamadiya(id):
    return geo_controller.update_mutamadiya(id)


@geo_bp.route("/mutamadiyat/<int:id>", methods=["DELETE"])
@jwt_required()
@roles_required(ADMIN)
def del_mutamadiya(id):
    return geo_controller.delete_mutamadiya(id)
