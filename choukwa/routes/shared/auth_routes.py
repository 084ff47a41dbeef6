from flask import Blueprint
from flask_jwt_extended import jwt_required
from choukwa.controllers.shared import auth_controller

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
def login():
    return auth_controller.login()


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    return auth_controller.logout()


@auth_bp.route("/register", methods=["POST"])
def register():
    return auth_controller.register_citizen()


@auth_bp.route("/registrations", methods=["POST"])
def request_registration():
    return auth_controller.request_official_registration()


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    return auth_controller.me()


@auth_bp.route("/me", methods=["PUT"])
@jwt_required()
def update_me():
    return auth_controller.update_me()


@auth_bp.route("/health", methods=["GET"])
def health():
    return auth_controller.check_health()
