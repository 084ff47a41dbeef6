from flask import Blueprint
from choukwa.controllers.shared import lookup_controller

lookup_bp = Blueprint("lookups", __name__)


@lookup_bp.route("/geography", methods=["GET"])
def geo_tree():
    return lookup_controller.get_geography_tree()


@lookup_bp.route("/wilayas/<int:wilaya_id>/dairas", methods=["GET"])
def dairas_of_wilaya(wilaya_id):
    return lookup_controller.get_dairas(wilaya_id)


@lookup_bp.route("/dairas/<int:daira_id>/mutamadiyat", methods=["GET"])
def mutamadiyat_of_daira(daira_id):
    return lookup_controller.get_mutamadiyat(daira_id)


@lookup_bp.route("/categories", methods=["GET"])
def categories():
    return lookup_controller.get_categories()


@lookup_bp.route("/mps", methods=["GET"])
def mps_directory():
    return lookup_controller.list_mps()


@lookup_bp.route("/mps/<int:mp_id>", methods=["GET"])
def mp_profile(mp_id):
    return lookup_controller.get_mp(mp_id)
