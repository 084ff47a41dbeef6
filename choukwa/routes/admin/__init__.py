from flask import Blueprint
from .geo_routes import geo_bp
from .official_routes import mp_bp, deputy_bp
from .complaint_routes import complaint_bp
from .registration_routes import registration_bp
from .report_routes import report_bp

admin_group_bp = Blueprint("admin_group", __name__)

# Register sub-blueprints
admin_group_bp.register_blueprint(geo_bp, url_prefix="/geography")
admin_group_bp.register_blueprint(mp_bp, url_prefix="/mps")
admin_group_bp.register_blueprint(deputy_bp, url_prefix="/deputies")
admin_group_bp.register_blueprint(complaint_bp, url_prefix="/complaints")
admin_group_bp.register_blueprint(registration_bp, url_prefix="/registrations")
admin_group_bp.register_blueprint(report_bp, url_prefix="/report")
