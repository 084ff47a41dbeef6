from flask import Blueprint
from .complaint_routes import complaint_bp
from ..shared.notification_routes import notification_bp

citizen_group_bp = Blueprint("citizen_group", __name__)

# Register sub-blueprints
citizen_group_bp.register_blueprint(complaint_bp, url_prefix="/complaints")
citizen_group_bp.register_blueprint(
    notification_bp, url_prefix="/notifications", name="citizen_notifications"
)
