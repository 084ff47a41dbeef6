from flask import Blueprint
from .complaint_routes import complaint_bp
from .template_routes import template_bp
from .workspace_routes import workspace_bp
from ..shared.notification_routes import notification_bp

official_group_bp = Blueprint("official_group", __name__)

# Register sub-blueprints
official_group_bp.register_blueprint(complaint_bp, url_prefix="/complaints")
official_group_bp.register_blueprint(template_bp, url_prefix="/templates")
official_group_bp.register_blueprint(workspace_bp)
official_group_bp.register_blueprint(
    notification_bp, url_prefix="/notifications", name="official_notifications"
)
