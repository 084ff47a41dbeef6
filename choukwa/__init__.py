from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from choukwa.extensions import db, jwt, ma, bcrypt, cors
from choukwa.config import Config
from choukwa.services.errors import ServiceError
from choukwa.utils.logger import init_logging


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    init_logging(app)

    # 1. Initialize extensions properly
    db.init_app(app)
    jwt.init_app(app)
    ma.init_app(app)
    bcrypt.init_app(app)

    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # 2. Token revocation (logout)
    from choukwa.models import TokenBlocklist

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        jti = jwt_payload["jti"]
        return db.session.query(TokenBlocklist.id).filter_by(jti=jti).scalar() is not None

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"msg": f"Jeton invalide : {reason}"}), 401

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"msg": "Authentification requise"}), 401

    # 3. JSON error handlers
    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        db.session.rollback()
        return jsonify({"message": e.message}), e.status_code

    @app.errorhandler(403)
    def forbidden(e):
        return jsonify({"message": "Accès refusé"}), 403

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"message": "Ressource introuvable"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"message": "Méthode non autorisée"}), 405

    @app.errorhandler(500)
    def internal_error(e):
        db.session.rollback()
        app.logger.exception("Unhandled error")
        return jsonify({"message": "Erreur interne du serveur"}), 500

    @app.errorhandler(Exception)
    def unhandled_exception(e):
        if isinstance(e, HTTPException):
            return e
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", e)
        return jsonify({"message": "Erreur interne du serveur"}), 500

    # 4. Register Blueprints

    # Auth & Common Lookups
    from choukwa.routes.shared.auth_routes import auth_bp
    from choukwa.routes.shared.lookup_routes import lookup_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(lookup_bp, url_prefix="/api/shared")

    # Citizens
    from choukwa.routes.citizen import citizen_group_bp

    app.register_blueprint(citizen_group_bp, url_prefix="/api/citizen")

    # MPs and local deputies
    from choukwa.routes.official import official_group_bp

    app.register_blueprint(official_group_bp, url_prefix="/api/official")

    # Admin Management
    from choukwa.routes.admin import admin_group_bp

    app.register_blueprint(admin_group_bp, url_prefix="/api/admin")

    from choukwa.cli import register_commands

    register_commands(app)

    return app
