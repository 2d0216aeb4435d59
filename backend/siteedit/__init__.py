from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .middleware.site_middleware import site_middleware
from .services.interpreter import init_interpreter
from .errors import register_error_handlers
from flask_swagger_ui import get_swaggerui_blueprint
import logging
import os

# Register every table with SQLAlchemy's metadata
from .models import user, site, page, page_version, magic_link, edit_record, audit_log  # noqa: F401


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    init_interpreter(app)

    # -------------------------------------------------
    # Middleware
    # -------------------------------------------------
    site_middleware(app)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC, NO SITE)
    # -------------------------------------------------
    @app.route("/openapi/edits.yaml", methods=["GET"], endpoint="openapi_edits")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "edits_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("edits_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/edits.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Site Edit API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
