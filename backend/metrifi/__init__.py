import logging
import os

from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db, migrate
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .commands import register_commands
from .application.cms.options import PageCreatorOptions
from flask_swagger_ui import get_swaggerui_blueprint


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("metrifi").setLevel(level)


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # Fail at startup rather than on every request
    PageCreatorOptions.from_config(app.config)

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)

    # Models must be imported so their tables are known to metadata
    from .models import user, application_password, page, field, audit_log  # noqa: F401

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/metrifi/v1")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML (PUBLIC)
    # -------------------------------------------------
    @app.route("/openapi/metrifi.yaml", methods=["GET"], endpoint="openapi_metrifi")
    def serve_openapi():
        doc_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "metrifi_openapi.yaml",
        )

        if not os.path.exists(doc_path):
            raise FileNotFoundError("metrifi_openapi.yaml not found")

        return send_file(
            doc_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/metrifi.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "MetriFi Pages API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
