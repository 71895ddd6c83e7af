import logging

import click
from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config, DEV_JWT_SECRET
from .errors import register_error_handlers
from .metrics import HitCounter
from models import storage  # DBStorage singleton (scoped_session)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Chirpy API",
        "version": "1.0.0",
        "description": "REST API for users, chirps and session tokens.",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        },
        "ApiKey": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Webhook key with the `ApiKey ` prefix."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None, **overrides) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    ``overrides`` are applied on top of the selected config class (tests use
    this for FILESERVER_ROOT and the like).
    """
    app = Flask(__name__)

    app.config.from_object(get_config(config_name))
    app.config.update(overrides)

    if not (app.debug or app.testing) and app.config["JWT_SECRET"] == DEV_JWT_SECRET:
        raise RuntimeError("JWT_SECRET environment variable is not set")

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.logger.setLevel(app.config["LOG_LEVEL"])

    storage.reload(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))

    app.extensions["chirpy_hits"] = HitCounter()

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    register_error_handlers(app)

    from .health import bp as health_bp
    from .users import bp as users_bp
    from .auth import bp as auth_bp
    from .chirps import bp as chirps_bp
    from .webhooks import bp as webhooks_bp
    from .admin import bp as admin_bp, files_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(chirps_bp, url_prefix="/api")
    app.register_blueprint(webhooks_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(files_bp, url_prefix="/app")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        storage.close()

    @app.cli.command("purge-refresh-tokens")
    def purge_refresh_tokens():
        """Delete refresh tokens past their expiry."""
        deleted = storage.delete_expired_refresh_tokens()
        click.echo(f"Deleted {deleted} expired refresh token(s)")

    return app
