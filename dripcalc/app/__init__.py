"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from dripcalc.app.api.routes import api_bp
from dripcalc.config import Settings, configure_logging, get_settings


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.config["DRIPCALC_SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
