"""Flask application entry point.

create_app wires the process together: settings -> credential store ->
auth service -> HTTP blueprint. Nothing is held in module globals; each app
gets its own store and service.
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .api import STATUS_BY_KIND, auth_bp, error_body
from .auth.service import AuthService
from .config import Settings, settings as default_settings
from .db import SQLiteCredentialStore, init_db
from .exceptions import CredGateError, InternalError

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# Error handlers
def handle_credgate_error(error: CredGateError):
    """Handle every CredGateError through the explicit kind -> status table."""
    status = STATUS_BY_KIND[error.kind]
    if status >= 500:
        logger.error(f"{error.kind.value}: {error.message}")
    return jsonify(error_body(error)), status


def handle_internal_error(error: Exception):
    """Handle unexpected exceptions without leaking their text."""
    if isinstance(error, HTTPException):
        return error

    logger.exception(f"Internal error: {error}")
    return jsonify(error_body(InternalError("An internal error occurred"))), 500


def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


def create_app(settings: Settings | None = None) -> Flask:
    """
    Build a configured Flask app.

    Startup fails fast: an unusable signing key or work factor raises
    ConfigurationError here, before any request is served.

    Args:
        settings: Settings to use (defaults to values loaded from the environment)

    Returns:
        Flask application with the auth blueprint registered
    """
    settings = settings or default_settings

    init_db(settings.database_path)
    logger.info(f"Database initialized at {settings.database_path}")

    store = SQLiteCredentialStore(settings.database_path)
    auth_service = AuthService.from_settings(store, settings)

    app = Flask(__name__)
    app.extensions["credgate.settings"] = settings
    app.extensions["credgate.auth_service"] = auth_service

    # CORS configuration
    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    app.register_error_handler(CredGateError, handle_credgate_error)
    app.register_error_handler(Exception, handle_internal_error)

    app.add_url_rule("/health", view_func=health)
    app.register_blueprint(auth_bp)

    return app


def main() -> None:
    """Run the development server."""
    configure_logging(default_settings.log_level)
    app = create_app(default_settings)
    app.run(host=default_settings.host, port=default_settings.port, threaded=True)


if __name__ == "__main__":
    main()
