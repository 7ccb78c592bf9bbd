"""Flask server for the calendar gateway"""

from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

# Import logging utils FIRST to configure logging
from calendar_gateway.utils.logging_utils import get_logger
from calendar_gateway.api.calendar_routes import calendar_bp
from calendar_gateway.config import Config, OAuthClientConfig, load_oauth_config
from calendar_gateway.health import HealthChecker
from calendar_gateway.services.calendar import build_providers

logger = get_logger(__name__)


def create_app(
    google_config: Optional[OAuthClientConfig] = None,
    microsoft_config: Optional[OAuthClientConfig] = None,
):
    """
    Application factory pattern for Flask app.

    OAuth client configs are read from the environment unless passed in.
    A missing client id, secret or redirect URI raises ConfigurationError,
    so the process refuses to start.
    """
    google_config = google_config or load_oauth_config("google")
    microsoft_config = microsoft_config or load_oauth_config("microsoft")

    app = Flask(__name__)
    CORS(app, resources={r"/*": {"origins": Config.CORS_ORIGINS}})

    # Flask's logger should propagate to root logger (which has our handler)
    app.logger.propagate = True
    app.logger.handlers.clear()

    providers = build_providers(google_config, microsoft_config)
    app.extensions["calendar_providers"] = providers
    health_checker = HealthChecker(providers)

    app.register_blueprint(calendar_bp)
    logger.info(f"Registered calendar providers: {', '.join(providers)}")

    @app.route("/")
    def index():
        return "Welcome to the Calendar Gateway"

    @app.route("/health")
    def health_check():
        return jsonify(health_checker.get_health_status()), 200

    # Add request logging
    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.path}")

    @app.after_request
    def log_response(response):
        logger.info(f"{request.method} {request.path} -> {response.status_code}")
        return response

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(e):
        logger.error(f"Unhandled error: {e}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500

    return app


# ──────────────────────────────────────────────────────────────────
# Main Entry Point
# ──────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    Config.print_config_summary()
    app = create_app()
    logger.info(f"Starting server on http://0.0.0.0:{Config.PORT}")
    app.run(host="0.0.0.0", port=Config.PORT, debug=Config.DEBUG, use_reloader=False, threaded=True)
