"""Flask application factory for the wikiviz backend API."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from wikiviz.backend.config import Config
from wikiviz.cache import QueryCache
from wikiviz.exceptions import QueryFailed, WikivizError
from wikiviz.sparql_client import SparqlClient

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register consistent JSON error handlers."""

    @app.errorhandler(400)
    def bad_request(exc):
        return jsonify({"error": str(exc.description)}), 400

    @app.errorhandler(404)
    def not_found(exc):
        return jsonify({"error": "Resource not found"}), 404

    @app.errorhandler(QueryFailed)
    def query_failed(exc):
        return jsonify({
            "error": "Upstream SPARQL endpoint error",
            "details": str(exc),
        }), 502

    @app.errorhandler(WikivizError)
    def wikiviz_error(exc):
        return jsonify({"error": str(exc)}), 500

    @app.errorhandler(Exception)
    def unhandled(exc):
        app.logger.exception("Unhandled exception")
        return jsonify({"error": "Internal server error"}), 500


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    config_class:
        Configuration class (default :class:`Config`).

    Returns
    -------
    Flask
        Configured Flask application.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # ── CORS ──────────────────────────────────────────────────────────
    CORS(app, resources={
        r"/api/*": {
            "origins": config_class.CORS_ORIGINS,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        },
    })

    # ── Query client and cache ────────────────────────────────────────
    client = SparqlClient(
        config_class.SPARQL_ENDPOINT,
        cors_proxy=config_class.CORS_PROXY,
        user_agent=config_class.USER_AGENT,
        mock_fallback=config_class.MOCK_FALLBACK,
    )
    app.config["CLIENT"] = client
    app.config["CACHE"] = QueryCache(client.query)
    logger.debug("Using %r", client)

    # ── Blueprints ────────────────────────────────────────────────────
    from wikiviz.backend.routes.sparql import sparql_bp
    from wikiviz.backend.routes.views import views_bp

    app.register_blueprint(sparql_bp, url_prefix="/api/sparql")
    app.register_blueprint(views_bp, url_prefix="/api")

    # ── Error handlers ────────────────────────────────────────────────
    register_error_handlers(app)

    # ── Health check ──────────────────────────────────────────────────
    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
