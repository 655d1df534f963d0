"""Flask application factory for the connection status API."""

from __future__ import annotations

from flask import Flask, jsonify, request

from api.errors import error_response, handle_errors
from database.connection import ConnectionRegistry
from utils.timestamps import format_timestamp


def create_app(registry: ConnectionRegistry) -> Flask:
    """Create a Flask app reporting on *registry*'s connection."""
    app = Flask(__name__)

    @app.route("/api/health")
    @handle_errors
    def health():
        return jsonify(
            {
                "status": "ok",
                "database": "connected" if registry.is_connected() else "disconnected",
                "owned": registry.owns_connection,
                "table_prefix": registry.table_prefix,
            }
        )

    @app.route("/api/timestamp")
    @handle_errors
    def timestamp():
        raw = request.args.get("epoch")
        if raw is None:
            return jsonify({"timestamp": format_timestamp()})
        try:
            epoch = float(raw)
        except ValueError:
            return error_response(f"Invalid epoch: {raw}", 400)
        return jsonify({"timestamp": format_timestamp(epoch)})

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    return app
