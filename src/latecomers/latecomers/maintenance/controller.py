from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import AuthorizationError, StoreError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clear-monthly", methods=["POST"], endpoint="api_clear_monthly")
    def api_clear_monthly():
        """Cron-invoked reset; authenticated by the shared `token` query parameter."""
        try:
            result = container.field_clear_service.clear(request.args.get("token"))
        except AuthorizationError:
            return jsonify({"error": "Unauthorized"}), 401
        except StoreError as e:
            app.logger.error("Error clearing fields: %s", e)
            return jsonify({"error": "Failed to clear fields", "details": str(e)}), 500

        return jsonify(
            {
                "success": True,
                "message": result.message,
                "processedCount": result.processed_count,
            }
        ), 200
