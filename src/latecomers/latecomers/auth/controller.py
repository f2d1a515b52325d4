from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.decorators import ACCOUNT_SESSION_KEY
from ..core.exceptions import AuthorizationError, StoreError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=7)

    @app.route("/api/session", methods=["POST"], endpoint="api_login")
    def api_login():
        """Bind this browser session to a scanning-station account."""
        data = request.get_json(silent=True) or {}
        try:
            account = container.ledger_service.open_session(str(data.get("accountId") or ""))
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 401
        except StoreError:
            app.logger.exception("Error signing in")
            return jsonify({"success": False, "message": "Failed to sign in. Please try again."}), 500

        session.clear()
        session.permanent = bool(data.get("remember"))
        session[ACCOUNT_SESSION_KEY] = account.account_id
        return jsonify({"success": True, "accountId": account.account_id, "dept": account.dept}), 200

    @app.route("/api/session", methods=["DELETE"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out"}), 200
