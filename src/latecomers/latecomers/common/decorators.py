from __future__ import annotations

from functools import wraps

from flask import jsonify, session

ACCOUNT_SESSION_KEY = "account_id"


def login_required(view):
    """Reject API calls that do not come from a signed-in scanning account."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if not session.get(ACCOUNT_SESSION_KEY):
            return jsonify({"success": False, "message": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_account_id() -> str:
    return str(session[ACCOUNT_SESSION_KEY])
