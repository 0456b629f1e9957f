from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.exceptions import AuthorizationError, DomainError, NotFoundError

_STATUS = {
    AuthorizationError: 403,
    NotFoundError: 404,
}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"result": False, "error": "Please log in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_actor_id() -> int:
    return int(session["user_id"])


def error_response(exc: DomainError):
    status = next((code for cls, code in _STATUS.items() if isinstance(exc, cls)), 400)
    return jsonify({"result": False, "error": str(exc)}), status
