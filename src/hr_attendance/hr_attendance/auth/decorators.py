from __future__ import annotations

from functools import wraps

from flask import g, jsonify, request

from ..core.exceptions import AuthenticationError, ValidationError
from .tokens import TokenService


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing bearer token")
    return token.strip()


def build_guards(tokens: TokenService):
    """Return (token_required, admin_required) view decorators.

    The decoded identity is stored on `flask.g.identity`.
    """

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.identity = tokens.decode(_bearer_token())
            except AuthenticationError as e:
                return jsonify({"success": False, "message": str(e)}), 401
            except ValidationError as e:
                return jsonify({"success": False, "message": str(e)}), 400
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        @token_required
        def wrapper(*args, **kwargs):
            if not g.identity.is_admin:
                return jsonify({"success": False, "message": "Admin or HR role required"}), 403
            return view(*args, **kwargs)

        return wrapper

    return token_required, admin_required
