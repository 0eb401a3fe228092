"""Decorators for callable endpoints."""

from functools import wraps

from firebase_admin import exceptions as firebase_exceptions
from flask import current_app, g, jsonify, request

from tasktrek.errors import AppError, InternalError, UnauthenticatedError
from tasktrek.extensions import firebase


def _bearer_token():
    """Return the token from an ``Authorization: Bearer`` header, if any."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def verify_request_token():
    """Verify the caller's Firebase ID token and return the decoded claims."""
    token = _bearer_token()
    if not token:
        raise UnauthenticatedError()
    try:
        decoded = firebase.auth.verify_id_token(token)
    except (ValueError, firebase_exceptions.FirebaseError) as e:
        current_app.logger.warning(f"Rejected ID token: {e}")
        raise UnauthenticatedError() from e
    if not decoded or not decoded.get("uid"):
        raise UnauthenticatedError()
    return decoded


def callable_endpoint(f):
    """Wrap a view in the callable-function protocol.

    The request body is ``{"data": {...}}`` and the caller is identified by a
    Firebase ID token. The view receives the ``data`` payload, the caller's
    uid is available as ``g.uid``, and its return value is sent back as
    ``{"result": ...}``. Application errors propagate to the error handlers;
    anything else is logged and reported as an internal error.

    Usage:
    @bp.route("/getGroupStats", methods=["POST"])
    @callable_endpoint
    def get_group_stats(data):
        ...
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.callable = True
        g.token = verify_request_token()
        g.uid = g.token["uid"]

        body = request.get_json(silent=True)
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            data = {}

        try:
            result = f(data, *args, **kwargs)
        except AppError:
            raise
        except Exception as e:
            current_app.logger.error(f"Unexpected error in {f.__name__}: {e}")
            raise InternalError() from e
        return jsonify({"result": result})

    return decorated_function
