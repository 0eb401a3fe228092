from flask import Blueprint, current_app, g, jsonify
from werkzeug.exceptions import HTTPException

from .errors import AppError, NotFoundError, PermissionDeniedError, ValidationError

error_handlers_bp = Blueprint("error_handlers", __name__)

_HTTP_STATUS_NAMES = {
    400: "INVALID_ARGUMENT",
    401: "UNAUTHENTICATED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    405: "INVALID_ARGUMENT",
    503: "UNAVAILABLE",
}


def _error_response(status, message, status_code):
    """Render an error in the shape the calling endpoint speaks."""
    if g.get("callable"):
        body = {"error": {"status": status, "message": message}}
    else:
        body = {"error": message}
    return jsonify(body), status_code


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles missing or malformed arguments."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return _error_response(error.status, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles not found errors."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return _error_response(error.status, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(PermissionDeniedError)
def handle_permission_denied_error(error):
    """Handles non-admin or non-owner callers of privileged actions."""
    current_app.logger.warning(f"Permission Denied: {error.message}")
    return _error_response(error.status, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return _error_response(error.status, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    """Handles routing errors such as unknown paths or wrong methods."""
    status = _HTTP_STATUS_NAMES.get(e.code, "INTERNAL")
    return _error_response(status, e.description, e.code)


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return _error_response("INTERNAL", "An unexpected error occurred.", 500)
