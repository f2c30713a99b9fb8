import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from metrifi.domain.invariants.exceptions import InvariantViolation

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error returned to the caller with a stable code and HTTP status."""

    code = "INTERNAL_ERROR"
    status = 500
    message = "Internal server error."

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {
            "code": self.code,
            "message": self.message,
            "data": {"status": self.status},
        }


class InvalidParam(ApiError):
    code = "INVALID_PARAM"
    status = 400
    message = "Invalid parameter."


class Unauthenticated(ApiError):
    code = "UNAUTHENTICATED"
    status = 401
    message = "Authentication required."


class Forbidden(ApiError):
    code = "FORBIDDEN"
    status = 403
    message = "You do not have permission to create pages."


class NotFound(ApiError):
    code = "NOT_FOUND"
    status = 404
    message = "Page not found."


class PostCreationFailed(ApiError):
    code = "POST_CREATION_FAILED"
    status = 500
    message = "Failed to create page."


class ImproperlyConfigured(ApiError):
    code = "CONFIGURATION_ERROR"
    status = 500
    message = "The page service is misconfigured."


def _error_response(code, message, status):
    response = jsonify({
        "code": code,
        "message": message,
        "data": {"status": status},
    })
    response.status_code = status
    return response


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.status >= 500:
            logger.error("%s: %s", error.code, error.message)
        response = jsonify(error.to_dict())
        response.status_code = error.status
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error_response("INVALID_PARAM", str(error), 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        code = (error.name or "error").upper().replace(" ", "_")
        return _error_response(code, error.description, error.code)
