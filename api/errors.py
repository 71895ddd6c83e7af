from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

from utils.errors import Forbidden, HashingError, NotFound, Unauthorized


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def register_error_handlers(app):
    # 400 Bad Request (generic)
    @app.errorhandler(400)
    def bad_request(e):
        message = getattr(e, "description", "Bad request")
        return error_response("BAD_REQUEST", message, 400)

    # 403 Forbidden
    @app.errorhandler(403)
    def forbidden(e):
        message = getattr(e, "description", "Forbidden")
        return error_response("FORBIDDEN", message, 403)

    # 404 Not Found
    @app.errorhandler(404)
    def not_found(e):
        message = getattr(e, "description", None) or "Resource not found"
        return error_response("NOT_FOUND", message, 404)

    # 409 Conflict
    @app.errorhandler(409)
    def conflict(e):
        message = getattr(e, "description", "Conflict")
        return error_response("CONFLICT", message, 409)

    # 422 Unprocessable Entity (validation)
    @app.errorhandler(422)
    def unprocessable(e):
        message = getattr(e, "description", "Unprocessable entity")
        return error_response("VALIDATION_ERROR", message, 422)

    # Marshmallow validation errors map to 422
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        return error_response("VALIDATION_ERROR", "Invalid input", 422, details=err.messages)

    # Every authentication failure looks the same to the client; the
    # specific reason only goes to the log.
    @app.errorhandler(Unauthorized)
    def handle_unauthorized(err: Unauthorized):
        current_app.logger.info("authentication failed: %s", err.__class__.__name__)
        return error_response("UNAUTHORIZED", "Unauthorized", 401)

    @app.errorhandler(Forbidden)
    def handle_forbidden(err: Forbidden):
        current_app.logger.info("authorization denied: %s", err)
        return error_response("FORBIDDEN", "Forbidden", 403)

    @app.errorhandler(NotFound)
    def handle_not_found(err: NotFound):
        return error_response("NOT_FOUND", "Resource not found", 404)

    @app.errorhandler(HashingError)
    def handle_hashing_error(err: HashingError):
        logging.exception("password hashing failure", exc_info=err)
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500)

    # Integrity errors (unique constraints, FK violations, check constraints)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        message = str(getattr(err, "orig", err))
        lower_msg = message.lower()
        if current_app and current_app.debug:
            logging.exception("Integrity error", exc_info=err)
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409)
        if "foreign key constraint" in lower_msg or "foreign key mismatch" in lower_msg:
            return error_response("BAD_REQUEST", "Foreign key constraint failed.", 400)
        return error_response("BAD_REQUEST", "Integrity error.", 400)

    # Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        code = err.code or 400
        return error_response(err.name.upper().replace(" ", "_"), err.description, code)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        # In dev, include exception details to speed up debugging
        details = None
        logging.exception("Unhandled exception", exc_info=err)
        if current_app and current_app.debug:
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
