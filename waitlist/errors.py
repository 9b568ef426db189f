"""
HTTP-facing error types for the waitlist API.

Handlers raise these instead of building error responses by hand. The
handlers registered in register_error_handlers() turn them into the
uniform JSON body {"error": <message>}.
"""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound


class WaitlistAPIError(Exception):
    """Base exception carrying the HTTP status it maps to"""
    status_code = 500

    def __init__(self, message, status_code=None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(WaitlistAPIError):
    """Malformed or missing request input"""
    status_code = 400


class NotFoundError(WaitlistAPIError):
    """No waitlist entry matches the lookup"""
    status_code = 404


class InternalError(WaitlistAPIError):
    """Store or unexpected failure. The message is always generic."""
    status_code = 500

    def __init__(self, message="Internal server error"):
        super().__init__(message)


def error_response(message, status_code):
    return jsonify({"error": message}), status_code


def register_error_handlers(app):
    """Renders every error path as {"error": ...} JSON."""

    @app.errorhandler(WaitlistAPIError)
    def handle_api_error(e):
        return error_response(e.message, e.status_code)

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(e):
        response, status = error_response("Method not allowed", 405)
        # HEAD is rejected on the waitlist routes, so it is never advertised
        methods = [m for m in (e.valid_methods or []) if m != 'HEAD']
        response.headers['Allow'] = ', '.join(methods)
        return response, status

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        return error_response("Not found", 404)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return error_response(e.name, e.code)
        current_app.logger.exception(f"Unhandled error: {str(e)}")
        return error_response("Internal server error", 500)
