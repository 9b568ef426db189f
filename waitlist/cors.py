# waitlist/cors.py
"""
CORS gate shared by every endpoint.

Allow-listed origins get the four Access-Control-* headers on every
response, echoed back exactly (never "*", since credentials are allowed).
OPTIONS requests are answered with an empty 200 before routing or method
checks run, whatever the origin.
"""

from flask import request, current_app

ALLOW_METHODS = 'GET, POST, OPTIONS'
ALLOW_HEADERS = 'Content-Type'


def is_allowed_origin(origin, allowed_origins):
    return bool(origin) and origin in allowed_origins


def apply_cors_headers(response, origin, allowed_origins):
    """Adds the CORS headers to `response` if `origin` is allow-listed; always varies on Origin."""
    if is_allowed_origin(origin, allowed_origins):
        response.headers['Access-Control-Allow-Origin'] = origin
        response.headers['Access-Control-Allow-Methods'] = ALLOW_METHODS
        response.headers['Access-Control-Allow-Headers'] = ALLOW_HEADERS
        response.headers['Access-Control-Allow-Credentials'] = 'true'
    # Headers differ by Origin whether or not it is allowed
    response.vary.add('Origin')
    return response


def init_cors(app):
    """Registers the preflight short-circuit and the response header hook."""

    @app.before_request
    def short_circuit_preflight():
        if request.method == 'OPTIONS':
            # Returning a response here stops all further handling.
            return current_app.response_class(status=200)
        return None

    @app.after_request
    def add_cors_headers(response):
        return apply_cors_headers(
            response,
            request.headers.get('Origin'),
            current_app.config['CORS_ALLOWED_ORIGINS'],
        )
