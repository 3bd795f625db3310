"""Middleware for token authentication and CORS headers."""
from functools import wraps

import jwt
from flask import g, request, current_app

from hardware_shop.exceptions import UnauthenticatedError, ForbiddenError
from hardware_shop.services.auth_service import decode_token


def _bearer_token():
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    auth_header = request.headers.get('Authorization', '')
    parts = auth_header.split(' ', 1)
    if len(parts) == 2 and parts[0].lower() == 'bearer' and parts[1].strip():
        return parts[1].strip()
    return None


def load_user_from_token():
    """
    Load the token's user into g (Flask's per-request global).

    Called before each request. Sets g.user to ``{'username', 'role'}`` when a
    valid token is present, and g.auth_error to a short reason otherwise.
    """
    g.user = None
    g.user_role = None
    g.auth_error = None

    token = _bearer_token()
    if not token:
        g.auth_error = 'missing'
        return

    try:
        payload = decode_token(
            token,
            current_app.config['JWT_SECRET'],
            algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256')
        )
    except jwt.ExpiredSignatureError:
        g.auth_error = 'expired'
        return
    except jwt.InvalidTokenError:
        g.auth_error = 'invalid'
        return

    g.user = {'username': payload['username'], 'role': payload['role']}
    g.user_role = payload['role']


def require_login(f):
    """
    Decorator: Require a valid bearer token.

    Missing token -> 401, invalid or expired token -> 403.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('user') is None:
            if g.get('auth_error') in (None, 'missing'):
                raise UnauthenticatedError('No token provided')
            current_app.logger.info(f"Rejected {g.auth_error} token on {request.method} {request.path}")
            raise ForbiddenError('Invalid or expired token')
        return f(*args, **kwargs)

    return decorated_function


def add_cors_headers(response):
    """Attach permissive CORS headers to every response."""
    response.headers['Access-Control-Allow-Origin'] = current_app.config.get('CORS_ALLOW_ORIGIN', '*')
    response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
    response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization'
    return response
