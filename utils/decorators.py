"""
Decorators Module - Authentication and authorization decorators
"""

from functools import wraps
from flask import jsonify
from flask_login import current_user
from .security import get_bearer_token


def _error(message, status):
    return jsonify({'success': False, 'message': message}), status


def authentication_error():
    """Response for a request without a usable bearer token, or None if authenticated"""
    if not get_bearer_token():
        return _error('Not authorized, no token', 401)
    if not current_user.is_authenticated:
        return _error('Not authorized, token failed', 401)
    return None


def admin_error():
    """Response for a request that is not from an admin, or None if it is"""
    error = authentication_error()
    if error is not None:
        return error
    if not current_user.is_admin:
        return _error('Access denied. Admin privileges required.', 403)
    return None


def login_required(f):
    """Decorator to require a valid bearer token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        error = authentication_error()
        if error is not None:
            return error
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require admin role"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        error = admin_error()
        if error is not None:
            return error
        return f(*args, **kwargs)
    return decorated_function
