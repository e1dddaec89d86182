"""
Auth Blueprint - Authentication and account management
Handles: Registration, Login, Profile, Password reset, Email verification, Google sign-in
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

from . import routes
