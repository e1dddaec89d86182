"""
Admin Blueprint - Administration dashboard
Handles: Site statistics, user management
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

from . import routes
