"""
Projects Blueprint - Portfolio projects
Handles: Public listing and detail, admin management
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
