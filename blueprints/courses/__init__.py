"""
Courses Blueprint - Course catalogue
Handles: Public listing and detail, admin management
"""

from flask import Blueprint

courses_bp = Blueprint('courses', __name__, url_prefix='/api/courses')

from . import routes
