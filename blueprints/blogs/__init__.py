"""
Blogs Blueprint - Blog posts
Handles: Public listing and reading, admin authoring
"""

from flask import Blueprint

blogs_bp = Blueprint('blogs', __name__, url_prefix='/api/blogs')

from . import routes
