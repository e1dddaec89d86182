"""
Contact Blueprint - Contact form
Handles: Public submissions, admin inbox
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__, url_prefix='/api/contact')

from . import routes
