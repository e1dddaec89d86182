"""
Extensions Module - Shared extension instances
Bound to the app in create_app(); models and utils import them from here.
"""

from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

db = SQLAlchemy()
cors = CORS()

# Bearer tokens only, resolved by utils.security.load_user_from_request
login_manager = LoginManager()
login_manager.session_protection = None

__all__ = ['db', 'cors', 'login_manager']
