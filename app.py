"""
Portfolio API - Main Application Entry Point
Application Factory Pattern with one blueprint per resource

This module initializes the Flask application with all necessary extensions,
configurations, and middleware. All actual route handling is delegated to blueprints.
"""

import os
from datetime import datetime, timezone
from flask import Flask, jsonify, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from config import get_config
from extensions import db, cors, login_manager
from models import ValidationError
from utils.security import check_rate_limit, load_user_from_request

# Import all blueprints
from blueprints.auth import auth_bp
from blueprints.blogs import blogs_bp
from blueprints.projects import projects_bp
from blueprints.courses import courses_bp
from blueprints.contact import contact_bp
from blueprints.admin import admin_bp

CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
CORS_HEADERS = ['Content-Type', 'Authorization']


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance
    """

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(get_config(config_name))
    app.json.sort_keys = False
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Client IPs come from X-Forwarded-For only when set by our own proxies
    if app.config['TRUSTED_PROXY_COUNT']:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config['TRUSTED_PROXY_COUNT'])

    # Initialize extensions with app
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    @app.route('/api/health')
    def health_check():
        return jsonify({
            'status': 'OK',
            'message': 'Server is running smoothly',
            'timestamp': _now_iso()
        }), 200

    @app.route('/api/test-connection')
    def test_connection():
        try:
            db.session.execute(text('SELECT 1'))
            db_status = 'connected'
        except SQLAlchemyError as e:
            db.session.rollback()
            app.logger.error(f"Database check failed: {str(e)}")
            db_status = 'disconnected'

        return jsonify({
            'message': 'Full stack test successful!',
            'database': db_status,
            'timestamp': _now_iso(),
            'environment': app.config['ENV_NAME']
        })

    return app


def _now_iso():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.request_loader(load_user_from_request)
    cors.init_app(
        app,
        resources=r'/api/*',
        origins=app.config['CORS_ORIGINS'],
        methods=CORS_METHODS,
        allow_headers=CORS_HEADERS
    )

    # Create tables if they don't exist
    with app.app_context():
        try:
            db.create_all()
            db.session.execute(text('SELECT 1'))
            app.logger.info("✓ Database initialized successfully")
        except SQLAlchemyError as e:
            app.logger.error(f"✗ Database initialization failed: {str(e)}")
            raise


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(blogs_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(courses_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(admin_bp)


def _error(message, status, **extra):
    body = {'success': False, 'message': message}
    body.update(extra)
    return jsonify(body), status


def register_error_handlers(app):
    """Register JSON error handlers"""

    @app.errorhandler(ValidationError)
    def validation_error(e):
        db.session.rollback()
        return _error(f'Validation Error: {e}', 400)

    @app.errorhandler(404)
    def route_not_found(e):
        return _error('Route not found', 404)

    @app.errorhandler(413)
    def request_too_large(e):
        return _error('Request body is too large', 413)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return _error(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def internal_server_error(e):
        db.session.rollback()
        app.logger.exception(f"Server Error: {str(e)}")
        if app.config['ENV_NAME'] == 'production':
            return _error('Something went wrong!', 500)
        return _error('Something went wrong!', 500, error=str(e))


def register_hooks(app):
    """Register request/response hooks"""

    @app.before_request
    def before_request():
        """Apply the global API rate limit; CORS preflights are not counted"""
        if request.method != 'OPTIONS' and request.path.startswith('/api/'):
            retry_after = check_rate_limit()
            if retry_after:
                response = jsonify({
                    'success': False,
                    'message': 'Too many requests, please try again later.'
                })
                response.status_code = 429
                response.headers['Retry-After'] = str(retry_after)
                return response
        return None

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'no-referrer'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response


# Create app instance for gunicorn
app = create_app()

if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
