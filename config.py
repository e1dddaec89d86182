import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    ENV_NAME = 'development'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # JWT Settings
    JWT_SECRET = os.environ.get('JWT_SECRET', 'CHANGE-THIS-JWT-SECRET-IN-PRODUCTION')
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRE = os.environ.get('JWT_EXPIRE', '30d')

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Request Settings
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024  # 50MB

    # Front end
    CLIENT_URL = os.environ.get('CLIENT_URL', 'http://localhost:3000')
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:3000,http://localhost:3001').split(',')
        if origin.strip()
    ]

    # Rate Limiting
    RATE_LIMIT_WINDOW = int(os.environ.get('RATE_LIMIT_WINDOW', 15 * 60))
    RATE_LIMIT_MAX_REQUESTS = int(os.environ.get('RATE_LIMIT_MAX_REQUESTS', 1000))
    LOGIN_MAX_ATTEMPTS = int(os.environ.get('LOGIN_MAX_ATTEMPTS', 3))
    LOGIN_ATTEMPT_WINDOW = int(os.environ.get('LOGIN_ATTEMPT_WINDOW', 30))

    # Reverse proxies in front of the app; 0 ignores X-Forwarded-For
    TRUSTED_PROXY_COUNT = int(os.environ.get('TRUSTED_PROXY_COUNT', 0))

    # Token lifetimes (seconds)
    RESET_TOKEN_TTL = 60 * 60
    VERIFICATION_TOKEN_TTL = 24 * 60 * 60

    # Email Settings
    EMAIL_HOST = os.environ.get('EMAIL_HOST', 'smtp.gmail.com')
    EMAIL_PORT = int(os.environ.get('EMAIL_PORT', 587))
    EMAIL_USERNAME = os.environ.get('EMAIL_USERNAME')
    EMAIL_PASSWORD = os.environ.get('EMAIL_PASSWORD')

    # Google OAuth
    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    ENV_NAME = 'production'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = False
    TESTING = True
    ENV_NAME = 'testing'
    JWT_SECRET = 'testing-jwt-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # For in-memory SQLite during tests, keep engine options empty to avoid
    # passing invalid pool settings to SQLite's StaticPool.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CLIENT_URL = 'http://localhost:3000'
    CORS_ORIGINS = ['http://localhost:3000']
    EMAIL_USERNAME = None
    EMAIL_PASSWORD = None
    GOOGLE_CLIENT_ID = 'test-client-id.apps.googleusercontent.com'


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
