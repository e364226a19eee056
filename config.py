"""
config.py - Configuration Classes
Manages different configurations for development, production, and testing environments.
"""

import os
from datetime import timedelta
from urllib.parse import quote_plus


def _postgres_uri_from_env():
    """
    Build a PostgreSQL URI from the PG_* environment variables.
    Returns None when PG_DATABASE is not set.
    """
    database = os.environ.get('PG_DATABASE')
    if not database:
        return None

    user = os.environ.get('PG_USER', 'postgres')
    password = os.environ.get('PG_PASSWORD', '')
    host = os.environ.get('PG_HOST', 'localhost')
    port = os.environ.get('PG_PORT', '5432')

    credentials = f"{quote_plus(user)}:{quote_plus(password)}" if password else quote_plus(user)
    return f"postgresql+psycopg2://{credentials}@{host}:{port}/{database}"


class Config:
    """
    Base Configuration Class
    Contains settings shared across all environments.
    """
    # Secret key used to sign the session cookie
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY') \
        or 'dev-secret-key-change-in-production'

    # Database configuration
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session configuration
    # Sessions last 7 days from login and are not extended by activity
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_REFRESH_EACH_REQUEST = False
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Password hashing cost factor
    BCRYPT_LOG_ROUNDS = 10

    # Google sign-in
    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRET = os.environ.get('GOOGLE_CLIENT_SECRET')
    GOOGLE_DISCOVERY_URL = os.environ.get(
        'GOOGLE_DISCOVERY_URL',
        'https://accounts.google.com/.well-known/openid-configuration'
    )
    GOOGLE_USERINFO_URL = 'https://www.googleapis.com/oauth2/v3/userinfo'

    # Storefront settings
    DEFAULT_PHOTO_URL = '/assets/images/defaultprofileimage.jpg'
    FEDERATED_PASSWORD_SENTINEL = 'google'  # Marks accounts that can only sign in with Google
    BESTSELLER_LIMIT = 3

    @classmethod
    def init_app(cls, app):
        """
        Initialize application with this config (optional hook)
        """
        pass


class DevelopmentConfig(Config):
    """
    Development Configuration
    Used for local development with debug mode enabled.
    """
    DEBUG = True
    TESTING = False

    # PostgreSQL when PG_* variables are set, otherwise a local SQLite file
    SQLALCHEMY_DATABASE_URI = os.environ.get('DEV_DATABASE_URL') or _postgres_uri_from_env() or \
        'sqlite:///' + os.path.join(os.path.dirname(os.path.abspath(__file__)), 'furryfriends_dev.db')

    # Log all SQL queries
    SQLALCHEMY_ECHO = True


class ProductionConfig(Config):
    """
    Production Configuration
    Used for deployed application with security hardened.
    """
    DEBUG = False
    TESTING = False

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or _postgres_uri_from_env() or \
        'postgresql+psycopg2://postgres@localhost/furryfriends'

    # Security settings
    SESSION_COOKIE_SECURE = True  # Require HTTPS for cookies

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,  # Recycle connections after 1 hour
        'pool_pre_ping': True,
    }

    SQLALCHEMY_ECHO = False

    @classmethod
    def init_app(cls, app):
        """
        Validate production settings when app is created
        """
        Config.init_app(app)

        if not (os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY')):
            raise ValueError("SESSION_SECRET environment variable must be set in production!")


class TestingConfig(Config):
    """
    Testing Configuration
    Used for running automated tests with isolated database.
    """
    DEBUG = False
    TESTING = True

    SECRET_KEY = 'testing-secret-key'

    # In-memory SQLite for fast tests
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # Faster password hashing for tests
    BCRYPT_LOG_ROUNDS = 4

    GOOGLE_CLIENT_ID = 'test-client-id'
    GOOGLE_CLIENT_SECRET = 'test-client-secret'

    SQLALCHEMY_ECHO = False


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
