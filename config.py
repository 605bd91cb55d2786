import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))

MIN_JWT_SECRET_LENGTH = 32

DEV_CORS_ORIGINS = [
    'http://localhost:5173',  # Vite
    'http://localhost:3000',
    'http://localhost:8080',
    'http://127.0.0.1:5173',
    'http://127.0.0.1:3000',
    'http://127.0.0.1:8080',
]


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing or unusable."""


def _split_origins(value):
    return [origin.strip() for origin in (value or '').split(',') if origin.strip()]


class Config:
    # Token signing
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET')
    JWT_ALGORITHM = 'HS256'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    PASSWORD_RESET_EXPIRES = timedelta(hours=1)

    # Session cookie (only used by the Google login round trip)
    SECRET_KEY = os.environ.get('SESSION_SECRET') or JWT_SECRET_KEY
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Password hashing
    BCRYPT_LOG_ROUNDS = 10
    # bcrypt only reads 72 bytes; longer passwords are SHA-256 pre-hashed
    BCRYPT_HANDLE_LONG_PASSWORDS = True

    # Front end
    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:5173').rstrip('/')
    CORS_ORIGINS = DEV_CORS_ORIGINS + _split_origins(os.environ.get('FRONTEND_URL'))

    # Email configuration
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'True').lower() == 'true'
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER') or MAIL_USERNAME

    # File upload settings
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 16 * 1024 * 1024))
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(basedir, 'uploads'))
    AVATAR_MAX_BYTES = 5 * 1024 * 1024
    AVATAR_MIME_TYPES = ('image/jpeg', 'image/jpg', 'image/png', 'image/gif', 'image/webp')

    # Google sign-in
    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRET = os.environ.get('GOOGLE_CLIENT_SECRET')
    GOOGLE_HTTP_TIMEOUT = int(os.environ.get('GOOGLE_HTTP_TIMEOUT', 10))

    # Logging
    LOG_TO_STDOUT = os.environ.get('LOG_TO_STDOUT', 'False').lower() == 'true'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    DEBUG = False
    TESTING = False

    @staticmethod
    def validate(app_config):
        """Refuse to start without a usable signing secret and database."""
        secret = app_config.get('JWT_SECRET_KEY')
        if not secret:
            raise ConfigurationError('JWT_SECRET is not defined in environment variables')
        if len(secret) < MIN_JWT_SECRET_LENGTH:
            raise ConfigurationError(
                f'JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters long')
        if not app_config.get('SQLALCHEMY_DATABASE_URI'):
            raise ConfigurationError('DATABASE_URL is not defined in environment variables')


class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True
    CORS_ORIGINS = _split_origins(os.environ.get('FRONTEND_URL'))


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET_KEY = 'test-jwt-secret-key-with-enough-entropy-0123456789'
    SECRET_KEY = 'test-session-secret'
    BCRYPT_LOG_ROUNDS = 4
    MAIL_USERNAME = None
    MAIL_PASSWORD = None
    MAIL_SUPPRESS_SEND = True
    FRONTEND_URL = 'http://localhost:5173'
    GOOGLE_CLIENT_ID = None
    GOOGLE_CLIENT_SECRET = None


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': Config
}


def get_config():
    """Get configuration based on environment variable"""
    env = os.environ.get('FLASK_ENV', 'production').lower()
    return config.get(env, config['default'])
