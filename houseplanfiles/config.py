"""
Configuration Module for the HousePlanFiles API

This module defines configuration classes for different environments:
- DevelopmentConfig: Local development with SQLite
- ProductionConfig: Production deployment with PostgreSQL
- TestingConfig: Automated testing configuration
"""

import os
import sys
from pathlib import Path


class Config:
    """Base configuration with common settings"""

    # Secret key for token signing. No insecure default; the app factory
    # generates an ephemeral key outside production.
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # Database configuration
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Pagination
    PRODUCTS_PER_PAGE = 12
    ADMIN_PRODUCTS_PER_PAGE = 20
    ADMIN_LIST_PER_PAGE = 10
    BLOGS_PER_PAGE = 9
    MEDIA_PER_PAGE = 24
    GALLERY_GROUPS_PER_PAGE = 12
    HOME_FLOOR_PLANS_LIMIT = 12
    SELLER_PUBLIC_LIMIT = 50

    # Bearer tokens (itsdangerous)
    TOKEN_SALT = 'houseplanfiles-api-token'
    TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', 60 * 60 * 24 * 30))

    # Email configuration
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'True').lower() == 'true'
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'noreply@houseplanfiles.com')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'houseplansdesignsfile@gmail.com')

    # File upload configuration
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
    UPLOAD_FOLDER = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'static', 'uploads')
    ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'pdf', 'dwg', 'doc', 'docx'}
    CLOUDINARY_URL = os.environ.get('CLOUDINARY_URL')

    # Public URLs used for share pages and absolute media links
    SITE_NAME = 'HousePlanFiles'
    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'https://www.houseplanfiles.com')
    BACKEND_URL = os.environ.get('BACKEND_URL', 'https://houseplansfiles-backend.vercel.app')
    DEFAULT_PRODUCT_IMAGE = 'uploads/default-house.jpg'
    DEFAULT_BLOG_IMAGE = 'uploads/default-blog.jpg'

    # Allowed SPA origins for CORS response headers
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'https://www.houseplanfiles.com,https://houseplanfiles.com,http://localhost:5173',
        ).split(',')
        if origin.strip()
    ]

    # Currency
    DEFAULT_CURRENCY = 'USD'
    CURRENCY_COOKIE = 'currency'

    # Voice navigation (Gemini generateContent REST API)
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-1.5-flash')
    GEMINI_API_BASE = os.environ.get('GEMINI_API_BASE', 'https://generativelanguage.googleapis.com/v1beta')
    GEMINI_TIMEOUT = float(os.environ.get('GEMINI_TIMEOUT', '8'))
    VOICE_MIN_CONFIDENCE = 0.6
    VOICE_CACHE_TTL_SECONDS = 300

    # Third-party chat widget
    CHAT_WIDGET_ID = os.environ.get('CHAT_WIDGET_ID', 'aaa7tm')
    CHAT_WIDGET_COOKIE = 'aisensy_closed_at'
    CHAT_WIDGET_COOLDOWN_SECONDS = 3 * 60

    # Rate limits for public write endpoints
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    # Reverse proxies in front of the app whose X-Forwarded-For hop is trusted.
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '0'))
    SUBMISSION_RATE_LIMIT = '10 per minute'
    VOICE_RATE_LIMIT = '30 per minute'


class DevelopmentConfig(Config):
    """Development environment configuration"""

    DEBUG = True
    TESTING = False

    # SQLAlchemy sqlite URLs must use forward slashes.
    _project_root = Path(__file__).resolve().parent.parent
    _default_db_path = (_project_root / 'houseplanfiles.db').resolve()

    _env_db_url = os.environ.get('DATABASE_URL')
    if _env_db_url and _env_db_url.strip().startswith('sqlite:'):
        _env_db_url = _env_db_url.replace('\\', '/')

    SQLALCHEMY_DATABASE_URI = _env_db_url or f"sqlite:///{_default_db_path.as_posix()}"
    SQLALCHEMY_ECHO = os.environ.get('SQLALCHEMY_ECHO') == '1'
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production environment configuration"""

    DEBUG = False
    TESTING = False
    SQLALCHEMY_ECHO = False
    PROXY_FIX_X_FOR = int(os.environ.get('PROXY_FIX_X_FOR', '1'))

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        """Resolve DATABASE_URL at instantiation time.

        Managed Postgres providers hand out ``postgres://`` URLs which
        SQLAlchemy rejects, and they require SSL.
        """
        db_uri = os.environ.get('DATABASE_URL')
        if not db_uri:
            print('FATAL: DATABASE_URL not set in environment', file=sys.stderr)
            return None

        if db_uri.startswith('postgres://'):
            db_uri = 'postgresql://' + db_uri[len('postgres://'):]

        if db_uri.startswith('postgresql://') and 'sslmode=' not in db_uri:
            separator = '&' if '?' in db_uri else '?'
            db_uri = f"{db_uri}{separator}sslmode=require"

        return db_uri


class TestingConfig(Config):
    """Testing environment configuration"""

    TESTING = True
    DEBUG = True

    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SECRET_KEY = 'test-secret-key'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    MAIL_SUPPRESS_SEND = True
    GEMINI_API_KEY = None


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
