"""
Flask application configuration classes.
Provides configuration for development, production, and testing environments.
"""

import os


class Config:
    """Base configuration class with common settings."""

    # Secret key for session management
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or 'instance/lakes.db'

    # JSON snapshots written after every lake mutation
    BACKUP_DIR = os.environ.get('BACKUP_DIR') or 'instance/backups'

    # Fernet key used for name/phone/email at rest
    ENCRYPTION_KEY = os.environ.get('ENCRYPTION_KEY') or 'V1QsYBbu0m0dp3eTWPc6zSHJ6sb-Ol6-hcXqaIbOJ8E='

    # Bearer token for operator endpoints
    ADMIN_API_TOKEN = os.environ.get('ADMIN_API_TOKEN') or 'dev-admin-token'

    # Pagination
    ITEMS_PER_PAGE = int(os.environ.get('ITEMS_PER_PAGE', 20))

    # Timezone used for year buckets and day matching
    TIMEZONE = os.environ.get('TIMEZONE') or 'Europe/Warsaw'

    # Outbound mail
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL') or 'http://localhost:5000/lake/'
    MAIL_SERVER = os.environ.get('MAIL_SERVER') or ''
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME') or ''
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD') or ''
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER') or ''

    # Application settings
    APP_NAME = 'Rezerwacje Łowisk'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False

    SECRET_KEY = os.environ.get('SECRET_KEY') or Config.SECRET_KEY
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or Config.DATABASE_PATH

    @classmethod
    def validate(cls) -> None:
        """Validate that required production environment variables are set."""
        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")
        if not os.environ.get('ENCRYPTION_KEY'):
            raise ValueError("ENCRYPTION_KEY environment variable must be set in production")
        if not os.environ.get('ADMIN_API_TOKEN'):
            raise ValueError("ADMIN_API_TOKEN environment variable must be set in production")
        if not os.environ.get('DATABASE_PATH'):
            raise ValueError("DATABASE_PATH environment variable must be set in production")


class TestConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    DATABASE_PATH = os.environ.get('DATABASE_PATH', ':memory:')
    SECRET_KEY = 'test-secret-key'
    ENCRYPTION_KEY = 'p8K0s6m2ZQy1n2Wc4Qe4VqkYx2mYJ3JZ8JtqN7oRk1A='
    ADMIN_API_TOKEN = 'test-admin-token'
    MAIL_SERVER = ''


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
