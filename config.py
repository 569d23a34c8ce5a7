import os
import secrets
from dotenv import load_dotenv
from typing import Optional
from sqlalchemy.engine import URL
import pytz
from utils.datetime_utils import get_timezone

# Find the absolute path of the root directory
basedir = os.path.abspath(os.path.dirname(__file__))

# Load the .env file from the root directory
load_dotenv(os.path.join(basedir, '.env'))


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid"""
    pass


def build_database_uri(environ=None) -> str:
    """
    Build the PostgreSQL connection URL.

    DATABASE_URL wins when set. Otherwise the URL is assembled from the DB_*
    variables, with defaults suited to a local development database.

    Raises:
        ConfigurationError: If DB_TZ is not a known timezone
    """
    environ = os.environ if environ is None else environ

    database_url = environ.get('DATABASE_URL')
    if database_url:
        # Heroku style URLs still use the old dialect name
        if database_url.startswith('postgres://'):
            database_url = 'postgresql://' + database_url[len('postgres://'):]
        return database_url

    tz = environ.get('DB_TZ', 'Asia/Jakarta')
    try:
        get_timezone(tz)
    except pytz.UnknownTimeZoneError:
        raise ConfigurationError(f"DB_TZ is not a known timezone: {tz}")

    url = URL.create(
        'postgresql+psycopg2',
        username=environ.get('DB_USER', 'appuser'),
        password=environ.get('DB_PASSWORD', 'appsecret'),
        host=environ.get('DB_HOST', '127.0.0.1'),
        port=int(environ.get('DB_PORT', '5432')),
        database=environ.get('DB_NAME', 'contactsdb'),
        query={
            'sslmode': environ.get('DB_SSLMODE', 'disable'),
            'options': f'-c timezone={tz}',
        },
    )
    return url.render_as_string(hide_password=False)


class Config:
    """
    Base configuration class. Contains default configuration settings
    and settings applicable to all environments.
    """
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)
    FLASK_ENV = os.environ.get('FLASK_ENV')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Database settings
    SQLALCHEMY_DATABASE_URI = build_database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Connection pool: 5 kept open, up to 10 in total, recycled hourly
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': int(os.environ.get('DB_POOL_SIZE', '5')),
        'max_overflow': int(os.environ.get('DB_MAX_OVERFLOW', '5')),
        'pool_recycle': int(os.environ.get('DB_POOL_RECYCLE', '3600')),
        'pool_pre_ping': True,
    }

    # Application settings
    MAX_CONTENT_LENGTH = 64 * 1024  # contact form payloads are small
    JSON_SORT_KEYS = False

    @staticmethod
    def get_required_env(key: str) -> str:
        """Get required environment variable or raise error"""
        value = os.environ.get(key)
        if not value:
            raise ConfigurationError(f"Required environment variable {key} is not set")
        return value

    @classmethod
    def init_app(cls, app):
        """Initialize application with this config"""
        pass


class DevelopmentConfig(Config):
    """Development environment configuration"""
    DEBUG = True
    TESTING = False

    SQLALCHEMY_DATABASE_URI = os.environ.get('DEV_DATABASE_URL') or \
        Config.SQLALCHEMY_DATABASE_URI


class TestingConfig(Config):
    """Testing environment configuration"""
    TESTING = True
    DEBUG = True

    # Use in-memory SQLite for tests
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # SQLite does not take pool sizing arguments
    SQLALCHEMY_ENGINE_OPTIONS = {}


class ProductionConfig(Config):
    """Production environment configuration"""
    DEBUG = False
    TESTING = False

    @classmethod
    def init_app(cls, app):
        """Production-specific initialization"""
        Config.init_app(app)

        # Refuse to fall back to the local development defaults
        if not (os.environ.get('DATABASE_URL') or os.environ.get('DB_HOST')):
            raise ConfigurationError(
                "Missing required environment variables: DATABASE_URL or DB_HOST"
            )
        cls.get_required_env('SECRET_KEY')

        import logging
        from logging.handlers import SysLogHandler
        syslog_handler = SysLogHandler()
        syslog_handler.setLevel(logging.WARNING)
        app.logger.addHandler(syslog_handler)


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name: Optional[str] = None) -> type[Config]:
    """Get configuration class based on environment"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    return config.get(config_name, DevelopmentConfig)
