"""
Configuration module for the SmartBin rewards backend.
Centralizes all configuration settings with environment variable support.
"""
import os


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes')


def _env_int(name, default=None):
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of seconds, got {value!r}")


class Config:
    """Base configuration class with settings common to all environments."""
    # Flask settings
    SECRET_KEY = os.environ.get("SESSION_SECRET") or "development-key-not-for-production"
    DEBUG = False
    TESTING = False

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or "sqlite:///smartbin.db"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_recycle": 300,            # Recycle connections every 5 minutes
        "pool_pre_ping": True,          # Test connections before use
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # Token settings. The signing key is SECRET_KEY.
    TOKEN_HEADER = 'x-access-token'
    TOKEN_ALGORITHM = 'HS256'
    TOKEN_EXPIRY_SECONDS = _env_int('TOKEN_EXPIRY_SECONDS')  # None: tokens never expire

    # Account settings
    PASSWORD_MIN_LENGTH = 1
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    ADMIN_REQUIRE_AUTH = _env_flag('ADMIN_REQUIRE_AUTH')

    # Rate limiting settings
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_STRATEGY = "fixed-window"
    LOGIN_RATE_LIMIT = "30 per minute"

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # Reward schedule: category -> (wallet reward, eco points)
    REWARD_SCHEDULE = {
        'Plastic': (10, 50),
    }
    DEFAULT_REWARD = (7, 20)
    DEFAULT_WASTE_CATEGORY = 'Plastic'
    ITEM_WEIGHT_KG = 0.5

    # Reward catalog: item -> (cost, cost type)
    REWARD_CATALOG = {
        'Metro Card Top-up': (50, 'money'),
        'Movie Ticket': (100, 'money'),
        'Reusable Bottle': (200, 'points'),
        'Plant a Tree': (500, 'points'),
    }
    ENFORCE_REWARD_CATALOG = _env_flag('ENFORCE_REWARD_CATALOG')


class DevelopmentConfig(Config):
    """Configuration for development environment."""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = (os.environ.get("DEV_DATABASE_URL")
                               or os.environ.get("DATABASE_URL")
                               or "sqlite:///smartbin-dev.db")


class TestingConfig(Config):
    """Configuration for testing environment."""
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'test-secret-key-for-testing-only'

    # Use in-memory database for testing
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}

    RATELIMIT_ENABLED = False
    TOKEN_EXPIRY_SECONDS = None
    ADMIN_REQUIRE_AUTH = False
    ENFORCE_REWARD_CATALOG = False
    ADMIN_EMAIL = None
    ADMIN_PASSWORD = None


class ProductionConfig(Config):
    """Configuration for production environment."""
    SQLALCHEMY_DATABASE_URI = os.environ.get("PROD_DATABASE_URL") or os.environ.get("DATABASE_URL")

    # Ensure these are set in production
    def __init__(self):
        if not os.environ.get("SESSION_SECRET"):
            raise ValueError("SESSION_SECRET must be set in production")
        if not self.SQLALCHEMY_DATABASE_URI:
            raise ValueError("PROD_DATABASE_URL or DATABASE_URL must be set in production")


# Create a mapping of environment names to configuration classes
config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig
}

# Default to development if not specified
active_config = config_by_name.get(os.environ.get('FLASK_ENV', 'development'), DevelopmentConfig)
