"""
Application Configuration

Centralizes all Flask and importer configuration settings.
"""

import os

from constants import (
    IMPORT_MAX_REDIRECTS,
    IMPORT_MAX_RESPONSE_SIZE,
    IMPORT_TIMEOUT,
    IMPORT_USER_AGENT,
)


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Importer settings
    IMPORT_TIMEOUT = int(os.environ.get('IMPORT_TIMEOUT', IMPORT_TIMEOUT))
    IMPORT_MAX_REDIRECTS = IMPORT_MAX_REDIRECTS
    IMPORT_MAX_RESPONSE_SIZE = IMPORT_MAX_RESPONSE_SIZE
    IMPORT_USER_AGENT = os.environ.get('IMPORT_USER_AGENT', IMPORT_USER_AGENT)
    # Refuse URLs pointing at localhost/private networks
    IMPORT_BLOCK_PRIVATE_HOSTS = _env_flag('IMPORT_BLOCK_PRIVATE_HOSTS', True)


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    IMPORT_BLOCK_PRIVATE_HOSTS = False


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
