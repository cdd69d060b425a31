import os


def _env_flag(name, default='false'):
    return os.getenv(name, default=default).lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Base configuration class. Contains default configuration settings + configuration settings applicable to all environments.
    """
    # Default settings
    FLASK_ENV = 'development'
    DEBUG = False
    TESTING = False

    # Settings applicable to all environments
    SECRET_KEY = os.getenv('SECRET_KEY', default='A very terrible secret key.')
    # Relative SQLite paths are resolved against the instance folder
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', default='sqlite:///learning-log.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_TO_STDOUT = _env_flag('LOG_TO_STDOUT')

    # Authentication: when disabled, the logs API is open and entries have no owner
    AUTH_REQUIRED = _env_flag('AUTH_REQUIRED')
    AUTH_TOKEN_LIFETIME_MINUTES = int(os.getenv('AUTH_TOKEN_LIFETIME_MINUTES', default='60'))

    # Request bodies may carry an inline image (data URL)
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024

    # API documentation
    APIFAIRY_TITLE = 'Learning Log API'
    APIFAIRY_VERSION = '0.1'
    APIFAIRY_UI = 'elements'


class ProductionConfig(Config):
    FLASK_ENV = 'production'


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URI', default='sqlite://')
    LOG_TO_STDOUT = True
