"""
Ella Rises Admin - Configuration classes, selected by FLASK_ENV.
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def database_uri():
    """Build the store URI from DATABASE_URL or the discrete DB_* variables."""
    url = os.environ.get('DATABASE_URL')
    if url:
        # Managed hosts still hand out the legacy scheme
        if url.startswith('postgres://'):
            url = 'postgresql://' + url[len('postgres://'):]
        return url

    host = os.environ.get('DB_HOST', '127.0.0.1')
    user = os.environ.get('DB_USER', 'postgres')
    password = os.environ.get('DB_PASSWORD', '')
    name = os.environ.get('DB_NAME', 'ellarises_local')
    port = os.environ.get('DB_PORT', '5432')
    credentials = f"{user}:{password}" if password else user
    return f"postgresql://{credentials}@{host}:{port}/{name}"


class Config:
    SECRET_KEY = os.environ.get('SESSION_SECRET') or os.environ.get('SECRET_KEY', 'dev_key_please_change')
    SQLALCHEMY_DATABASE_URI = None
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    PORT = int(os.environ.get('PORT', 8080))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Server-side sessions: 'database' or 'memory'
    SESSION_BACKEND = 'database'
    SESSION_COOKIE_NAME = 'ellarises_session'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE')

    BABEL_DEFAULT_LOCALE = 'en'
    LANGUAGES = ['en', 'es']

    # Development-only login shortcut
    DEV_LOGIN_ENABLED = _env_flag('DEV_LOGIN_ENABLED')
    DEV_LOGIN_EMAIL = os.environ.get('DEV_LOGIN_EMAIL', 'test@ellarises.org')
    DEV_LOGIN_PASSWORD = os.environ.get('DEV_LOGIN_PASSWORD', 'test')

    ALLOW_SEED = True
    PRODUCTION = False


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = database_uri()


class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = database_uri()
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE', True)
    DEV_LOGIN_ENABLED = False
    ALLOW_SEED = False
    PRODUCTION = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SESSION_BACKEND = 'memory'
    SESSION_COOKIE_SECURE = False
    DEV_LOGIN_ENABLED = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
