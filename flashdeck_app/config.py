# File: flashdeck_app/config.py

import os

from dotenv import load_dotenv

load_dotenv()

# Project root (the directory holding flashdeck_app/)
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Default SQLite database, stored in database/ at the project root
DATABASE_PATH = os.path.join(BASE_DIR, "database", "flashdeck.db")


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask configuration for Flashdeck."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, though env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    LOG_JSON = _env_bool('LOG_JSON')
    LOG_TO_FILE = _env_bool('LOG_TO_FILE', True)

    # AI card generation (Gemini)
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY') or os.environ.get('GOOGLE_API_KEY')
    # Comma-separated list; later models are tried when earlier ones fail
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash-lite-001')
    AI_MAX_RETRIES = int(os.environ.get('AI_MAX_RETRIES', 2))
    AI_DEFAULT_CARD_COUNT = 20

    # Plan quota overrides, QUOTA_{LIMIT_KEY}_{ROLE}
    QUOTA_LIMIT_DECKS_FREE = os.environ.get('QUOTA_LIMIT_DECKS_FREE')

    @classmethod
    def init_app(cls, app):
        """Create the directories the configuration points at."""
        uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
        if uri == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        if app.config.get('LOG_TO_FILE'):
            os.makedirs(app.config['LOG_DIR'], exist_ok=True)
