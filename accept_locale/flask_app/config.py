"""Flask application configuration."""
import json
import os
from pathlib import Path

LOCALES_ROOT = Path(__file__).resolve().parents[1] / 'shared' / 'locales'

DEFAULT_LANGS = {
    'en': ['en', 'en-*'],
    'ja': ['ja', 'ja-JP'],
    'zh': ['zh', 'zh-*'],
}


def _json_env(name: str, default):
    raw = os.environ.get(name)
    if not raw:
        return default
    return json.loads(raw)


class Config:
    """Base configuration."""

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Locale negotiation
    LOCALE_DEFAULT = os.environ.get('LOCALE_DEFAULT', 'en')
    LOCALE_LANGS = _json_env('LOCALE_LANGS', DEFAULT_LANGS)  # {"en": ["en", "en-*"], ...}
    LOCALE_ALIASES = _json_env('LOCALE_ALIASES', {})  # {"zh": ".zh"}
    LOCALE_DIR = os.environ.get('LOCALE_DIR', str(LOCALES_ROOT))

    # Fail startup on unreadable locale files; otherwise serve default-only
    LOCALE_STRICT = os.environ.get('LOCALE_STRICT', 'true').strip().lower() in {'1', 'true', 'yes', 'y'}


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Test configuration."""
    DEBUG = False
    TESTING = True


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
