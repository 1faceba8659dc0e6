# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv()


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SQLITE_DB_PATH = os.path.join(BASE_DIR, 'bible_nav.db')
    DATABASE_URL = os.getenv('DATABASE_URL', f"sqlite:///{SQLITE_DB_PATH}")
    AUTO_CREATE_TABLES = _env_bool('AUTO_CREATE_TABLES', True)

    SECRET_KEY = os.getenv('SECRET_KEY', 'change-me-in-production')
    TOKEN_EXPIRATION_HOURS = int(os.getenv('TOKEN_EXPIRATION_HOURS', 24 * 30))
    AUTH_COOKIE_NAME = os.getenv('AUTH_COOKIE_NAME', 'bible_nav_session')
    AUTH_COOKIE_SECURE = _env_bool('AUTH_COOKIE_SECURE', False)

    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', '*').split(',') if o.strip()]

    # Third-party scripture providers
    BIBLE_API_BASE_URL = os.getenv('BIBLE_API_BASE_URL', 'https://bible-api.com/')
    BIBLE_SUPERSEARCH_API_BASE_URL = os.getenv('BIBLE_SUPERSEARCH_API_BASE_URL', 'https://api.biblesupersearch.com/api/')
    VERSE_OF_THE_DAY_API_URL = os.getenv(
        'VERSE_OF_THE_DAY_API_URL',
        'https://beta.ourmanna.com/api/v1/get?format=json&order=daily'
    )
    SCRIPTURE_CACHE_TTL_SECONDS = int(os.getenv('SCRIPTURE_CACHE_TTL_SECONDS', 12 * 60 * 60))
    SCRIPTURE_CACHE_MAX_ENTRIES = int(os.getenv('SCRIPTURE_CACHE_MAX_ENTRIES', 2048))
    SCRIPTURE_REQUEST_TIMEOUT = float(os.getenv('SCRIPTURE_REQUEST_TIMEOUT', 10))

    # AI assistant
    ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
    AI_MODEL = os.getenv('AI_MODEL', 'claude-3-haiku-20240307')
    AI_MAX_TOKENS = int(os.getenv('AI_MAX_TOKENS', 1024))


class TestingConfig(Config):
    TESTING = True
    DATABASE_URL = 'sqlite:///:memory:'
    AUTO_CREATE_TABLES = True
    SECRET_KEY = 'test-secret-key'
    ANTHROPIC_API_KEY = None
    SCRIPTURE_CACHE_MAX_ENTRIES = 128
