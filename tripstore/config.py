"""
Configuration settings for the Trip Store order-intake backend
"""
import json
import os
from datetime import timedelta

from tripstore.exceptions import ConfigError


def _first_env(*names):
    """Return the first non-empty environment value among ``names``."""
    for name in names:
        value = (os.environ.get(name) or '').strip()
        if value:
            return value
    return None


def _env_list(*names):
    """Ordered list of the non-empty values of ``names`` (duplicates dropped)."""
    values = []
    for name in names:
        value = (os.environ.get(name) or '').strip()
        if value and value not in values:
            values.append(value)
    return values


class Config:
    """Flask application configuration"""

    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

    # Admin credentials, compared exactly (case-sensitive)
    ADMIN_USERNAME = _first_env('ADMIN_USER', 'ADMIN_USERNAME')
    ADMIN_PASSWORD = _first_env('ADMIN_PASS', 'ADMIN_PASSWORD')

    # Admin session token (Flask-JWT-Extended)
    JWT_SECRET_KEY = _first_env('ADMIN_JWT_SECRET')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ['cookies', 'headers']
    JWT_ACCESS_COOKIE_NAME = 'admin_token'
    JWT_COOKIE_SECURE = True
    JWT_COOKIE_SAMESITE = 'Lax'
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_SESSION_COOKIE = False

    # Document store: 'firestore' in production, 'sql' for local runs
    DOCUMENT_STORE = os.environ.get('DOCUMENT_STORE') or 'firestore'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'tripstore.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Firebase service account JSON and bucket
    FIREBASE_CONFIG = os.environ.get('FIREBASE_CONFIG')
    FIREBASE_STORAGE_BUCKET = os.environ.get('FIREBASE_STORAGE_BUCKET')

    # Blob store: 'gcs' or 'local'
    BLOB_STORE = os.environ.get('BLOB_STORE') or 'gcs'
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'instance', 'uploads')
    SCREENSHOT_MAX_BYTES = 3 * 1024 * 1024
    MAX_CONTENT_LENGTH = 4 * 1024 * 1024

    # Transactional email (Resend)
    RESEND_API_KEY = os.environ.get('RESEND_API_KEY')
    MAIL_SENDER = _first_env('MAIL_SENDER', 'SMTP_USER', 'EMAIL_USER')
    NOTIFICATION_RECIPIENTS = _env_list('NOTIFICATION_EMAIL', 'SMTP_USER', 'EMAIL_USER')
    STORE_SENDER_NAME = 'Trip Store'
    SUPPORT_SENDER_NAME = 'فريق الدعم'
    SUGGESTION_SENDER_NAME = 'اقتراح جديد'

    # Telegram operator channel
    TELEGRAM_BOT_TOKEN = os.environ.get('TELEGRAM_BOT_TOKEN')
    TELEGRAM_CHAT_ID = os.environ.get('TELEGRAM_CHAT_ID')
    TELEGRAM_API_URL = 'https://api.telegram.org'
    TELEGRAM_TIMEOUT = 10


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'S3cret!'
    JWT_SECRET_KEY = 'test-signing-secret-with-enough-length'
    DOCUMENT_STORE = 'sql'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    BLOB_STORE = 'local'
    RESEND_API_KEY = None
    MAIL_SENDER = 'support@tripstore.test'
    NOTIFICATION_RECIPIENTS = ['ops@tripstore.test']
    TELEGRAM_BOT_TOKEN = None
    TELEGRAM_CHAT_ID = None


def notification_recipient(config):
    """First configured operator address, or None."""
    for address in config.get('NOTIFICATION_RECIPIENTS') or []:
        if address:
            return address
    return None


def load_service_account(raw):
    """Parse the FIREBASE_CONFIG JSON, restoring escaped newlines in the key."""
    if not raw:
        return None
    try:
        info = json.loads(raw)
    except ValueError as exc:
        raise ConfigError(['FIREBASE_CONFIG (invalid JSON)']) from exc
    if info.get('private_key'):
        info['private_key'] = info['private_key'].replace('\\n', '\n')
    return info


def validate_config(config):
    """Raise ConfigError listing every missing required setting."""
    missing = [key for key in ('ADMIN_USERNAME', 'ADMIN_PASSWORD', 'JWT_SECRET_KEY')
               if not config.get(key)]

    if config.get('DOCUMENT_STORE') not in ('firestore', 'sql'):
        missing.append('DOCUMENT_STORE (firestore|sql)')
    if config.get('BLOB_STORE') not in ('gcs', 'local'):
        missing.append('BLOB_STORE (gcs|local)')
    if config.get('BLOB_STORE') == 'gcs' and not config.get('FIREBASE_STORAGE_BUCKET'):
        missing.append('FIREBASE_STORAGE_BUCKET')

    if missing:
        raise ConfigError(missing)
