# Configuration file for the chat server

import json
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Settings are resolved in this order: environment variables (a `.env` file
# next to this module is loaded first), then `config.json`, then the
# defaults below.
_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(_BASE_DIR, '.env'))
_JSON_PATH = os.environ.get('CHATAPP_CONFIG', os.path.join(_BASE_DIR, 'config.json'))

# Defaults
_defaults = {
    'SECRET_KEY': 'change-me-in-production',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///chatapp.db',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'HOST': '0.0.0.0',
    'PORT': 5000,
    'FRONTEND_DIST': os.path.join('frontend', 'dist'),
    'CORS_ORIGINS': ['http://localhost:3000'],
    'CORS_METHODS': ['GET', 'HEAD', 'PUT', 'PATCH', 'POST', 'DELETE'],
    'API_RATE_LIMIT': '100 per 15 minutes',
    'RATELIMIT_STORAGE_URI': 'memory://',
    'RATELIMIT_HEADERS_ENABLED': True,
    'FORCE_HTTPS': False,
    'SESSION_COOKIE_SECURE': False,
    'SESSION_COOKIE_SAMESITE': 'Lax',
    'TRUST_PROXY': 0,
    'WTF_CSRF_TIME_LIMIT': 3600,
    'MAX_MESSAGE_LENGTH': 5000,
    'SOCKETIO_ASYNC_MODE': 'eventlet',
    'LOG_LEVEL': 'INFO',
}

_cfg = {}
try:
    with open(_JSON_PATH, 'r', encoding='utf-8') as f:
        _cfg = json.load(f) or {}
except FileNotFoundError:
    _cfg = {}
except (OSError, ValueError) as e:
    logger.warning("Ignoring unreadable config file %s: %s", _JSON_PATH, e)
    _cfg = {}


def _coerce(raw, default):
    # Environment values are strings; convert to the type of the default
    if isinstance(default, bool):
        return raw.strip().lower() in ('1', 'true', 'yes', 'on')
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, list):
        return [part.strip() for part in raw.split(',') if part.strip()]
    return raw


# Helper to get value from environment, JSON or defaults
def _get(key):
    if key in os.environ:
        return _coerce(os.environ[key], _defaults.get(key))
    return _cfg.get(key, _defaults.get(key))


# Security
SECRET_KEY = _get('SECRET_KEY')

# Database
SQLALCHEMY_DATABASE_URI = _get('SQLALCHEMY_DATABASE_URI')
SQLALCHEMY_TRACK_MODIFICATIONS = _get('SQLALCHEMY_TRACK_MODIFICATIONS')

# Server
HOST = _get('HOST')
PORT = int(_get('PORT'))
FRONTEND_DIST = _get('FRONTEND_DIST')
TRUST_PROXY = int(_get('TRUST_PROXY'))
SOCKETIO_ASYNC_MODE = _get('SOCKETIO_ASYNC_MODE')
LOG_LEVEL = _get('LOG_LEVEL')

# CORS (single allowed origin by default)
CORS_ORIGINS = list(_get('CORS_ORIGINS') or [])
CORS_METHODS = list(_get('CORS_METHODS') or [])

# Rate limiting for /api/ routes
API_RATE_LIMIT = _get('API_RATE_LIMIT')
RATELIMIT_STORAGE_URI = _get('RATELIMIT_STORAGE_URI')
RATELIMIT_HEADERS_ENABLED = _get('RATELIMIT_HEADERS_ENABLED')

# Cookies and transport
FORCE_HTTPS = _get('FORCE_HTTPS')
SESSION_COOKIE_SECURE = _get('SESSION_COOKIE_SECURE')
SESSION_COOKIE_SAMESITE = _get('SESSION_COOKIE_SAMESITE')
SESSION_COOKIE_HTTPONLY = True

# CSRF
WTF_CSRF_TIME_LIMIT = _get('WTF_CSRF_TIME_LIMIT')

# Messages
MAX_MESSAGE_LENGTH = int(_get('MAX_MESSAGE_LENGTH'))
