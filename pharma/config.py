"""
Application configuration

Settings are read from the environment once at startup into an AppConfig and
handed to create_app(). Nothing below the app factory reads os.environ.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

BASE_DIR = Path(__file__).resolve().parent.parent

_TRUE_VALUES = ('true', '1', 'yes', 'on')


def _env_bool(environ: Mapping[str, str], key: str, default: bool) -> bool:
    value = environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    value = environ.get(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer, got {value!r}")


def default_database_url() -> str:
    instance_dir = BASE_DIR / 'instance'
    return f"sqlite:///{(instance_dir / 'pharma.db').resolve()}"


@dataclass
class AppConfig:
    """Everything the application needs to know about its environment."""

    secret_key: str
    database_url: str = field(default_factory=default_database_url)
    debug: bool = False
    testing: bool = False
    host: str = '127.0.0.1'
    port: int = 3002

    # HTTPS / cookies
    enable_https: bool = True
    force_https_redirect: bool = True
    session_cookie_secure: bool = True
    remember_cookie_secure: bool = True
    session_lifetime_seconds: int = 4 * 3600

    # Accounts
    admin_username: str = 'admin'
    admin_password: Optional[str] = None
    allow_signup: bool = True

    # Logging
    log_dir: str = 'logs'
    log_level: str = 'INFO'

    # Protection
    ratelimit_enabled: bool = True
    login_rate_limit: str = '10 per minute'
    csrf_enabled: bool = True

    # Inventory
    expiring_window_days: int = 30

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'AppConfig':
        """Build a config from environment variables (os.environ by default)."""
        env = os.environ if environ is None else environ

        secret_key = env.get('SECRET_KEY')
        if not secret_key:
            raise RuntimeError("SECRET_KEY environment variable is required")

        return cls(
            secret_key=secret_key,
            database_url=env.get('DATABASE_URL') or default_database_url(),
            debug=_env_bool(env, 'FLASK_DEBUG', False),
            host=env.get('FLASK_HOST', '127.0.0.1'),
            port=_env_int(env, 'FLASK_PORT', 3002),
            enable_https=_env_bool(env, 'ENABLE_HTTPS', True),
            force_https_redirect=_env_bool(env, 'FORCE_HTTPS_REDIRECT', True),
            session_cookie_secure=_env_bool(env, 'SESSION_COOKIE_SECURE', True),
            remember_cookie_secure=_env_bool(env, 'REMEMBER_COOKIE_SECURE', True),
            session_lifetime_seconds=_env_int(env, 'PERMANENT_SESSION_LIFETIME', 4 * 3600),
            admin_username=env.get('ADMIN_USER') or 'admin',
            admin_password=env.get('ADMIN_PASS') or None,
            allow_signup=_env_bool(env, 'ALLOW_SIGNUP', True),
            log_dir=env.get('LOG_DIR', 'logs'),
            log_level=env.get('LOG_LEVEL', 'INFO').upper(),
            ratelimit_enabled=_env_bool(env, 'RATELIMIT_ENABLED', True),
            login_rate_limit=env.get('LOGIN_RATE_LIMIT', '10 per minute'),
            expiring_window_days=_env_int(env, 'EXPIRING_WINDOW_DAYS', 30),
        )

    def flask_settings(self) -> dict:
        """Translate into the keys Flask and its extensions look for."""
        return {
            'SECRET_KEY': self.secret_key,
            'SQLALCHEMY_DATABASE_URI': self.database_url,
            'SQLALCHEMY_TRACK_MODIFICATIONS': False,
            'DEBUG': self.debug,
            'TESTING': self.testing,
            'ENABLE_HTTPS': self.enable_https,
            'FORCE_HTTPS_REDIRECT': self.force_https_redirect,
            'SESSION_COOKIE_SECURE': self.session_cookie_secure,
            'SESSION_COOKIE_HTTPONLY': True,
            'SESSION_COOKIE_SAMESITE': 'Lax',
            'PERMANENT_SESSION_LIFETIME': self.session_lifetime_seconds,
            'REMEMBER_COOKIE_SECURE': self.remember_cookie_secure,
            'REMEMBER_COOKIE_HTTPONLY': True,
            'RATELIMIT_ENABLED': self.ratelimit_enabled,
            'WTF_CSRF_ENABLED': self.csrf_enabled,
        }
