"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Loads .env during development (no-op when missing)
load_dotenv()


_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def env_bool(name: str, default: bool = False) -> bool:
    """Read ``name`` from the environment as a flag (``default`` when unset)."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read ``name`` from the environment as an integer (``default`` when unset)."""
    val = os.getenv(name)
    return default if val is None or not val.strip() else int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints. Empty by default so the
        session endpoints live at ``/signin``, ``/token`` and so on.
    SECRET_KEY: str | None
        Flask secret; also the signing fallback when ``JWT_SECRET_KEY`` is
        unset.
    JWT_SECRET_KEY: str | None
        Process-wide key used by ``flask-jwt-extended`` to sign every token.
    JWT_ALGORITHM: str
        JWS algorithm for issued tokens.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    AUTH_SIGNIN_COMPARE_AND_SWAP: bool
        When ``True`` sign-in persists the refresh token only if no session
        is stored (first write wins). Defaults to last write wins.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = os.getenv("API_BASE_PREFIX", "")

    # Secrets / signing
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Session policy
    AUTH_SIGNIN_COMPARE_AND_SWAP = env_bool("AUTH_SIGNIN_COMPARE_AND_SWAP", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    CORS_MAX_AGE = env_int("CORS_MAX_AGE", 600)

    # Reverse proxy (number of trusted X-Forwarded-* hops)
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    # Build metadata reported by /health
    APP_VERSION = os.getenv("APP_VERSION", "dev")
    APP_COMMIT = os.getenv("APP_COMMIT", "unknown")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Keeps ``PROPAGATE_EXCEPTIONS`` off so error handlers render 500s the
      same way production does.
    """

    __test__ = False  # not a pytest test class

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    JWT_SECRET_KEY = "testing-signing-key-with-enough-entropy"
    LOG_LEVEL = "WARNING"
    AUTH_SIGNIN_COMPARE_AND_SWAP = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    No development secrets are baked in: an unset ``JWT_SECRET_KEY`` and
    ``SECRET_KEY`` surfaces as a signing error on the first issuance.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(name: str | None = None) -> type[BaseConfig]:
    """Return the configuration class for ``name`` (default: ``$APP_ENV``).

    Unknown or missing names fall back to :class:`DevelopmentConfig`.
    """
    selected = (name or os.getenv(ENV_VAR, "development")).strip().lower()
    return CONFIG_MAP.get(selected, DevelopmentConfig)
