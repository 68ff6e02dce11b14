"""
Configuration Classes for the Task Service.

Centralises all environment-dependent settings (listen port, feature-flag
provider credentials) into a hierarchy of configuration classes. The base
``Config`` class defines sensible development defaults, while subclasses
override only what differs per environment.

Key Concepts Demonstrated:
- Class-based configuration with inheritance
- Environment-variable overrides for twelve-factor app compliance
- Separate configuration profiles for development, testing, and production
"""

from __future__ import annotations

import os

DEFAULT_PORT = 3000


def parse_port(raw_port: str | None, default: int = DEFAULT_PORT) -> int:
    """
    Parse a listen port from an environment value.

    Args:
        raw_port: Raw value of the ``PORT`` variable, or ``None``.
        default: Port returned when the value is missing, non-numeric or
            not positive.

    Returns:
        A positive integer port.
    """
    if raw_port is None:
        return default
    try:
        port = int(raw_port.strip())
    except ValueError:
        return default
    return port if port > 0 else default


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean switch such as ``LAUNCHDARKLY_OFFLINE=true``."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """
    Base configuration with development-safe defaults.

    Attributes:
        SECRET_KEY: Flask session signing key.
        PORT: Port used by ``wsgi.py`` when running the development server.
        LAUNCHDARKLY_SDK_KEY: Server-side SDK key of the flag provider. When
            empty the flag client runs offline and every flag is off.
        LAUNCHDARKLY_OFFLINE: Force offline flag evaluation.
        FLAG_INIT_TIMEOUT: Seconds to wait for the flag client to initialise
            before treating flags as disabled.
    """

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "task-service-dev-secret-change-in-production"
    )
    PORT: int = parse_port(os.environ.get("PORT"))

    LAUNCHDARKLY_SDK_KEY: str = os.environ.get("LAUNCHDARKLY_SDK_KEY", "").strip()
    LAUNCHDARKLY_OFFLINE: bool = _env_flag("LAUNCHDARKLY_OFFLINE")
    FLAG_INIT_TIMEOUT: float = float(os.environ.get("FLAG_INIT_TIMEOUT", "5"))


class DevelopmentConfig(Config):
    """
    Development environment configuration.

    Enables debug mode for auto-reloading and verbose error pages.
    """

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Testing environment configuration.

    The flag client never contacts the provider in tests: flags are
    evaluated offline unless a test injects its own evaluator.
    """

    DEBUG: bool = True
    TESTING: bool = True
    LAUNCHDARKLY_SDK_KEY: str = ""
    LAUNCHDARKLY_OFFLINE: bool = True
    FLAG_INIT_TIMEOUT: float = 0.1


class ProductionConfig(Config):
    """
    Production environment configuration.

    Disables debug mode. The SDK key should be supplied exclusively through
    the environment.
    """

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name (``"development"``, ``"testing"``,
            ``"production"``).  When ``None``, falls back to the
            ``FLASK_ENV`` environment variable, defaulting to
            ``"development"``.

    Returns:
        The configuration class (not an instance) corresponding to the
        requested environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
