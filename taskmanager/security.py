"""
Task Manager API - Security Validation

Startup checks for security-relevant configuration.
"""

import warnings

from taskmanager.config import Settings
from taskmanager.errors import ConfigurationError


def validate_security_config(app_settings: Settings) -> None:
    """
    Validate security configuration on startup.

    A missing JWT secret is fatal. Weak-but-present settings only warn.
    """
    if not app_settings.JWT_SECRET_KEY:
        raise ConfigurationError(
            "JWT_SECRET_KEY is not set. Provide a signing secret via the "
            "JWT_SECRET_KEY environment variable."
        )

    # JWT Secret Key strength (basic check)
    if len(app_settings.JWT_SECRET_KEY) < 32 and app_settings.is_production:
        warnings.warn(
            "SECURITY WARNING: JWT_SECRET_KEY is too short for production. "
            "Use at least 32 characters.",
            UserWarning,
        )

    # CORS validation
    if "*" in app_settings.CORS_ORIGINS:
        warnings.warn(
            "SECURITY WARNING: CORS wildcard (*) detected. "
            "Set specific origins via CORS_ORIGINS.",
            UserWarning,
        )
