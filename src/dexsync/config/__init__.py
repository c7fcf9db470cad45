"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .google import DEFAULT_GOOGLE_SCOPES, GoogleAuthConfig, get_google_auth_config
from .http_resilience import RateLimit, ResilienceConfig
from .logging import configure_logging
from .sheets import SheetsConfig, default_sheets_resilience, get_sheets_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "DEFAULT_GOOGLE_SCOPES",
    "ConfigurationError",
    "GoogleAuthConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "SheetsConfig",
    "StorageConfig",
    "configure_logging",
    "default_sheets_resilience",
    "get_google_auth_config",
    "get_sheets_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
