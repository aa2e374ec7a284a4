"""Application configuration helpers."""

from __future__ import annotations

from .env import first_env_var, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .feeds import FeedsConfig, get_feeds_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .posthog import PostHogConfig, get_posthog_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "FeedsConfig",
    "MissingConfigurationError",
    "PostHogConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncConfig",
    "configure_logging",
    "first_env_var",
    "get_feeds_config",
    "get_posthog_config",
    "get_sync_config",
    "optional_env_var",
    "require_env_vars",
]
