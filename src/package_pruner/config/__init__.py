"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import (
    DEFAULT_GITHUB_API_URL,
    PACKAGES_PREVIEW_MEDIA_TYPE,
    GitHubConfig,
    RepositoryRef,
    default_github_resilience,
    get_github_config,
)
from .http_resilience import NO_RETRY, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "NO_RETRY",
    "PACKAGES_PREVIEW_MEDIA_TYPE",
    "CacheConfig",
    "ConfigurationError",
    "GitHubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "RepositoryRef",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_github_resilience",
    "get_github_config",
    "optional_env_var",
    "require_env_vars",
]
