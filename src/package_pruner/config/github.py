"""GitHub API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import NO_RETRY, RateLimit, ResilienceConfig

DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_TIMEOUT_SECONDS = 30.0
PACKAGES_PREVIEW_MEDIA_TYPE = "application/vnd.github.packages-preview+json"


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    owner: str
    name: str

    @classmethod
    def parse(cls, value: str) -> RepositoryRef:
        """Parse an ``owner/repo`` string such as ``GITHUB_REPOSITORY``."""

        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            msg = f"Invalid repository reference: {value!r} (expected owner/repo)"
            raise ConfigurationError(msg)
        return cls(owner=owner, name=name)


@dataclass(frozen=True)
class GitHubConfig:
    """Holds GitHub GraphQL API configuration values."""

    token: str
    resilience: ResilienceConfig
    repository: RepositoryRef | None = None


def default_github_resilience(api_url: str = DEFAULT_GITHUB_API_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="github",
        base_url=api_url,
        timeout_seconds=GITHUB_TIMEOUT_SECONDS,
        retry=NO_RETRY,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=None,
        default_headers={"User-Agent": "package-pruner"},
    )


def get_github_config(*, resilience: ResilienceConfig | None = None) -> GitHubConfig:
    values = require_env_vars(("GITHUB_TOKEN",))
    api_url = optional_env_var("GITHUB_API_URL", DEFAULT_GITHUB_API_URL) or DEFAULT_GITHUB_API_URL
    repository_value = optional_env_var("GITHUB_REPOSITORY")
    return GitHubConfig(
        token=values["GITHUB_TOKEN"],
        resilience=resilience or default_github_resilience(api_url),
        repository=RepositoryRef.parse(repository_value) if repository_value else None,
    )
