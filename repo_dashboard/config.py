"""Application configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, PositiveInt


UTC = timezone.utc


class GitHubSettings(BaseModel):
    """Configuration options for the GitHub REST API."""

    token: str | None = Field(default=None, description="Personal access token used to raise rate limits.")
    api_url: str = Field(default="https://api.github.com")
    default_username: str | None = Field(default=None, description="Username shown when none is requested.")
    page_size: PositiveInt = Field(default=100, le=100, description="Number of repositories listed per request.")
    contributors_limit: PositiveInt = Field(default=5, le=100, description="Contributors kept per repository.")
    max_concurrency: PositiveInt = Field(default=16, description="Maximum concurrent enrichment requests.")
    request_timeout: float = Field(default=5.0, gt=0, description="Timeout for a single HTTP request in seconds.")
    user_agent: str = Field(default="Repository-Dashboard")


class CacheSettings(BaseModel):
    """Time-based cache for dashboard results."""

    ttl_seconds: float = Field(default=3600.0, ge=0, description="Lifetime of a cached dashboard in seconds.")


class ServerSettings(BaseModel):
    """Bind address for the HTTP API."""

    host: str = Field(default="127.0.0.1")
    port: PositiveInt = Field(default=8000, le=65535)


class AppConfig(BaseModel):
    """Root configuration container."""

    github: GitHubSettings = Field(default_factory=GitHubSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None, overrides: dict[str, Any] | None = None) -> "AppConfig":
        """Construct a configuration object from environment variables."""

        env = env if env is not None else os.environ
        overrides = overrides or {}

        github = GitHubSettings(
            token=overrides.get("github_token") or env.get("GITHUB_TOKEN") or env.get("GH_TOKEN") or None,
            api_url=overrides.get("github_api_url") or env.get("GITHUB_API_URL") or "https://api.github.com",
            default_username=overrides.get("github_username") or env.get("GITHUB_USERNAME") or None,
            max_concurrency=int(overrides.get("github_max_concurrency") or env.get("GITHUB_MAX_CONCURRENCY", 16)),
            request_timeout=float(overrides.get("github_request_timeout") or env.get("GITHUB_REQUEST_TIMEOUT", 5.0)),
        )

        cache = CacheSettings(
            ttl_seconds=float(overrides.get("cache_ttl_seconds") or env.get("CACHE_TTL_SECONDS", 3600.0)),
        )

        server = ServerSettings(
            host=overrides.get("host") or env.get("DASHBOARD_HOST") or "127.0.0.1",
            port=int(overrides.get("port") or env.get("DASHBOARD_PORT", 8000)),
        )

        return cls(github=github, cache=cache, server=server)


@dataclass(slots=True)
class RateLimitInfo:
    """Snapshot of GitHub's rate limit state."""

    cost: int
    remaining: int
    reset_at: datetime


__all__ = [
    "AppConfig",
    "GitHubSettings",
    "CacheSettings",
    "ServerSettings",
    "RateLimitInfo",
    "UTC",
]
