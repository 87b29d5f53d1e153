from __future__ import annotations

import pytest
from pydantic import ValidationError

from repo_dashboard.config import AppConfig, GitHubSettings


def test_defaults_without_environment():
    config = AppConfig.from_env(env={})

    assert config.github.token is None
    assert config.github.default_username is None
    assert config.github.api_url == "https://api.github.com"
    assert config.github.page_size == 100
    assert config.github.contributors_limit == 5
    assert config.cache.ttl_seconds == 3600
    assert config.server.port == 8000


def test_environment_and_overrides():
    env = {
        "GITHUB_TOKEN": "env-token",
        "GITHUB_USERNAME": "octocat",
        "GITHUB_REQUEST_TIMEOUT": "2.5",
        "CACHE_TTL_SECONDS": "60",
        "DASHBOARD_PORT": "9000",
    }

    config = AppConfig.from_env(env=env, overrides={"github_token": "cli-token"})

    assert config.github.token == "cli-token"
    assert config.github.default_username == "octocat"
    assert config.github.request_timeout == 2.5
    assert config.cache.ttl_seconds == 60
    assert config.server.port == 9000


def test_gh_token_fallback():
    assert AppConfig.from_env(env={"GH_TOKEN": "gh"}).github.token == "gh"


def test_page_size_is_capped():
    with pytest.raises(ValidationError):
        GitHubSettings(page_size=101)
