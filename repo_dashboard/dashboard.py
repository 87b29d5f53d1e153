"""High level orchestration of the dashboard pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from .cache import TTLCache
from .config import AppConfig, UTC
from .enricher import DetailEnricher
from .github_client import GitHubRestClient
from .language_stats import compute_language_stats
from .models import LanguageSummary, PartialEnrichmentFailure, Repository, validate_username
from .ranking import rank_repositories
from .view_model import ViewState, apply_view

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DashboardResult:
    username: str
    repositories: list[Repository]
    language_summary: LanguageSummary
    failures: list[PartialEnrichmentFailure]
    rate_limit_remaining: int | None
    generated_at: datetime

    def view(self, state: ViewState) -> list[Repository]:
        return apply_view(self.repositories, state)


class RepositoryDashboard:
    """Fetches, enriches and ranks the public repositories of a user."""

    def __init__(
        self,
        config: AppConfig,
        client: GitHubRestClient,
        cache: TTLCache[DashboardResult] | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._cache = cache if cache is not None else TTLCache(config.cache.ttl_seconds)

    async def load(self, username: str | None) -> DashboardResult:
        """Run the pipeline for ``username``, reusing a cached result when fresh.

        Raises :class:`~repo_dashboard.models.InvalidUsername` before any
        network call and lets listing errors from the client propagate.
        """

        username = validate_username(username)
        key = username.lower()
        cached = await self._cache.get(key)
        if cached is not None:
            LOGGER.debug("Serving cached dashboard for %s", username)
            return cached

        repositories = await self._client.list_repositories(username)
        settings = self._config.github
        enricher = DetailEnricher(
            self._client,
            max_concurrency=settings.max_concurrency,
            timeout=settings.request_timeout,
            contributors_limit=settings.contributors_limit,
        )
        failures = await enricher.enrich(repositories)
        ranked = rank_repositories(repositories)
        rate_limit = self._client.latest_rate_limit

        result = DashboardResult(
            username=username,
            repositories=ranked,
            language_summary=compute_language_stats(ranked),
            failures=failures,
            rate_limit_remaining=rate_limit.remaining if rate_limit else None,
            generated_at=datetime.now(tz=UTC),
        )
        await self._cache.set(key, result)
        LOGGER.info(
            "Dashboard for %s ready: %s repositories, %s languages",
            username,
            len(ranked),
            result.language_summary.total_languages,
        )
        return result


__all__ = ["DashboardResult", "RepositoryDashboard"]
