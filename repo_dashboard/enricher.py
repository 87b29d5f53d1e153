"""Fan-out enrichment of repositories with languages and contributors."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Sequence, TypeVar

import httpx

from .github_client import GitHubAPIError, GitHubRestClient
from .models import PartialEnrichmentFailure, Repository

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class DetailEnricher:
    """Attaches language breakdowns and top contributors to repositories.

    Every sub-resource request is independent: a failure or timeout leaves the
    matching field absent on that repository only and is reported through the
    returned list of :class:`PartialEnrichmentFailure`.
    """

    def __init__(
        self,
        client: GitHubRestClient,
        *,
        max_concurrency: int = 16,
        timeout: float = 5.0,
        contributors_limit: int = 5,
    ) -> None:
        self._client = client
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._timeout = timeout
        self._contributors_limit = contributors_limit

    async def enrich(self, repositories: Sequence[Repository]) -> list[PartialEnrichmentFailure]:
        results = await asyncio.gather(*(self._enrich_one(repository) for repository in repositories))
        failures = [failure for batch in results for failure in batch]
        if failures:
            LOGGER.info(
                "Enriched %s repositories with %s partial failures", len(repositories), len(failures)
            )
        else:
            LOGGER.info("Enriched %s repositories", len(repositories))
        return failures

    async def _enrich_one(self, repository: Repository) -> list[PartialEnrichmentFailure]:
        failures: list[PartialEnrichmentFailure] = []
        languages, contributors = await asyncio.gather(
            self._fetch(
                repository,
                "languages",
                self._client.get_languages(repository.language_breakdown_url),
                failures,
            ),
            self._fetch(
                repository,
                "contributors",
                self._client.get_contributors(repository.contributors_url, self._contributors_limit),
                failures,
            ),
        )
        repository.attach_enrichment(languages, contributors)
        return failures

    async def _fetch(
        self,
        repository: Repository,
        resource: str,
        request: Awaitable[T],
        failures: list[PartialEnrichmentFailure],
    ) -> T | None:
        try:
            async with self._semaphore:
                return await asyncio.wait_for(request, timeout=self._timeout)
        except asyncio.TimeoutError:
            reason = f"timed out after {self._timeout:g}s"
        except (GitHubAPIError, httpx.HTTPError, TypeError, ValueError) as exc:
            reason = str(exc) or exc.__class__.__name__
        LOGGER.warning("Failed to fetch %s for %s: %s", resource, repository.name, reason)
        failures.append(PartialEnrichmentFailure(repository=repository.name, resource=resource, reason=reason))
        return None


__all__ = ["DetailEnricher"]
