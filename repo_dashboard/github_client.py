"""HTTP client for interacting with GitHub's REST API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from .config import GitHubSettings, RateLimitInfo, UTC
from .models import Contributor, Repository

LOGGER = logging.getLogger(__name__)


class GitHubAPIError(RuntimeError):
    """Raised when a GitHub REST request fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UserNotFound(GitHubAPIError):
    """The requested user does not exist."""


class RateLimited(GitHubAPIError):
    """GitHub refused the request because the rate limit was exhausted."""


class UpstreamError(GitHubAPIError):
    """Any other unsuccessful response from GitHub."""


class GitHubRestClient:
    """Thin async wrapper around the REST endpoints the dashboard needs."""

    def __init__(self, settings: GitHubSettings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._base_url = settings.api_url.rstrip("/")
        self._headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": settings.user_agent,
        }
        if settings.token:
            self._headers["Authorization"] = f"token {settings.token}"
        else:
            LOGGER.warning(
                "GITHUB_TOKEN is not set; GitHub allows about 60 unauthenticated requests per hour"
            )
        self._client = client or httpx.AsyncClient(timeout=settings.request_timeout)
        self._owns_client = client is None
        self.latest_rate_limit: RateLimitInfo | None = None

    async def __aenter__(self) -> "GitHubRestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_repositories(self, username: str) -> list[Repository]:
        """Return the public repositories of ``username``, most recently updated first."""

        url = f"{self._base_url}/users/{username}/repos"
        params = {"sort": "updated", "per_page": self._settings.page_size}
        try:
            response = await self._client.get(url, params=params, headers=self._headers)
        except httpx.RequestError as exc:
            raise UpstreamError(f"Could not reach GitHub: {exc}") from exc
        self._record_rate_limit(response)

        if response.status_code == 404:
            raise UserNotFound(f"GitHub user '{username}' was not found", status_code=404)
        if response.status_code == 403:
            raise RateLimited(
                "GitHub API rate limit exceeded. Wait for the limit to reset or configure GITHUB_TOKEN.",
                status_code=403,
            )
        if not response.is_success:
            raise UpstreamError(
                f"GitHub API error: {response.status_code}", status_code=response.status_code
            )

        try:
            payload = response.json()
            if not isinstance(payload, list):
                raise TypeError(f"expected a list, got {type(payload).__name__}")
            repositories = [
                Repository.from_api(entry)
                for entry in payload
                if isinstance(entry, dict) and not entry.get("private", False)
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamError(
                "GitHub returned an unexpected repository listing", status_code=response.status_code
            ) from exc
        LOGGER.info("Fetched %s public repositories for %s", len(repositories), username)
        return repositories

    async def get_languages(self, url: str) -> dict[str, int]:
        """Fetch the language to byte count mapping of a repository."""

        payload = await self._get_json(url)
        if not isinstance(payload, dict):
            raise GitHubAPIError(f"Unexpected languages payload from {url}")
        try:
            return {str(language): int(size) for language, size in payload.items()}
        except (TypeError, ValueError) as exc:
            raise GitHubAPIError(f"Unexpected languages payload from {url}") from exc

    async def get_contributors(self, url: str, limit: int | None = None) -> list[Contributor]:
        """Fetch the top contributors of a repository."""

        limit = limit or self._settings.contributors_limit
        payload = await self._get_json(url, params={"per_page": limit})
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise GitHubAPIError(f"Unexpected contributors payload from {url}")
        return [Contributor.from_api(entry) for entry in payload[:limit] if isinstance(entry, dict)]

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        response = await self._client.get(url, params=params, headers=self._headers)
        self._record_rate_limit(response)
        if not response.is_success:
            raise GitHubAPIError(f"HTTP {response.status_code} from {url}", status_code=response.status_code)
        # Empty repositories answer the contributors endpoint with 204.
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubAPIError(f"Invalid JSON from {url}", status_code=response.status_code) from exc

    def _record_rate_limit(self, response: httpx.Response) -> None:
        info = _parse_rate_limit(response.headers)
        if info is not None:
            self.latest_rate_limit = info


def _parse_rate_limit(headers: httpx.Headers) -> RateLimitInfo | None:
    remaining = headers.get("X-RateLimit-Remaining")
    reset = headers.get("X-RateLimit-Reset")
    if remaining is None or reset is None:
        return None
    try:
        return RateLimitInfo(
            cost=int(headers.get("X-RateLimit-Used", 0)),
            remaining=int(remaining),
            reset_at=datetime.fromtimestamp(int(reset), tz=UTC),
        )
    except ValueError:
        LOGGER.debug("Ignoring malformed rate limit headers: %s / %s", remaining, reset)
        return None


__all__ = [
    "GitHubAPIError",
    "GitHubRestClient",
    "RateLimited",
    "UpstreamError",
    "UserNotFound",
]
