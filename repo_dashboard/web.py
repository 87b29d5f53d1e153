"""HTTP API exposing the dashboard and its social preview image."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from .config import AppConfig
from .dashboard import DashboardResult, RepositoryDashboard
from .github_client import GitHubAPIError, GitHubRestClient, RateLimited, UserNotFound
from .models import InvalidUsername
from .preview import render_error, render_preview
from .view_model import SortKey, ViewState

LOGGER = logging.getLogger(__name__)

PREVIEW_CACHE_CONTROL = "public, immutable, no-transform, max-age=31536000"
ERROR_CACHE_CONTROL = "no-cache, no-store, must-revalidate"


def create_app(config: AppConfig | None = None, http_client: httpx.AsyncClient | None = None) -> FastAPI:
    """Build the FastAPI application.

    ``http_client`` lets callers supply their own transport; when omitted the
    GitHub client owns and closes its connection pool on shutdown.
    """

    config = config or AppConfig.from_env()
    client = GitHubRestClient(config.github, http_client)
    dashboard = RepositoryDashboard(config, client)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await client.close()

    app = FastAPI(title="Repository Dashboard", lifespan=lifespan)
    app.state.config = config
    app.state.dashboard = dashboard

    @app.exception_handler(InvalidUsername)
    async def invalid_username_handler(_: Request, exc: InvalidUsername) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(GitHubAPIError)
    async def github_error_handler(_: Request, exc: GitHubAPIError) -> JSONResponse:
        if isinstance(exc, (UserNotFound, RateLimited)):
            status_code = exc.status_code or 502
        else:
            status_code = 502
        LOGGER.warning("GitHub request failed: %s", exc)
        content: dict[str, Any] = {"detail": str(exc)}
        if exc.status_code is not None:
            content["upstream_status"] = exc.status_code
        return JSONResponse(status_code=status_code, content=content)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/repositories")
    async def repositories(
        username: str | None = Query(None, description="GitHub username"),
        q: str = Query("", description="Free-text search over name, description and topics"),
        language: list[str] = Query([], description="Languages to filter by"),
        sort: SortKey | None = Query(None, description="Override the default ranking"),
    ) -> dict[str, Any]:
        result = await dashboard.load(username or config.github.default_username)
        state = ViewState(search_term=q, selected_languages=frozenset(language), sort_key=sort)
        return _serialize(result, state)

    @app.get("/api/preview")
    async def preview(username: str | None = Query(None)) -> Response:
        subject = username or config.github.default_username
        try:
            if subject is None:
                image = render_preview(None)
            else:
                result = await dashboard.load(subject)
                image = render_preview(result.username, result.language_summary.stats)
        except (InvalidUsername, GitHubAPIError, OSError) as exc:
            LOGGER.error("Error generating preview for %s: %s", subject, exc)
            return Response(
                content=render_error(str(exc)),
                status_code=500,
                media_type="image/png",
                headers={"Cache-Control": ERROR_CACHE_CONTROL},
            )
        return Response(content=image, media_type="image/png", headers={"Cache-Control": PREVIEW_CACHE_CONTROL})

    return app


def _serialize(result: DashboardResult, state: ViewState) -> dict[str, Any]:
    visible = result.view(state)
    summary = result.language_summary
    return {
        "username": result.username,
        "repositories": [repository.to_dict() for repository in visible],
        "visible_repositories": len(visible),
        "total_repositories": summary.total_repositories,
        "language_stats": [stat.to_dict() for stat in summary.stats],
        "total_languages": summary.total_languages,
        "rate_limit_remaining": result.rate_limit_remaining,
        "generated_at": result.generated_at.isoformat(),
    }


__all__ = ["create_app"]
