"""Command line interface for the repository dashboard."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import AppConfig
from .dashboard import DashboardResult, RepositoryDashboard
from .github_client import GitHubAPIError, GitHubRestClient
from .models import InvalidUsername
from .preview import render_preview
from .view_model import SortKey, ViewState

app = typer.Typer(add_completion=False)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load(config: AppConfig, username: Optional[str]) -> DashboardResult:
    async def runner() -> DashboardResult:
        async with GitHubRestClient(config.github) as client:
            return await RepositoryDashboard(config, client).load(username)

    try:
        return asyncio.run(runner())
    except (InvalidUsername, GitHubAPIError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command("show")
def show(
    username: Optional[str] = typer.Argument(None, envvar="GITHUB_USERNAME", help="GitHub username"),
    search: str = typer.Option("", "--search", "-s", help="Filter by name, description or topic"),
    language: List[str] = typer.Option([], "--language", "-l", help="Only show these languages"),
    sort: Optional[SortKey] = typer.Option(None, help="Sort by a single key instead of the default ranking"),
    github_token: Optional[str] = typer.Option(None, envvar="GITHUB_TOKEN", help="GitHub token"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Print the repositories and language distribution of a user."""

    configure_logging(log_level)
    overrides = {"github_token": github_token} if github_token else {}
    config = AppConfig.from_env(overrides=overrides)
    result = _load(config, username)

    state = ViewState(search_term=search, selected_languages=frozenset(language), sort_key=sort)
    visible = result.view(state)

    if as_json:
        payload = {
            "username": result.username,
            "repositories": [repository.to_dict() for repository in visible],
            "language_stats": [stat.to_dict() for stat in result.language_summary.stats],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    summary = result.language_summary
    typer.secho(f"{result.username}'s Repositories", bold=True)
    typer.echo("")
    typer.echo("Language Distribution")
    for stat in summary.stats:
        noun = "repo" if stat.repository_count == 1 else "repos"
        typer.echo(f"  {stat.language:<24} {stat.percentage:5.1f}%  {stat.repository_count} {noun}")
    typer.echo(f"Total languages: {summary.total_languages}  Total repositories: {summary.total_repositories}")
    typer.echo("")

    if not visible:
        typer.echo("No repositories found. Adjust your search or filters.")
        return
    for repository in visible:
        languages = ", ".join(repository.language_names) or "No languages detected"
        typer.echo(
            f"{repository.name}  *{repository.star_count} forks:{repository.fork_count} "
            f"watchers:{repository.watcher_count}  [{languages}]"
        )
        if repository.description:
            typer.echo(f"    {repository.description}")
        if repository.contributors:
            typer.echo(f"    contributors: {', '.join(c.login for c in repository.contributors)}")
    if result.rate_limit_remaining is not None:
        typer.echo(f"Remaining rate limit: {result.rate_limit_remaining}")


@app.command("preview")
def preview(
    output: Path = typer.Argument(..., dir_okay=False, help="Destination PNG file"),
    username: Optional[str] = typer.Option(None, envvar="GITHUB_USERNAME", help="GitHub username"),
    github_token: Optional[str] = typer.Option(None, envvar="GITHUB_TOKEN", help="GitHub token"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Render the 1200x630 social preview image to a file."""

    configure_logging(log_level)
    overrides = {"github_token": github_token} if github_token else {}
    config = AppConfig.from_env(overrides=overrides)

    if username is None:
        image = render_preview(None)
    else:
        result = _load(config, username)
        image = render_preview(result.username, result.language_summary.stats)
    output.write_bytes(image)
    typer.echo(f"Wrote preview to {output}")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Interface to bind"),
    port: Optional[int] = typer.Option(None, help="Port to listen on"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run the HTTP API."""

    import uvicorn

    from .web import create_app

    configure_logging(log_level)
    overrides: dict[str, object] = {}
    if host:
        overrides["host"] = host
    if port:
        overrides["port"] = port
    config = AppConfig.from_env(overrides=overrides)
    uvicorn.run(create_app(config), host=config.server.host, port=config.server.port, log_level=log_level.lower())


__all__ = ["app"]
