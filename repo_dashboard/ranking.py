"""Default ordering of repositories."""

from __future__ import annotations

from typing import Iterable

from .models import Repository


def ranking_key(repository: Repository) -> tuple[int, int, int, float]:
    return (
        -repository.star_count,
        -repository.fork_count,
        -repository.watcher_count,
        -repository.updated_at.timestamp(),
    )


def rank_repositories(repositories: Iterable[Repository]) -> list[Repository]:
    """Sort by stars, then forks, then watchers, then most recent update, all descending."""

    return sorted(repositories, key=ranking_key)


__all__ = ["rank_repositories", "ranking_key"]
