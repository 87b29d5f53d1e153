from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from repo_dashboard.models import Repository

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def make_repo():
    ids = count(1)

    def factory(
        name: str,
        *,
        stars: int = 0,
        forks: int = 0,
        watchers: int = 0,
        days: int = 0,
        language: str | None = None,
        description: str | None = None,
        topics: tuple[str, ...] = (),
        breakdown: dict[str, int] | None = None,
        private: bool = False,
    ) -> Repository:
        repository = Repository(
            id=next(ids),
            name=name,
            full_name=f"octocat/{name}",
            description=description,
            url=f"https://github.com/octocat/{name}",
            homepage_url=None,
            primary_language=language,
            star_count=stars,
            watcher_count=watchers,
            fork_count=forks,
            created_at=BASE,
            updated_at=BASE + timedelta(days=days),
            topics=topics,
            is_private=private,
            language_breakdown_url=f"https://api.github.com/repos/octocat/{name}/languages",
            contributors_url=f"https://api.github.com/repos/octocat/{name}/contributors",
        )
        if breakdown is not None:
            repository.attach_enrichment(breakdown, None)
        return repository

    return factory
