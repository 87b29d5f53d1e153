"""Language distribution across a user's repositories."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .colors import get_language_color
from .models import LanguageStat, LanguageSummary, Repository


@dataclass(slots=True)
class _Bucket:
    count: int = 0
    byte_count: int = 0
    repositories: list[str] = field(default_factory=list)


def compute_language_stats(repositories: Iterable[Repository]) -> LanguageSummary:
    """Count how many repositories touch each language.

    Percentages are presence based: a repository that contains a language at
    all counts once for it, regardless of how many bytes it holds. Byte totals
    are accumulated alongside for display only.
    """

    public = [repository for repository in repositories if not repository.is_private]
    buckets: dict[str, _Bucket] = {}

    for repository in public:
        breakdown = repository.language_breakdown or {}
        for language in repository.language_names:
            bucket = buckets.setdefault(language, _Bucket())
            bucket.count += 1
            bucket.byte_count += breakdown.get(language, 0)
            bucket.repositories.append(repository.name)

    total = len(public)
    stats = [
        LanguageStat(
            language=language,
            repository_count=bucket.count,
            percentage=(bucket.count / total) * 100 if total else 0.0,
            color=get_language_color(language),
            repository_names=tuple(sorted(bucket.repositories)),
            byte_count=bucket.byte_count,
        )
        for language, bucket in buckets.items()
    ]
    stats.sort(key=lambda stat: stat.repository_count, reverse=True)
    return LanguageSummary(stats=tuple(stats), total_repositories=total)


__all__ = ["compute_language_stats"]
