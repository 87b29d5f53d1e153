"""Domain models used by the dashboard."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from .config import UTC


USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9-]{1,39}$")


class InvalidUsername(ValueError):
    """Raised when a username does not have the shape GitHub allows."""


def validate_username(value: str | None) -> str:
    """Return the normalized username or raise :class:`InvalidUsername`."""

    if value is None:
        raise InvalidUsername("A GitHub username is required")
    username = value.strip()
    if not USERNAME_PATTERN.match(username):
        raise InvalidUsername(
            f"Invalid GitHub username {value!r}: use 1-39 letters, digits or hyphens"
        )
    return username


@dataclass(slots=True, frozen=True)
class Contributor:
    login: str
    avatar_url: str
    profile_url: str

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Contributor":
        return cls(
            login=payload.get("login") or "",
            avatar_url=payload.get("avatar_url") or "",
            profile_url=payload.get("html_url") or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {"login": self.login, "avatar_url": self.avatar_url, "html_url": self.profile_url}


@dataclass(slots=True)
class Repository:
    """Normalized representation of a public GitHub repository."""

    id: int
    name: str
    full_name: str
    description: str | None
    url: str
    homepage_url: str | None
    primary_language: str | None
    star_count: int
    watcher_count: int
    fork_count: int
    created_at: datetime
    updated_at: datetime
    topics: tuple[str, ...]
    is_private: bool
    language_breakdown_url: str
    contributors_url: str
    language_breakdown: dict[str, int] | None = None
    contributors: list[Contributor] | None = None
    _enriched: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Repository":
        """Convert a REST ``/users/{user}/repos`` entry into a :class:`Repository`."""

        return cls(
            id=int(payload["id"]),
            name=payload.get("name", ""),
            full_name=payload.get("full_name", ""),
            description=payload.get("description") or None,
            url=payload.get("html_url", ""),
            homepage_url=payload.get("homepage") or None,
            primary_language=payload.get("language") or None,
            star_count=payload.get("stargazers_count") or 0,
            watcher_count=payload.get("watchers_count") or 0,
            fork_count=payload.get("forks_count") or 0,
            created_at=parse_timestamp(payload.get("created_at")),
            updated_at=parse_timestamp(payload.get("updated_at")),
            topics=tuple(dict.fromkeys(payload.get("topics") or ())),
            is_private=bool(payload.get("private", False)),
            language_breakdown_url=payload.get("languages_url", ""),
            contributors_url=payload.get("contributors_url", ""),
        )

    def attach_enrichment(
        self,
        language_breakdown: dict[str, int] | None,
        contributors: list[Contributor] | None,
    ) -> None:
        """Store the enrichment results. May only be called once per record."""

        if self._enriched:
            raise RuntimeError(f"Repository {self.full_name} has already been enriched")
        self.language_breakdown = language_breakdown
        self.contributors = contributors
        self._enriched = True

    @property
    def language_names(self) -> tuple[str, ...]:
        """Languages this repository counts towards.

        The breakdown wins when it was fetched; otherwise the primary language
        reported in the listing is used.
        """

        if self.language_breakdown is not None:
            return tuple(self.language_breakdown)
        if self.primary_language:
            return (self.primary_language,)
        return ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "full_name": self.full_name,
            "description": self.description,
            "html_url": self.url,
            "homepage": self.homepage_url,
            "language": self.primary_language,
            "stargazers_count": self.star_count,
            "watchers_count": self.watcher_count,
            "forks_count": self.fork_count,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "topics": list(self.topics),
            "languages_breakdown": dict(self.language_breakdown) if self.language_breakdown is not None else None,
            "contributors": (
                [contributor.to_dict() for contributor in self.contributors]
                if self.contributors is not None
                else None
            ),
        }


@dataclass(slots=True, frozen=True)
class LanguageStat:
    """Aggregate row of the language distribution."""

    language: str
    repository_count: int
    percentage: float
    color: str
    repository_names: tuple[str, ...]
    byte_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "count": self.repository_count,
            "percentage": self.percentage,
            "color": self.color,
            "repositories": list(self.repository_names),
            "bytes": self.byte_count,
        }


@dataclass(slots=True, frozen=True)
class LanguageSummary:
    stats: tuple[LanguageStat, ...]
    total_repositories: int

    @property
    def total_languages(self) -> int:
        return len(self.stats)


@dataclass(slots=True, frozen=True)
class PartialEnrichmentFailure:
    """A languages or contributors fetch that failed for one repository."""

    repository: str
    resource: str
    reason: str


def parse_timestamp(value: str | None) -> datetime:
    if not value:
        return datetime.fromtimestamp(0, tz=UTC)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


__all__ = [
    "Contributor",
    "InvalidUsername",
    "LanguageStat",
    "LanguageSummary",
    "PartialEnrichmentFailure",
    "Repository",
    "parse_timestamp",
    "validate_username",
]
