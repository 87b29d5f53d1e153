"""Search, language filter and sort applied to the repository list."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Iterable, Sequence

from .models import Repository


class SortKey(str, Enum):
    STARS = "stars"
    FORKS = "forks"
    UPDATED = "updated"


_SORT_FIELDS = {
    SortKey.STARS: lambda repository: repository.star_count,
    SortKey.FORKS: lambda repository: repository.fork_count,
    SortKey.UPDATED: lambda repository: repository.updated_at,
}


@dataclasses.dataclass(slots=True, frozen=True)
class ViewState:
    """User-controlled view settings. An empty language set means no filter."""

    search_term: str = ""
    selected_languages: frozenset[str] = frozenset()
    sort_key: SortKey | None = None

    def with_search(self, term: str) -> "ViewState":
        return dataclasses.replace(self, search_term=term)

    def toggle_language(self, language: str) -> "ViewState":
        selected = set(self.selected_languages)
        if language in selected:
            selected.remove(language)
        else:
            selected.add(language)
        return dataclasses.replace(self, selected_languages=frozenset(selected))

    def clear_languages(self) -> "ViewState":
        return dataclasses.replace(self, selected_languages=frozenset())

    def with_sort(self, sort_key: SortKey | str | None) -> "ViewState":
        if sort_key is not None:
            sort_key = SortKey(sort_key)
        return dataclasses.replace(self, sort_key=sort_key)


def is_highlighted(repository: Repository, selected_languages: Iterable[str]) -> bool:
    selected = set(selected_languages)
    if not selected:
        return True
    if repository.primary_language in selected:
        return True
    return bool(repository.language_breakdown and selected.intersection(repository.language_breakdown))


def matches_search(repository: Repository, term: str) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    if needle in repository.name.lower():
        return True
    if repository.description and needle in repository.description.lower():
        return True
    return any(needle in topic.lower() for topic in repository.topics)


def matches(repository: Repository, state: ViewState) -> bool:
    return matches_search(repository, state.search_term) and is_highlighted(
        repository, state.selected_languages
    )


def apply_view(repositories: Sequence[Repository], state: ViewState) -> list[Repository]:
    """Derive the visible list from scratch.

    Without an explicit sort key the incoming order (the default ranking) is
    kept; otherwise the single chosen key is applied descending.
    """

    visible = [repository for repository in repositories if matches(repository, state)]
    if state.sort_key is not None:
        visible.sort(key=_SORT_FIELDS[state.sort_key], reverse=True)
    return visible


__all__ = ["SortKey", "ViewState", "apply_view", "is_highlighted", "matches", "matches_search"]
