from __future__ import annotations

from repo_dashboard.ranking import rank_repositories


def test_rank_uses_keys_in_priority_order(make_repo):
    repos = [
        make_repo("old", stars=5, forks=1, watchers=1, days=1),
        make_repo("new", stars=5, forks=1, watchers=1, days=3),
        make_repo("watched", stars=5, forks=1, watchers=4),
        make_repo("forked", stars=5, forks=7),
        make_repo("starred", stars=9),
    ]

    ranked = rank_repositories(repos)

    assert [repo.name for repo in ranked] == ["starred", "forked", "watched", "new", "old"]


def test_rank_is_idempotent(make_repo):
    repos = [make_repo(str(index), stars=index % 3, forks=index % 2, days=index % 4) for index in range(10)]

    once = rank_repositories(repos)
    twice = rank_repositories(once)

    assert [repo.name for repo in once] == [repo.name for repo in twice]


def test_rank_does_not_mutate_input(make_repo):
    repos = [make_repo("a", stars=1), make_repo("b", stars=2)]

    rank_repositories(repos)

    assert [repo.name for repo in repos] == ["a", "b"]
