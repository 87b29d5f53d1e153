from __future__ import annotations

import pytest

from repo_dashboard.colors import get_language_color
from repo_dashboard.language_stats import compute_language_stats


def test_counts_each_breakdown_language_once_per_repository(make_repo):
    repos = [
        make_repo("api", language="Python", breakdown={"Python": 9000, "Shell": 100}),
        make_repo("cli", language="Go", breakdown={"Go": 4000, "Shell": 50}),
        make_repo("docs", language="HTML"),
        make_repo("empty"),
    ]

    summary = compute_language_stats(repos)
    by_language = {stat.language: stat for stat in summary.stats}

    assert summary.total_repositories == 4
    assert summary.stats[0].language == "Shell"
    assert by_language["Shell"].repository_count == 2
    assert by_language["Shell"].percentage == pytest.approx(50.0)
    assert by_language["Shell"].byte_count == 150
    assert by_language["Shell"].repository_names == ("api", "cli")
    assert by_language["HTML"].repository_count == 1
    assert by_language["HTML"].byte_count == 0
    assert by_language["Go"].color == get_language_color("Go")


def test_breakdown_replaces_primary_language(make_repo):
    repos = [make_repo("site", language="JavaScript", breakdown={"TypeScript": 10, "CSS": 2})]

    summary = compute_language_stats(repos)

    assert {stat.language for stat in summary.stats} == {"TypeScript", "CSS"}


def test_stat_languages_are_subset_of_breakdown_keys(make_repo):
    repo = make_repo("tool", language="Rust", breakdown={"Rust": 5, "Nix": 1})

    summary = compute_language_stats([repo])

    for stat in summary.stats:
        assert stat.language in repo.language_breakdown


def test_private_repositories_are_ignored(make_repo):
    repos = [make_repo("secret", language="Go", private=True), make_repo("public", language="Go")]

    summary = compute_language_stats(repos)

    assert summary.total_repositories == 1
    assert summary.stats[0].repository_names == ("public",)
    assert summary.stats[0].percentage == pytest.approx(100.0)


def test_empty_input_produces_no_stats():
    summary = compute_language_stats([])

    assert summary.stats == ()
    assert summary.total_repositories == 0
    assert summary.total_languages == 0


def test_repository_names_are_sorted(make_repo):
    repos = [make_repo(name, language="C") for name in ("zeta", "alpha", "mid")]

    summary = compute_language_stats(repos)

    assert summary.stats[0].repository_names == ("alpha", "mid", "zeta")
