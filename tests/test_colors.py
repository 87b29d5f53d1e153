from __future__ import annotations

import re

from repo_dashboard.colors import LANGUAGE_COLORS, get_language_color, synthetic_color


def test_known_language_uses_table():
    assert get_language_color("Python") == "#3572A5"
    assert get_language_color("Go") == LANGUAGE_COLORS["Go"]


def test_lookup_is_case_sensitive():
    assert get_language_color("python") != get_language_color("Python")


def test_synthetic_color_matches_rolling_hash():
    # "a" -> 97, "ab" -> 98 + 97 * 31
    assert synthetic_color("a") == "#000061"
    assert synthetic_color("ab") == "#000c21"


def test_synthetic_color_wraps_to_32_bits():
    color = synthetic_color("A very long and unusual language name")
    assert re.fullmatch(r"#[0-9a-f]{6}", color)


def test_unknown_language_is_deterministic():
    first = get_language_color("Brainfudge++")
    second = get_language_color("Brainfudge++")

    assert first == second
    assert first == synthetic_color("Brainfudge++")


def test_lone_surrogate_still_gets_a_color():
    # a single UTF-16 code unit 0xD800
    assert synthetic_color("\ud800") == "#00d800"
