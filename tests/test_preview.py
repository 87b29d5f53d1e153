from __future__ import annotations

import io

from PIL import Image

from repo_dashboard.models import LanguageStat
from repo_dashboard.preview import HEIGHT, WIDTH, render_error, render_preview


def _open(data: bytes) -> Image.Image:
    assert data.startswith(b"\x89PNG")
    return Image.open(io.BytesIO(data))


def test_placeholder_preview_has_social_card_size():
    image = _open(render_preview(None))

    assert image.size == (WIDTH, HEIGHT) == (1200, 630)


def test_preview_with_language_rows():
    stats = [
        LanguageStat("Python", 3, 75.0, "#3572A5", ("a", "b", "c")),
        LanguageStat("Unlisted", 1, 25.0, "#000c21", ("d",)),
    ]

    image = _open(render_preview("octocat", stats))

    assert image.size == (1200, 630)


def test_error_image_uses_error_background():
    image = _open(render_error("boom")).convert("RGB")

    assert image.size == (1200, 630)
    assert image.getpixel((5, 5)) == (254, 226, 226)
