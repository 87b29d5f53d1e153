"""Social preview image rendering."""

from __future__ import annotations

import io
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont

from .models import LanguageStat


WIDTH = 1200
HEIGHT = 630
MAX_LANGUAGE_ROWS = 5

PLACEHOLDER_TITLE = "My Repositories"
DESCRIPTION = "A collection of open source projects and contributions."
PLACEHOLDER_HINT = "To view your own, add ?username=YOUR_GITHUB_USERNAME to the URL."

# slate palette
BACKGROUND_TOP = (248, 250, 252)
BACKGROUND_BOTTOM = (226, 232, 240)
TEXT_PRIMARY = (15, 23, 42)
TEXT_SECONDARY = (71, 85, 105)
TEXT_MUTED = (100, 116, 139)
TRACK = (203, 213, 225)
CARD = (255, 255, 255)
CARD_BORDER = (226, 232, 240)

ERROR_BACKGROUND = (254, 226, 226)
ERROR_TEXT = (220, 38, 38)


def render_preview(username: str | None, stats: Sequence[LanguageStat] = ()) -> bytes:
    """Render the PNG preview card for ``username``.

    Without a username a generic placeholder card is produced.
    """

    image = _gradient(BACKGROUND_TOP, BACKGROUND_BOTTOM)
    draw = ImageDraw.Draw(image)

    title = f"{username}'s Repositories" if username else PLACEHOLDER_TITLE
    y = 60 if stats else 200
    y = _centered(draw, title, _font(48), y, TEXT_PRIMARY) + 16
    y = _centered(draw, DESCRIPTION, _font(24), y, TEXT_SECONDARY) + 16
    if not username:
        _centered(draw, PLACEHOLDER_HINT, _font(18), y, TEXT_MUTED)

    if stats:
        _language_card(draw, stats[:MAX_LANGUAGE_ROWS], top=y + 24)

    return _to_png(image)


def render_error(message: str) -> bytes:
    image = Image.new("RGB", (WIDTH, HEIGHT), ERROR_BACKGROUND)
    draw = ImageDraw.Draw(image)
    y = _centered(draw, "Error Generating Preview", _font(48), 220, ERROR_TEXT) + 16
    y = _centered(draw, "There was an issue generating the image preview.", _font(24), y, ERROR_TEXT) + 16
    _centered(draw, message or "Unknown error.", _font(18), y, ERROR_TEXT)
    return _to_png(image)


def _language_card(draw: ImageDraw.ImageDraw, stats: Sequence[LanguageStat], top: int) -> None:
    left, right = 100, WIDTH - 100
    row_height = 44
    bottom = min(top + 64 + row_height * len(stats), HEIGHT - 30)
    draw.rounded_rectangle((left, top, right, bottom), radius=12, fill=CARD, outline=CARD_BORDER)
    draw.text((left + 24, top + 20), "Language Distribution", font=_font(20), fill=TEXT_PRIMARY)

    label_font = _font(16)
    percent_font = _font(14)
    bar_left, bar_right = left + 320, right - 120
    y = top + 64
    for stat in stats:
        draw.ellipse((left + 24, y + 2, left + 40, y + 18), fill=stat.color)
        draw.text((left + 52, y), stat.language, font=label_font, fill=TEXT_PRIMARY)
        draw.rounded_rectangle((bar_left, y + 6, bar_right, y + 14), radius=4, fill=TRACK)
        filled = bar_left + int((bar_right - bar_left) * min(stat.percentage, 100.0) / 100)
        if filled > bar_left:
            draw.rounded_rectangle((bar_left, y + 6, filled, y + 14), radius=4, fill=stat.color)
        draw.text((bar_right + 16, y + 2), f"{stat.percentage:.1f}%", font=percent_font, fill=TEXT_MUTED)
        y += row_height


def _gradient(top: tuple[int, int, int], bottom: tuple[int, int, int]) -> Image.Image:
    image = Image.new("RGB", (WIDTH, HEIGHT), top)
    draw = ImageDraw.Draw(image)
    for row in range(HEIGHT):
        ratio = row / (HEIGHT - 1)
        color = tuple(int(start + (end - start) * ratio) for start, end in zip(top, bottom))
        draw.line((0, row, WIDTH, row), fill=color)
    return image


def _centered(
    draw: ImageDraw.ImageDraw,
    text: str,
    font: ImageFont.ImageFont | ImageFont.FreeTypeFont,
    y: int,
    fill: tuple[int, int, int],
) -> int:
    """Draw ``text`` horizontally centered at ``y`` and return the bottom edge."""

    left, top, right, bottom = draw.textbbox((0, y), text, font=font)
    draw.text(((WIDTH - (right - left)) // 2, y), text, font=font, fill=fill)
    return bottom


def _font(size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    return ImageFont.load_default(size=size)


def _to_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


__all__ = ["HEIGHT", "WIDTH", "render_error", "render_preview"]
