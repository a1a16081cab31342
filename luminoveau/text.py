"""Measuring and rendering text with loaded fonts."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from PIL import Image, ImageDraw, ImageFont

from luminoveau.assets import FontAsset, TextureAsset

WHITE = (255, 255, 255, 255)


def _pil_font(font: Any) -> Any:
    return font.font if isinstance(font, FontAsset) else font


def _rgba(color: Sequence[int]) -> tuple[int, int, int, int]:
    values = tuple(int(c) for c in color)
    if len(values) == 3:
        return values + (255,)  # type: ignore[return-value]
    if len(values) == 4:
        return values  # type: ignore[return-value]
    raise ValueError(f"color needs 3 or 4 components, got {len(values)}")


def rendered_text_size(font: Any, text: str) -> tuple[float, float]:
    """Width and height of *text*; the height is twice the font's x-height."""
    if not text:
        return 0.0, 0.0
    pil = _pil_font(font)
    width = float(pil.getlength(text))
    _, top, _, bottom = pil.getbbox("x")
    return width, float(bottom - top) * 2.0


def measure_text(font: Any, text: str) -> int:
    """The width of *text* in whole pixels."""
    return int(rendered_text_size(font, text)[0] + 0.1)


def render_text(font: Any, text: str, color: Sequence[int] = WHITE) -> Image.Image:
    """Render *text* onto a new transparent RGBA image sized to fit it."""
    width, height = rendered_text_size(font, text)
    image = Image.new("RGBA", (math.ceil(width), math.ceil(height)), (0, 0, 0, 0))
    if not text:
        return image
    pil = _pil_font(font)
    fill = _rgba(color)
    baseline = image.height * 0.75
    draw = ImageDraw.Draw(image)
    if isinstance(pil, ImageFont.FreeTypeFont):
        draw.text((0, baseline), text, font=pil, fill=fill, anchor="ls")
    else:
        draw.text((0, baseline - pil.getbbox(text)[3]), text, font=pil, fill=fill)
    return image


def text_to_texture(font: Any, text: str, color: Sequence[int] = WHITE) -> TextureAsset:
    """Render *text* into a texture; empty text renders as a single space."""
    image = render_text(font, text or " ", color)
    return TextureAsset(width=image.width, height=image.height, image=image)


def _blit(target: Any, image: Image.Image, pos: Sequence[float]) -> None:
    x, y = float(pos[0]), float(pos[1])
    if not isinstance(target, Image.Image):
        target.draw_image(image, (x, y), (float(image.width), float(image.height)))
        return
    left, top = int(round(x)), int(round(y))
    overlay = image
    if left < 0 or top < 0:
        overlay = image.crop((max(-left, 0), max(-top, 0), image.width, image.height))
        left, top = max(left, 0), max(top, 0)
    if overlay.width <= 0 or overlay.height <= 0:
        return
    if left >= target.width or top >= target.height:
        return
    target.alpha_composite(overlay, (left, top))


def draw_text(
    target: Any,
    font: Any,
    pos: Sequence[float],
    text: str,
    color: Sequence[int] = WHITE,
) -> None:
    """Draw *text* with its top-left corner at *pos*.

    *target* is an RGBA image, or any object with a
    ``draw_image(image, pos, size)`` method.
    """
    if not text:
        return
    _blit(target, render_text(font, text, color), pos)


def wrap_lines(font: Any, text: str, max_width: float) -> list[str]:
    """Split *text* at whitespace into lines no wider than *max_width*.

    A single word wider than *max_width* gets a line of its own.
    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if measure_text(font, candidate) <= max_width:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def draw_wrapped_text(
    target: Any,
    font: Any,
    pos: Sequence[float],
    text: str,
    max_width: float,
    color: Sequence[int] = WHITE,
) -> None:
    """Draw *text* wrapped to *max_width*, one line below the other."""
    x, y = float(pos[0]), float(pos[1])
    for line in wrap_lines(font, text, max_width):
        draw_text(target, font, (x, y), line, color)
        y += rendered_text_size(font, line)[1]