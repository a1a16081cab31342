"""Outlined and filled shapes drawn onto a :class:`~luminoveau.canvas.Canvas`.

Each shape is drawn on a small transparent layer, which is then blended onto
the canvas.  Circles, ellipses and rounded rectangles are placed by the
top-left corner of their bounding box.  A circle of radius ``r`` at ``pos``
covers ``pos`` to ``pos + 2r``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from PIL import Image, ImageDraw

from luminoveau.canvas import Canvas, _rgba


def _point(value: Sequence[float]) -> tuple[float, float]:
    x, y = value
    return float(x), float(y)


def _layer(width: float, height: float) -> tuple[Image.Image, ImageDraw.ImageDraw]:
    image = Image.new("RGBA", (max(int(width), 1), max(int(height), 1)), (0, 0, 0, 0))
    return image, ImageDraw.Draw(image)


def _place(canvas: Canvas, image: Image.Image, pos: tuple[float, float]) -> None:
    canvas.draw_image(image, pos, (float(image.width), float(image.height)))


def draw_line(
    canvas: Canvas, start: Sequence[float], end: Sequence[float], color: Sequence[int]
) -> None:
    """Draw a one-pixel line from *start* to *end*."""
    fill = _rgba(color)
    (x1, y1), (x2, y2) = _point(start), _point(end)
    left, top = min(x1, x2), min(y1, y2)
    image, draw = _layer(abs(x2 - x1) + 2, abs(y2 - y1) + 2)
    draw.line([(x1 - left, y1 - top), (x2 - left, y2 - top)], fill=fill, width=1)
    _place(canvas, image, (left, top))


def draw_thick_line(
    canvas: Canvas,
    start: Sequence[float],
    end: Sequence[float],
    color: Sequence[int],
    width: float,
) -> None:
    """Draw a line from *start* to *end* that is *width* pixels thick."""
    fill = _rgba(color)
    if width <= 0:
        raise ValueError(f"line width must be positive: {width}")
    (x1, y1), (x2, y2) = _point(start), _point(end)
    left, top = min(x1, x2), min(y1, y2)
    margin = float(width)
    image, draw = _layer(abs(x2 - x1) + 2 * margin + 2, abs(y2 - y1) + 2 * margin + 2)
    draw.line(
        [(x1 - left + margin, y1 - top + margin), (x2 - left + margin, y2 - top + margin)],
        fill=fill,
        width=max(int(round(width)), 1),
    )
    _place(canvas, image, (left - margin, top - margin))


def _triangle_layer(
    v1: Sequence[float], v2: Sequence[float], v3: Sequence[float]
) -> tuple[Image.Image, ImageDraw.ImageDraw, list[tuple[float, float]], tuple[float, float]]:
    points = [_point(v) for v in (v1, v2, v3)]
    min_x = min(p[0] for p in points)
    min_y = min(p[1] for p in points)
    max_x = max(p[0] for p in points)
    max_y = max(p[1] for p in points)
    image, draw = _layer(max_x - min_x + 2, max_y - min_y + 2)
    local = [(x - min_x, y - min_y) for x, y in points]
    return image, draw, local, (min_x, min_y)


def draw_triangle(
    canvas: Canvas,
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
    color: Sequence[int],
) -> None:
    """Draw the outline of the triangle *v1*, *v2*, *v3*."""
    fill = _rgba(color)
    image, draw, local, origin = _triangle_layer(v1, v2, v3)
    draw.polygon(local, outline=fill)
    _place(canvas, image, origin)


def draw_triangle_filled(
    canvas: Canvas,
    v1: Sequence[float],
    v2: Sequence[float],
    v3: Sequence[float],
    color: Sequence[int],
) -> None:
    """Draw the triangle *v1*, *v2*, *v3* filled with *color*."""
    fill = _rgba(color)
    image, draw, local, origin = _triangle_layer(v1, v2, v3)
    draw.polygon(local, fill=fill)
    _place(canvas, image, origin)


def _ellipse(
    canvas: Canvas,
    pos: Sequence[float],
    radius_x: float,
    radius_y: float,
    color: Sequence[int],
    filled: bool,
) -> None:
    fill = _rgba(color)
    if radius_x <= 0 or radius_y <= 0:
        return
    x, y = _point(pos)
    width, height = 2 * float(radius_x), 2 * float(radius_y)
    image, draw = _layer(width + 2, height + 2)
    box = (1.0, 1.0, max(width, 1.0), max(height, 1.0))
    if filled:
        draw.ellipse(box, fill=fill)
    else:
        draw.ellipse(box, outline=fill, width=1)
    _place(canvas, image, (x - 1, y - 1))


def draw_circle(
    canvas: Canvas, pos: Sequence[float], radius: float, color: Sequence[int]
) -> None:
    """Draw the outline of a circle whose bounding box starts at *pos*."""
    _ellipse(canvas, pos, radius, radius, color, filled=False)


def draw_circle_filled(
    canvas: Canvas, pos: Sequence[float], radius: float, color: Sequence[int]
) -> None:
    """Draw a filled circle whose bounding box starts at *pos*."""
    _ellipse(canvas, pos, radius, radius, color, filled=True)


def draw_ellipse(
    canvas: Canvas,
    center: Sequence[float],
    radius_x: float,
    radius_y: float,
    color: Sequence[int],
) -> None:
    """Draw the outline of an ellipse whose bounding box starts at *center*."""
    _ellipse(canvas, center, radius_x, radius_y, color, filled=False)


def draw_ellipse_filled(
    canvas: Canvas,
    center: Sequence[float],
    radius_x: float,
    radius_y: float,
    color: Sequence[int],
) -> None:
    """Draw a filled ellipse whose bounding box starts at *center*."""
    _ellipse(canvas, center, radius_x, radius_y, color, filled=True)


def _rounded(
    canvas: Canvas,
    pos: Sequence[float],
    size: Sequence[float],
    radius: float,
    color: Sequence[int],
    filled: bool,
) -> None:
    fill = _rgba(color)
    x, y = _point(pos)
    width, height = _point(size)
    if width <= 0 or height <= 0:
        return
    corner = min(max(float(radius), 0.0), min(width, height) / 2)
    image, draw = _layer(math.ceil(width) + 2, math.ceil(height) + 2)
    box = (1.0, 1.0, max(width, 1.0), max(height, 1.0))
    if filled:
        draw.rounded_rectangle(box, radius=corner, fill=fill)
    else:
        draw.rounded_rectangle(box, radius=corner, outline=fill, width=1)
    _place(canvas, image, (x - 1, y - 1))


def draw_rectangle_rounded(
    canvas: Canvas,
    pos: Sequence[float],
    size: Sequence[float],
    radius: float,
    color: Sequence[int],
) -> None:
    """Draw the outline of a rectangle with corners rounded by *radius*."""
    _rounded(canvas, pos, size, radius, color, filled=False)


def draw_rectangle_rounded_filled(
    canvas: Canvas,
    pos: Sequence[float],
    size: Sequence[float],
    radius: float,
    color: Sequence[int],
) -> None:
    """Draw a filled rectangle with corners rounded by *radius*."""
    _rounded(canvas, pos, size, radius, color, filled=True)