"""A 2D drawing surface for rectangles, pixels, textures and images.

Positions and sizes are ``(x, y)`` pairs, rectangles ``(x, y, width,
height)`` and colours ``(r, g, b)`` or ``(r, g, b, a)`` with components from
0 to 255.  Pixels, rectangles and cleared areas replace what is underneath;
textures and images are alpha-blended onto the canvas.  A scissor area, when
set, limits every drawing call except :meth:`Canvas.clear`.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from luminoveau.assets import ScaleMode, TextureAsset

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)

Box = tuple[int, int, int, int]
Rect = tuple[float, float, float, float]


@dataclass
class Mode7Parameters:
    """The affine parameters of a Mode 7 style background layer."""

    h: int = 0
    v: int = 0
    x0: int = 0
    y0: int = 0
    a: int = 0
    b: int = 0
    c: int = 0
    d: int = 0
    snes_screen_width: int = 256
    snes_screen_height: int = 224


def _rgba(color: Sequence[int]) -> tuple[int, int, int, int]:
    values = tuple(int(c) for c in color)
    if len(values) == 3:
        values += (255,)
    if len(values) != 4:
        raise ValueError(f"color needs 3 or 4 components, got {len(values)}")
    if any(not 0 <= c <= 255 for c in values):
        raise ValueError(f"color components must lie between 0 and 255: {values}")
    return values  # type: ignore[return-value]


def _pair(value: Sequence[float]) -> tuple[float, float]:
    x, y = value
    return float(x), float(y)


def _rect(value: Sequence[float]) -> Rect:
    x, y, w, h = value
    return float(x), float(y), float(w), float(h)


def _intersect(first: Box, second: Box) -> Box:
    return (
        max(first[0], second[0]),
        max(first[1], second[1]),
        min(first[2], second[2]),
        min(first[3], second[3]),
    )


def _is_empty(box: Box) -> bool:
    return box[2] <= box[0] or box[3] <= box[1]


def _modulate(image: Image.Image, color: tuple[int, int, int, int]) -> Image.Image:
    """Multiply each channel of *image* by the matching colour component."""
    if color == WHITE:
        return image
    bands = [
        band.point(lambda v, factor=factor: v * factor // 255)
        for band, factor in zip(image.split(), color)
    ]
    return Image.merge("RGBA", bands)


def mode7_rects(
    texture_width: float,
    texture_height: float,
    pos: Sequence[float],
    size: Sequence[float],
    params: Mode7Parameters,
) -> tuple[Rect, Rect, bool]:
    """Work out the source and destination rectangles of a Mode 7 draw.

    Returns the source rectangle in the texture, the destination rectangle
    on screen and whether the area must first be filled with black because
    the source runs past the edge of the texture.
    """
    scaled_a = abs(params.a) / float(params.snes_screen_width)
    scaled_d = abs(params.d) / float(params.snes_screen_height)
    src_x, src_y = float(params.h), float(params.v)
    src_w = params.snes_screen_width * scaled_a
    src_h = params.snes_screen_height * scaled_d
    dest_x, dest_y = _pair(pos)
    dest_w, dest_h = _pair(size)
    background = False

    if src_x + src_w > texture_width:
        overflow = (src_x + src_w) - float(texture_width)
        dest_w = max(dest_w - overflow * 2.0, 0.0)
        src_w -= overflow * 2.0
        background = True

    if src_y + src_h > texture_height:
        overflow = (src_y + src_h) - float(texture_height)
        dest_h = max(dest_h - overflow * 2.0, 0.0)
        src_h -= overflow * 2.0
        background = True

    return (src_x, src_y, src_w, src_h), (dest_x, dest_y, dest_w, dest_h), background


class Canvas:
    """An RGBA drawing surface, transparent when created."""

    def __init__(self, width: int, height: int) -> None:
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive: {width}x{height}")
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._scissor: Optional[Box] = None

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def scissor(self) -> Optional[tuple[int, int, int, int]]:
        """The current scissor area as ``(x, y, width, height)``, if any."""
        if self._scissor is None:
            return None
        left, top, right, bottom = self._scissor
        return left, top, right - left, bottom - top

    def _clip_box(self) -> Box:
        bounds = (0, 0, self.width, self.height)
        return bounds if self._scissor is None else _intersect(bounds, self._scissor)

    def _fill(self, box: Box, color: tuple[int, int, int, int]) -> None:
        box = _intersect(box, self._clip_box())
        if not _is_empty(box):
            self.image.paste(color, box)

    def _blit(
        self,
        overlay: Image.Image,
        pos: tuple[float, float],
        size: tuple[float, float],
        resample: Image.Resampling = Image.Resampling.NEAREST,
    ) -> None:
        width, height = int(round(size[0])), int(round(size[1]))
        if width <= 0 or height <= 0:
            return
        if overlay.mode != "RGBA":
            overlay = overlay.convert("RGBA")
        if overlay.size != (width, height):
            overlay = overlay.resize((width, height), resample)
        left, top = math.floor(pos[0]), math.floor(pos[1])
        box = _intersect((left, top, left + width, top + height), self._clip_box())
        if _is_empty(box):
            return
        piece = overlay.crop((box[0] - left, box[1] - top, box[2] - left, box[3] - top))
        self.image.alpha_composite(piece, (box[0], box[1]))

    @staticmethod
    def _texture_image(texture: TextureAsset) -> Image.Image:
        if texture.image is None:
            raise ValueError("texture has no image data")
        return texture.image

    @staticmethod
    def _resample(texture: TextureAsset) -> Image.Resampling:
        mode = texture.scale_mode if isinstance(texture.scale_mode, ScaleMode) else ScaleMode.NEAREST
        return mode.resample

    @staticmethod
    def _crop(image: Image.Image, rect: Rect, flip_h: bool, flip_v: bool) -> Image.Image:
        x, y, w, h = rect
        box = (
            int(round(x)),
            int(round(y)),
            int(round(x + w)),
            int(round(y + h)),
        )
        part = image.convert("RGBA").crop(box)
        if flip_h:
            part = part.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        if flip_v:
            part = part.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
        return part

    def clear(self, color: Sequence[int] = BLACK) -> None:
        """Fill the whole canvas with *color*, ignoring the scissor area."""
        self.image.paste(_rgba(color), (0, 0, self.width, self.height))

    def draw_pixel(self, pos: Sequence[int], color: Sequence[int]) -> None:
        x, y = (int(v) for v in pos)
        self._fill((x, y, x + 1, y + 1), _rgba(color))

    def draw_rectangle(
        self, pos: Sequence[float], size: Sequence[float], color: Sequence[int]
    ) -> None:
        """Draw the one-pixel outline of a rectangle."""
        fill = _rgba(color)
        x, y = _pair(pos)
        w, h = _pair(size)
        left, top = math.floor(x), math.floor(y)
        right, bottom = math.floor(x + w), math.floor(y + h)
        if right <= left or bottom <= top:
            return
        self._fill((left, top, right, top + 1), fill)
        self._fill((left, bottom - 1, right, bottom), fill)
        self._fill((left, top, left + 1, bottom), fill)
        self._fill((right - 1, top, right, bottom), fill)

    def draw_rectangle_filled(
        self, pos: Sequence[float], size: Sequence[float], color: Sequence[int]
    ) -> None:
        fill = _rgba(color)
        x, y = _pair(pos)
        w, h = _pair(size)
        box = (math.floor(x), math.floor(y), math.floor(x + w), math.floor(y + h))
        if not _is_empty(box):
            self._fill(box, fill)

    def draw_texture(
        self,
        texture: TextureAsset,
        pos: Sequence[float],
        size: Sequence[float],
        color: Sequence[int] = WHITE,
    ) -> None:
        """Draw the whole of *texture* stretched to *size*, tinted by *color*."""
        image = _modulate(self._texture_image(texture).convert("RGBA"), _rgba(color))
        self._blit(image, _pair(pos), _pair(size), self._resample(texture))

    def draw_texture_part(
        self,
        texture: TextureAsset,
        pos: Sequence[float],
        size: Sequence[float],
        src: Sequence[float],
        color: Sequence[int] = WHITE,
    ) -> None:
        """Draw the *src* part of *texture*; a negative width or height flips it."""
        x, y, w, h = _rect(src)
        part = self._crop(
            self._texture_image(texture), (x, y, abs(w), abs(h)), w < 0.0, h < 0.0
        )
        self._blit(_modulate(part, _rgba(color)), _pair(pos), _pair(size), self._resample(texture))

    def draw_texture_mode7(
        self,
        texture: TextureAsset,
        pos: Sequence[float],
        size: Sequence[float],
        params: Mode7Parameters,
        color: Sequence[int] = WHITE,
    ) -> None:
        """Draw *texture* as a Mode 7 layer described by *params*."""
        tint = _rgba(color)
        image = self._texture_image(texture)
        src, dest, background = mode7_rects(texture.width, texture.height, pos, size, params)
        if background:
            self.draw_rectangle_filled(pos, size, BLACK)
        if src[2] <= 0.0 or src[3] <= 0.0:
            return
        part = self._crop(image, src, params.a < 0, params.d < 0)
        self._blit(
            _modulate(part, tint), (dest[0], dest[1]), (dest[2], dest[3]), self._resample(texture)
        )

    def draw_image(
        self, image: Image.Image, pos: Sequence[float], size: Sequence[float]
    ) -> None:
        """Blend *image* onto the canvas, stretched to *size*."""
        self._blit(image, _pair(pos), _pair(size))

    def begin_scissor_mode(self, area: Sequence[float]) -> None:
        """Limit drawing to *area* until :meth:`end_scissor_mode`."""
        x, y, w, h = (int(v) for v in _rect(area))
        self._scissor = (x, y, x + w, y + h)

    def end_scissor_mode(self) -> None:
        self._scissor = None

    @contextmanager
    def scissored(self, area: Sequence[float]) -> Iterator["Canvas"]:
        """Limit drawing to *area* for the duration of a ``with`` block."""
        self.begin_scissor_mode(area)
        try:
            yield self
        finally:
            self.end_scissor_mode()