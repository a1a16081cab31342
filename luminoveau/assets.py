"""Loading, caching and releasing textures and fonts."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Any, Optional, Union

from PIL import Image, ImageFont

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_FONT_SIZE = 16


class ScaleMode(enum.Enum):
    """How a texture is filtered when drawn at another size."""

    NEAREST = 0
    LINEAR = 1
    BEST = 2

    @property
    def resample(self) -> Image.Resampling:
        """The Pillow resampling filter matching this mode."""
        return {
            ScaleMode.NEAREST: Image.Resampling.NEAREST,
            ScaleMode.LINEAR: Image.Resampling.BILINEAR,
            ScaleMode.BEST: Image.Resampling.LANCZOS,
        }[self]


@dataclass(eq=False)
class TextureAsset:
    """An RGBA image together with the details it was created with."""

    width: int
    height: int
    image: Optional[Image.Image] = None
    filename: str = ""
    id: int = 0
    scale_mode: ScaleMode = ScaleMode.NEAREST


@dataclass(eq=False)
class FontAsset:
    """A loaded font at one size."""

    font: Any
    filename: str = ""
    size: int = 0


class AssetNotFound(LookupError):
    """An asset was to be deleted that the manager does not hold."""


class AssetManager:
    """Loads textures and fonts once and hands out the cached copies."""

    def __init__(self) -> None:
        self._textures: dict[str, TextureAsset] = {}
        self._fonts: dict[tuple[str, int], FontAsset] = {}
        self._texture_counter = 0
        self._default_font: Optional[FontAsset] = None
        self.default_scale_mode = ScaleMode.NEAREST

    @property
    def textures(self) -> dict[str, TextureAsset]:
        """The loaded textures by file name."""
        return dict(self._textures)

    def _next_texture_id(self) -> int:
        self._texture_counter += 1
        return self._texture_counter

    def texture(self, filename: PathLike) -> TextureAsset:
        """Return the texture for *filename*, loading it on first use."""
        path = os.fspath(filename)
        cached = self._textures.get(path)
        if cached is not None:
            return cached
        return self.load_texture(path)

    def load_texture(self, filename: PathLike) -> TextureAsset:
        """Load *filename* from disk and cache it, replacing any earlier copy."""
        path = os.fspath(filename)
        try:
            with Image.open(path) as source:
                image = source.convert("RGBA")
        except (OSError, ValueError) as exc:
            raise OSError(f"cannot load texture: {path}") from exc
        asset = TextureAsset(
            width=image.width,
            height=image.height,
            image=image,
            filename=path,
            id=self._next_texture_id(),
            scale_mode=self.default_scale_mode,
        )
        self._textures[path] = asset
        return asset

    def create_empty_texture(self, width: float, height: float) -> TextureAsset:
        """Create a transparent texture of the given size; it is not cached."""
        size = (int(width), int(height))
        image = Image.new("RGBA", size, (0, 0, 0, 0))
        return TextureAsset(
            width=size[0],
            height=size[1],
            image=image,
            id=self._next_texture_id(),
            scale_mode=self.default_scale_mode,
        )

    def save_texture_as_png(self, texture: TextureAsset, filename: PathLike) -> None:
        """Write *texture* to *filename* as an RGBA PNG."""
        if texture.image is None:
            raise ValueError("texture has no image data")
        texture.image.convert("RGBA").save(os.fspath(filename), format="PNG")

    def font(self, filename: PathLike, size: int) -> FontAsset:
        """Return the font in *filename* at *size*, loading it on first use."""
        path = os.fspath(filename)
        key = (path, int(size))
        cached = self._fonts.get(key)
        if cached is not None:
            return cached
        try:
            pil_font = ImageFont.truetype(path, int(size))
        except (OSError, ValueError) as exc:
            raise OSError(f"Can't load font: {path}") from exc
        asset = FontAsset(font=pil_font, filename=path, size=int(size))
        self._fonts[key] = asset
        return asset

    def default_font(self) -> FontAsset:
        """The built-in font at the default size."""
        if self._default_font is None:
            self._default_font = FontAsset(
                font=ImageFont.load_default(size=DEFAULT_FONT_SIZE),
                size=DEFAULT_FONT_SIZE,
            )
        return self._default_font

    def delete(self, asset: Union[TextureAsset, FontAsset]) -> None:
        """Release a cached asset and drop it from the cache."""
        store: dict[Any, Any]
        if isinstance(asset, TextureAsset):
            store = self._textures
        elif isinstance(asset, FontAsset):
            store = self._fonts
        else:
            raise TypeError("Trying to delete invalid asset")
        key = next((k for k, v in store.items() if v is asset), None)
        if key is None:
            kind = "Texture" if isinstance(asset, TextureAsset) else "Font"
            raise AssetNotFound(f"{kind} not found in the map")
        del store[key]
        if isinstance(asset, TextureAsset) and asset.image is not None:
            asset.image.close()
            asset.image = None