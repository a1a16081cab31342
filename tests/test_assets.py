import pytest
from PIL import Image

from luminoveau.assets import (
    AssetManager,
    AssetNotFound,
    FontAsset,
    ScaleMode,
    TextureAsset,
)


@pytest.fixture
def png(tmp_path):
    path = tmp_path / "sprite.png"
    Image.new("RGBA", (3, 2), (10, 20, 30, 255)).save(path)
    return path


def test_load_texture_reads_size(png):
    manager = AssetManager()
    texture = manager.load_texture(png)
    assert (texture.width, texture.height) == (3, 2)
    assert texture.filename == str(png)
    assert texture.image.getpixel((0, 0)) == (10, 20, 30, 255)


def test_texture_is_cached(png):
    manager = AssetManager()
    first = manager.texture(png)
    assert manager.texture(str(png)) is first
    assert manager.textures == {str(png): first}


def test_missing_texture_raises(tmp_path):
    with pytest.raises(OSError):
        AssetManager().texture(tmp_path / "missing.png")


def test_default_scale_mode_applies_to_new_textures(png):
    manager = AssetManager()
    assert manager.default_scale_mode is ScaleMode.NEAREST
    manager.default_scale_mode = ScaleMode.LINEAR
    assert manager.load_texture(png).scale_mode is ScaleMode.LINEAR
    assert manager.create_empty_texture(2, 2).scale_mode is ScaleMode.LINEAR


def test_empty_textures_get_increasing_ids():
    manager = AssetManager()
    first = manager.create_empty_texture(4, 3)
    second = manager.create_empty_texture(4, 3)
    assert first.id == 1
    assert second.id == first.id + 1
    assert (first.width, first.height) == (4, 3)
    assert first.image.getchannel("A").getbbox() is None


def test_empty_texture_is_not_cached():
    manager = AssetManager()
    manager.create_empty_texture(2, 2)
    assert manager.textures == {}


def test_save_texture_round_trip(tmp_path):
    manager = AssetManager()
    texture = manager.create_empty_texture(4, 3)
    texture.image.putpixel((1, 2), (200, 100, 50, 255))
    out = tmp_path / "out.png"
    manager.save_texture_as_png(texture, out)
    with Image.open(out) as saved:
        assert saved.size == (4, 3)
        assert saved.convert("RGBA").getpixel((1, 2)) == (200, 100, 50, 255)


def test_delete_texture(png):
    manager = AssetManager()
    texture = manager.texture(png)
    manager.delete(texture)
    assert manager.textures == {}
    assert texture.image is None
    with pytest.raises(AssetNotFound):
        manager.delete(texture)
    assert manager.texture(png) is not texture


def test_save_deleted_texture_raises(png, tmp_path):
    manager = AssetManager()
    texture = manager.texture(png)
    manager.delete(texture)
    with pytest.raises(ValueError):
        manager.save_texture_as_png(texture, tmp_path / "x.png")


def test_delete_unknown_texture_raises():
    manager = AssetManager()
    with pytest.raises(AssetNotFound):
        manager.delete(TextureAsset(width=1, height=1))


def test_delete_invalid_asset_raises():
    with pytest.raises(TypeError):
        AssetManager().delete("not an asset")


def test_missing_font_raises(tmp_path):
    with pytest.raises(OSError):
        AssetManager().font(tmp_path / "missing.ttf", 20)


def test_default_font_is_cached_and_not_deletable():
    manager = AssetManager()
    font = manager.default_font()
    assert isinstance(font, FontAsset)
    assert manager.default_font() is font
    assert font.size == 16
    with pytest.raises(AssetNotFound):
        manager.delete(font)


@pytest.mark.parametrize(
    "mode, resample",
    [
        (ScaleMode.NEAREST, Image.Resampling.NEAREST),
        (ScaleMode.LINEAR, Image.Resampling.BILINEAR),
    ],
)
def test_new_texture_scale_mode_resample(mode, resample):
    manager = AssetManager()
    manager.default_scale_mode = mode
    texture = manager.create_empty_texture(2, 2)
    assert texture.scale_mode.resample is resample