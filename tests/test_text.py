import math

import pytest
from PIL import Image

from luminoveau.assets import AssetManager, TextureAsset
from luminoveau.text import (
    draw_text,
    draw_wrapped_text,
    measure_text,
    render_text,
    rendered_text_size,
    text_to_texture,
    wrap_lines,
)


@pytest.fixture(scope="module")
def font():
    return AssetManager().default_font()


class Recorder:
    def __init__(self):
        self.calls = []

    def draw_image(self, image, pos, size):
        self.calls.append((image, pos, size))


def test_empty_text_has_no_size(font):
    assert rendered_text_size(font, "") == (0.0, 0.0)
    assert measure_text(font, "") == 0


def test_measure_matches_rendered_width(font):
    width, height = rendered_text_size(font, "hello")
    assert measure_text(font, "hello") == int(width + 0.1)
    assert height > 0


def test_longer_text_is_wider(font):
    assert measure_text(font, "hello world") > measure_text(font, "hello")


def test_height_does_not_depend_on_text(font):
    assert rendered_text_size(font, "a")[1] == rendered_text_size(font, "WWW")[1]


def test_render_text_size(font):
    width, height = rendered_text_size(font, "Score")
    image = render_text(font, "Score", (255, 0, 0))
    assert image.size == (math.ceil(width), math.ceil(height))
    assert image.mode == "RGBA"


def test_render_text_uses_color(font):
    image = render_text(font, "Hello", (255, 0, 0, 255))
    pixels = [p for p in image.getdata() if p[3] > 0]
    assert pixels
    assert all(p[1] == 0 and p[2] == 0 for p in pixels)


def test_render_text_rejects_bad_color(font):
    with pytest.raises(ValueError):
        render_text(font, "x", (1, 2))


def test_text_to_texture_of_empty_text_has_size(font):
    texture = text_to_texture(font, "", (255, 255, 255))
    assert isinstance(texture, TextureAsset)
    assert texture.height == math.ceil(rendered_text_size(font, " ")[1])
    assert texture.width == math.ceil(rendered_text_size(font, " ")[0])
    assert texture.image.size == (texture.width, texture.height)


def test_draw_text_onto_image(font):
    target = Image.new("RGBA", (200, 60), (0, 0, 0, 0))
    draw_text(target, font, (5, 5), "Hi there", (255, 255, 255))
    box = target.getchannel("A").getbbox()
    assert box is not None
    assert box[0] >= 5 and box[1] >= 5


def test_draw_empty_text_changes_nothing(font):
    target = Image.new("RGBA", (50, 50), (0, 0, 0, 0))
    draw_text(target, font, (0, 0), "", (255, 255, 255))
    assert target.getchannel("A").getbbox() is None


def test_draw_text_at_negative_position(font):
    reference = Image.new("RGBA", (100, 60), (0, 0, 0, 0))
    draw_text(reference, font, (0, 0), "Hello", (255, 255, 255))
    x0, y0, x1, y1 = reference.getchannel("A").getbbox()

    shifted = Image.new("RGBA", (100, 60), (0, 0, 0, 0))
    draw_text(shifted, font, (-3, -2), "Hello", (255, 255, 255))
    assert shifted.getchannel("A").getbbox() == (
        max(x0 - 3, 0),
        max(y0 - 2, 0),
        x1 - 3,
        y1 - 2,
    )


def test_draw_text_on_duck_target(font):
    recorder = Recorder()
    draw_text(recorder, font, (7, 9), "abc", (255, 255, 255))
    image, pos, size = recorder.calls[0]
    assert pos == (7.0, 9.0)
    assert size == (float(image.width), float(image.height))


def test_wrap_lines_splits_on_width(font):
    limit = measure_text(font, "hello world")
    assert wrap_lines(font, "hello world foo", limit) == ["hello world", "foo"]


def test_wrap_lines_wide_limit_keeps_one_line(font):
    assert wrap_lines(font, "  a  b   c ", 10_000) == ["a b c"]


def test_wrap_lines_long_words_get_own_lines(font):
    text = "alpha beta gamma"
    lines = wrap_lines(font, text, 1)
    assert lines == text.split()


def test_wrap_lines_respect_limit(font):
    text = "the quick brown fox jumps over the lazy dog"
    limit = measure_text(font, "quick brown")
    lines = wrap_lines(font, text, limit)
    assert " ".join(lines) == text
    assert all(measure_text(font, line) <= limit or " " not in line for line in lines)


def test_draw_wrapped_text_moves_down_by_line_height(font):
    recorder = Recorder()
    text = "one two three four"
    limit = measure_text(font, "one two")
    draw_wrapped_text(recorder, font, (3, 4), text, limit, (255, 255, 255))
    lines = wrap_lines(font, text, limit)
    assert len(recorder.calls) == len(lines)
    ys = [pos[1] for _, pos, _ in recorder.calls]
    expected = [4.0]
    for line in lines[:-1]:
        expected.append(expected[-1] + rendered_text_size(font, line)[1])
    assert ys == pytest.approx(expected)
    assert all(pos[0] == 3.0 for _, pos, _ in recorder.calls)