"""
Unit tests for text rendering.

These tests never need real font files: unregistered families fall back
to a system or built-in font.
"""

import logging

import pytest
from PIL import Image, ImageChops

from poster_composer.rendering.text_renderer import TextLayer, TextRenderer, TextTransformer, add_text
from poster_composer.templates.models import Shadow, Stroke, TextStyle


def style(**overrides):
    values = {"font_family": "Missing", "font_size": 40, "color": "#FFFFFF"}
    values.update(overrides)
    return TextStyle(**values)


def changed_box(before, after):
    """Bounding box of the pixels that differ between two images."""
    return ImageChops.difference(before.convert("RGB"), after.convert("RGB")).getbbox()


@pytest.fixture
def canvas():
    return Image.new("RGBA", (400, 200), (0, 0, 0, 255))


@pytest.fixture
def renderer(registry):
    return TextRenderer(registry)


class TestTextTransformer:
    """Test case transformations."""

    @pytest.mark.parametrize(
        ("transform", "expected"),
        [
            ("none", "hello World"),
            ("upper", "HELLO WORLD"),
            ("lower", "hello world"),
            ("title", "Hello World"),
            ("capitalize", "Hello world"),
            ("swapcase", "HELLO wORLD"),
        ],
    )
    def test_transform(self, transform, expected):
        assert TextTransformer.transform("hello World", transform) == expected


class TestDrawing:
    """Test where and how text is drawn."""

    def test_text_is_drawn_near_anchor(self, renderer, canvas):
        result = renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), style())])

        box = changed_box(canvas, result)
        assert box is not None
        left, top, right, bottom = box
        assert left < 200 < right
        assert top < 120
        assert result.getpixel((5, 5)) == (0, 0, 0, 255)

    def test_input_image_is_not_modified(self, renderer, canvas):
        renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), style())])

        assert changed_box(canvas, Image.new("RGBA", (400, 200), (0, 0, 0, 255))) is None

    def test_baseline_sits_at_anchor_y(self, renderer, canvas):
        result = renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), style())])

        # Capital letters have no descenders, so nothing is drawn far below the baseline
        _, _, _, bottom = changed_box(canvas, result)
        assert bottom <= 123

    def test_left_align_starts_at_anchor(self, renderer, canvas):
        result = renderer.add_text(canvas, [TextLayer("HELLO", (100, 120), style(align="left"))])

        left, _, right, _ = changed_box(canvas, result)
        assert 95 <= left <= 110
        assert right > 130

    def test_right_align_ends_at_anchor(self, renderer, canvas):
        result = renderer.add_text(canvas, [TextLayer("HELLO", (300, 120), style(align="right"))])

        left, _, right, _ = changed_box(canvas, result)
        assert 290 <= right <= 305
        assert left < 270

    def test_text_color(self, renderer, canvas):
        result = renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), style(color="#FF0000", font_size=60))])

        colors = {color for _, color in result.convert("RGB").getcolors(maxcolors=1_000_000)}
        assert (255, 0, 0) in colors

    def test_stroke_uses_stroke_color(self, renderer, canvas):
        text_style = style(font_size=60, stroke=Stroke(width=4, color="#00FF00"))

        result = renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), text_style)])

        colors = {color for _, color in result.convert("RGB").getcolors(maxcolors=1_000_000)}
        assert (0, 255, 0) in colors

    def test_shadow_extends_drawn_area(self, renderer, canvas):
        plain = renderer.add_text(canvas, [TextLayer("HELLO", (150, 100), style())])
        shadowed = renderer.add_text(
            canvas,
            [TextLayer("HELLO", (150, 100), style(shadow=Shadow(blur=0, offset_x=30, offset_y=30, color="#0000FF")))],
        )

        plain_box = changed_box(canvas, plain)
        shadow_box = changed_box(canvas, shadowed)
        assert shadow_box[2] >= plain_box[2] + 25
        assert shadow_box[3] >= plain_box[3] + 25

    def test_multiline_content_draws_each_line_lower(self, renderer, canvas):
        single = renderer.add_text(canvas, [TextLayer("HELLO", (200, 60), style())])
        double = renderer.add_text(canvas, [TextLayer("HELLO\nWORLD", (200, 60), style())])

        assert changed_box(canvas, double)[3] >= changed_box(canvas, single)[3] + 40

    def test_letter_spacing_widens_text(self, renderer, canvas):
        plain = renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), style())])
        spaced = renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), style(letter_spacing=10))])

        plain_box = changed_box(canvas, plain)
        spaced_box = changed_box(canvas, spaced)
        assert (spaced_box[2] - spaced_box[0]) > (plain_box[2] - plain_box[0]) + 30

    def test_unicode_content_renders(self, renderer, canvas):
        result = renderer.add_text(canvas, [TextLayer("José Ñandú", (200, 120), style())])

        assert changed_box(canvas, result) is not None

    def test_unregistered_family_warns(self, renderer, canvas, caplog):
        with caplog.at_level(logging.WARNING, logger="poster_composer"):
            renderer.add_text(canvas, [TextLayer("HELLO", (200, 120), style(font_family="Nope"))])

        assert "Font 'Nope' is not registered" in caplog.text

    def test_module_function(self, registry, canvas):
        result = add_text(canvas, [TextLayer("HI", (200, 120), style())], registry=registry)

        assert changed_box(canvas, result) is not None


class TestOverflow:
    """Test the visible, wrap and shrink overflow policies."""

    def test_visible_keeps_single_line(self, renderer):
        layer = TextLayer("one two three four five six", (0, 0), style(max_width=100))

        font, lines = renderer.layout(layer)

        assert lines == ["one two three four five six"]
        assert font.size == 40

    def test_wrap_keeps_lines_within_max_width(self, renderer):
        text_style = style(font_size=30, max_width=150, overflow="wrap")
        layer = TextLayer("one two three four five six", (0, 0), text_style)

        font, lines = renderer.layout(layer)

        assert len(lines) > 1
        assert " ".join(lines) == "one two three four five six"
        assert all(renderer.measure_line(line, font) <= 150 for line in lines)

    def test_wrap_preserves_explicit_newlines(self, renderer):
        text_style = style(font_size=20, max_width=1000, overflow="wrap")

        _, lines = renderer.layout(TextLayer("first\nsecond", (0, 0), text_style))

        assert lines == ["first", "second"]

    def test_wrap_keeps_overlong_word_whole(self, renderer):
        text_style = style(font_size=40, max_width=20, overflow="wrap")

        _, lines = renderer.layout(TextLayer("Championship", (0, 0), text_style))

        assert lines == ["Championship"]

    def test_shrink_reduces_font_until_it_fits(self, renderer):
        text_style = style(font_size=48, max_width=150, overflow="shrink")

        font, lines = renderer.layout(TextLayer("CHAMPIONSHIP FINAL", (0, 0), text_style))

        assert lines == ["CHAMPIONSHIP FINAL"]
        assert font.size < 48
        assert renderer.measure_line(lines[0], font) <= 150

    def test_shrink_leaves_fitting_text_alone(self, renderer):
        text_style = style(font_size=20, max_width=1000, overflow="shrink")

        font, _ = renderer.layout(TextLayer("short", (0, 0), text_style))

        assert font.size == 20

    def test_shrink_stops_at_minimum_size(self, renderer):
        text_style = style(font_size=48, max_width=10, overflow="shrink")

        font, _ = renderer.layout(TextLayer("CHAMPIONSHIP FINAL", (0, 0), text_style))

        assert font.size == 8

    @pytest.mark.parametrize("overflow", ["wrap", "shrink"])
    def test_without_max_width_behaves_as_visible(self, renderer, overflow):
        font, lines = renderer.layout(TextLayer("one two three", (0, 0), style(overflow=overflow)))

        assert lines == ["one two three"]
        assert font.size == 40

    def test_letter_spacing_counts_toward_width(self, renderer):
        font, _ = renderer.layout(TextLayer("ABC", (0, 0), style()))

        plain = renderer.measure_line("ABC", font)
        spaced = renderer.measure_line("ABC", font, letter_spacing=10)

        assert spaced == pytest.approx(sum(font.getlength(char) for char in "ABC") + 20)
        assert spaced > plain
