"""
Unit tests for image layer compositing.
"""

import logging

import pytest
from PIL import Image

from conftest import decode, encode
from poster_composer.rendering.compositor import Compositor, ImageLayer, composite_image, fit_image
from poster_composer.templates.models import Border, CircleMask, RoundedRectMask, Shadow, Size
from poster_composer.utils.exceptions import InvalidInputError

BACKGROUND = (0, 0, 0, 255)
RED = (255, 0, 0, 255)


def close(actual, expected, tolerance=8):
    return all(abs(a - e) <= tolerance for a, e in zip(actual, expected))


@pytest.fixture
def background():
    return Image.new("RGBA", (100, 100), BACKGROUND)


class TestCompositeBasics:
    """Test placement of plain layers."""

    def test_layer_is_drawn_at_top_left_position(self, background, photo_bytes):
        result = composite_image(background, [ImageLayer(photo_bytes, (10, 20), Size(50, 40))])

        assert close(result.getpixel((10, 20)), RED)
        assert close(result.getpixel((59, 59)), RED)
        assert result.getpixel((9, 20)) == BACKGROUND
        assert result.getpixel((30, 61)) == BACKGROUND

    def test_background_is_not_modified(self, background, photo_bytes):
        composite_image(background, [ImageLayer(photo_bytes, (0, 0), Size(100, 100))])

        assert background.getpixel((50, 50)) == BACKGROUND

    def test_center_anchor_positions_box_center(self, background, photo_bytes):
        layer = ImageLayer(photo_bytes, (50, 50), Size(20, 20), anchor="center")

        result = composite_image(background, [layer])

        assert layer.top_left == (40, 40)
        assert close(result.getpixel((45, 45)), RED)
        assert result.getpixel((35, 35)) == BACKGROUND

    def test_layers_are_drawn_in_order(self, background, photo_bytes):
        blue = encode(Image.new("RGB", (10, 10), (0, 0, 255)))
        layers = [
            ImageLayer(photo_bytes, (0, 0), Size(60, 60)),
            ImageLayer(blue, (30, 30), Size(60, 60)),
        ]

        result = Compositor().composite(background, layers)

        assert close(result.getpixel((10, 10)), RED)
        assert result.getpixel((45, 45)) == (0, 0, 255, 255)

    def test_decoded_image_is_accepted(self, background):
        layer = ImageLayer(Image.new("RGB", (5, 5), (0, 255, 0)), (0, 0), Size(10, 10))

        result = composite_image(background, [layer])

        assert result.getpixel((5, 5)) == (0, 255, 0, 255)

    def test_undecodable_bytes_raise(self, background):
        with pytest.raises(InvalidInputError, match="Invalid image"):
            composite_image(background, [ImageLayer(b"garbage", (0, 0), Size(10, 10))])

    def test_invalid_fit_raises(self, photo_bytes):
        with pytest.raises(InvalidInputError):
            ImageLayer(photo_bytes, (0, 0), Size(10, 10), fit="stretch")

    def test_invalid_anchor_raises(self, photo_bytes):
        with pytest.raises(InvalidInputError):
            ImageLayer(photo_bytes, (0, 0), Size(10, 10), anchor="bottom-right")


class TestClamping:
    """Test layers that extend past the canvas."""

    def test_partially_visible_layer_is_clipped(self, background, photo_bytes, caplog):
        with caplog.at_level(logging.WARNING, logger="poster_composer"):
            result = composite_image(background, [ImageLayer(photo_bytes, (-25, 70), Size(50, 50))])

        assert result.size == (100, 100)
        assert close(result.getpixel((0, 99)), RED)
        assert close(result.getpixel((24, 70)), RED)
        assert result.getpixel((25, 70)) == BACKGROUND
        assert "clamped" in caplog.text

    def test_fully_offscreen_layer_is_skipped(self, background, photo_bytes, caplog):
        with caplog.at_level(logging.WARNING, logger="poster_composer"):
            result = composite_image(background, [ImageLayer(photo_bytes, (500, 500), Size(50, 50))])

        assert result.tobytes() == background.tobytes()
        assert "outside the canvas" in caplog.text

    def test_offscreen_layer_with_bad_bytes_raises(self, background):
        with pytest.raises(InvalidInputError):
            composite_image(background, [ImageLayer(b"garbage", (500, 500), Size(10, 10))])

    def test_shadow_of_offscreen_layer_is_drawn(self, photo_bytes):
        background = Image.new("RGBA", (100, 100), (255, 255, 255, 255))
        shadow = Shadow(blur=0, offset_x=-30, offset_y=0, color="#000000")
        layer = ImageLayer(photo_bytes, (100, 0), Size(20, 20), shadow=shadow)

        result = composite_image(background, [layer])

        # Layer covers x 100..119 (off canvas), its shadow x 70..89
        assert result.getpixel((80, 10)) == (0, 0, 0, 255)
        assert result.getpixel((60, 10)) == (255, 255, 255, 255)
        assert result.getpixel((80, 30)) == (255, 255, 255, 255)

    def test_blur_reach_keeps_nearby_shadow(self, photo_bytes):
        background = Image.new("RGBA", (100, 100), (255, 255, 255, 255))
        shadow = Shadow(blur=4, offset_x=0, offset_y=0, color="#000000")
        layer = ImageLayer(photo_bytes, (102, 40), Size(20, 20), shadow=shadow)

        result = composite_image(background, [layer])

        # The blurred edge bleeds back across x = 99
        assert result.getpixel((99, 50))[0] < 255


class TestFitModes:
    """Test how sources fill the layer box."""

    def test_cover_crops_overflow(self, wide_photo_bytes):
        source = decode(wide_photo_bytes)

        fitted = fit_image(source, (100, 100), "cover")

        assert fitted.size == (100, 100)
        assert close(fitted.getpixel((20, 50)), (0, 0, 255, 255))
        assert close(fitted.getpixel((80, 50)), (0, 255, 0, 255))

    def test_contain_pads_with_transparency(self, background, wide_photo_bytes):
        layer = ImageLayer(wide_photo_bytes, (0, 0), Size(100, 100), fit="contain")

        result = composite_image(background, [layer])

        # 200x100 letterboxed into 100x100 leaves 25px bands above and below
        assert result.getpixel((50, 5)) == BACKGROUND
        assert result.getpixel((50, 95)) == BACKGROUND
        assert close(result.getpixel((10, 50)), (0, 0, 255, 255))

    def test_fill_stretches(self, wide_photo_bytes):
        source = decode(wide_photo_bytes)

        fitted = fit_image(source, (40, 80), "fill")

        assert fitted.size == (40, 80)
        assert close(fitted.getpixel((5, 40)), (0, 0, 255, 255))
        assert close(fitted.getpixel((35, 40)), (0, 255, 0, 255))


class TestMasksAndEffects:
    """Test masks, shadows and borders."""

    def test_circle_mask_leaves_corners_transparent(self, background, photo_bytes):
        layer = ImageLayer(photo_bytes, (0, 0), Size(100, 100), mask=CircleMask())

        result = composite_image(background, [layer])

        assert close(result.getpixel((50, 50)), RED)
        assert result.getpixel((1, 1)) == BACKGROUND
        assert result.getpixel((98, 98)) == BACKGROUND

    def test_rounded_rect_mask_rounds_corners_only(self, background, photo_bytes):
        layer = ImageLayer(photo_bytes, (0, 0), Size(100, 100), mask=RoundedRectMask(30))

        result = composite_image(background, [layer])

        assert result.getpixel((1, 1)) == BACKGROUND
        assert close(result.getpixel((50, 1)), RED)
        assert close(result.getpixel((1, 50)), RED)

    def test_shadow_is_drawn_behind_layer(self, photo_bytes):
        background = Image.new("RGBA", (100, 100), (255, 255, 255, 255))
        shadow = Shadow(blur=0, offset_x=10, offset_y=10, color="#000000")
        layer = ImageLayer(photo_bytes, (10, 10), Size(40, 40), shadow=shadow)

        result = composite_image(background, [layer])

        # Layer covers 10..49, its shadow 20..59
        assert close(result.getpixel((30, 30)), RED)
        assert result.getpixel((55, 55)) == (0, 0, 0, 255)
        assert result.getpixel((5, 5)) == (255, 255, 255, 255)

    def test_blurred_shadow_spreads(self, photo_bytes):
        background = Image.new("RGBA", (100, 100), (255, 255, 255, 255))
        shadow = Shadow(blur=6, offset_x=0, offset_y=0, color="#000000")
        layer = ImageLayer(photo_bytes, (30, 30), Size(40, 40), shadow=shadow)

        result = composite_image(background, [layer])

        # Just outside the layer the blurred shadow darkens the background
        assert result.getpixel((27, 50))[0] < 250

    def test_border_pixels_take_border_color(self, background, photo_bytes):
        layer = ImageLayer(photo_bytes, (10, 10), Size(60, 60), border=Border(6, "#00FF00"))

        result = composite_image(background, [layer])

        assert close(result.getpixel((12, 40)), (0, 255, 0, 255))
        assert close(result.getpixel((40, 67)), (0, 255, 0, 255))
        assert close(result.getpixel((40, 40)), RED)

    def test_circle_border_follows_mask(self, background, photo_bytes):
        layer = ImageLayer(
            photo_bytes, (0, 0), Size(100, 100), mask=CircleMask(), border=Border(6, "#00FF00")
        )

        result = composite_image(background, [layer])

        assert close(result.getpixel((50, 2)), (0, 255, 0, 255))
        assert close(result.getpixel((50, 50)), RED)
        assert result.getpixel((2, 2)) == BACKGROUND
