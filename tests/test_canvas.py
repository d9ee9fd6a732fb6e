"""
Unit tests for background canvas creation.
"""

import pytest

from poster_composer.rendering.canvas import CanvasOptions, create_canvas
from poster_composer.templates.models import GradientFill, GradientStop, SolidFill
from poster_composer.utils.exceptions import ColorParseError, InvalidInputError

BLACK_TO_WHITE = (GradientStop("#000000", 0), GradientStop("#FFFFFF", 100))


def gradient(direction, stops=BLACK_TO_WHITE, width=101, height=51):
    return create_canvas(CanvasOptions(width, height, GradientFill(direction, stops)))


class TestSolidCanvas:
    """Test solid fills."""

    def test_size_mode_and_color(self):
        canvas = create_canvas(CanvasOptions(320, 240, SolidFill("#1A1A2E")))

        assert canvas.size == (320, 240)
        assert canvas.mode == "RGBA"
        assert canvas.getpixel((0, 0)) == (26, 26, 46, 255)
        assert canvas.getpixel((319, 239)) == (26, 26, 46, 255)

    def test_malformed_color_raises(self):
        with pytest.raises(ColorParseError):
            create_canvas(CanvasOptions(10, 10, SolidFill("#12345")))

    @pytest.mark.parametrize(("width", "height"), [(0, 10), (10, 0), (-5, 10)])
    def test_non_positive_size_raises(self, width, height):
        with pytest.raises(InvalidInputError):
            create_canvas(CanvasOptions(width, height, SolidFill("#000000")))


class TestGradientCanvas:
    """Test gradient fills."""

    def test_to_bottom_runs_top_to_bottom(self):
        canvas = gradient("to-bottom")

        assert canvas.getpixel((50, 0)) == (0, 0, 0, 255)
        assert canvas.getpixel((50, 50)) == (255, 255, 255, 255)
        # Constant along each row
        assert canvas.getpixel((0, 25)) == canvas.getpixel((100, 25))

    def test_to_right_runs_left_to_right(self):
        canvas = gradient("to-right")

        assert canvas.getpixel((0, 20)) == (0, 0, 0, 255)
        assert canvas.getpixel((100, 20)) == (255, 255, 255, 255)
        assert canvas.getpixel((50, 0)) == canvas.getpixel((50, 50))
        assert canvas.getpixel((50, 0))[0] in (127, 128)

    def test_to_bottom_right_runs_corner_to_corner(self):
        canvas = gradient("to-bottom-right")

        assert canvas.getpixel((0, 0)) == (0, 0, 0, 255)
        assert canvas.getpixel((100, 50)) == (255, 255, 255, 255)

    def test_radial_runs_center_to_corners(self):
        canvas = gradient("radial", width=101, height=101)

        assert canvas.getpixel((50, 50)) == (0, 0, 0, 255)
        assert canvas.getpixel((0, 0)) == (255, 255, 255, 255)
        assert canvas.getpixel((100, 100)) == (255, 255, 255, 255)

    def test_stops_are_sorted_by_position(self):
        stops = (GradientStop("#FFFFFF", 100), GradientStop("#000000", 0))

        canvas = gradient("to-bottom", stops)

        assert canvas.getpixel((0, 0)) == (0, 0, 0, 255)
        assert canvas.getpixel((0, 50)) == (255, 255, 255, 255)

    def test_gradient_interpolates_alpha(self):
        stops = (GradientStop("#FF000000", 0), GradientStop("#FF0000FF", 100))

        canvas = gradient("to-right", stops)

        assert canvas.getpixel((0, 0)) == (255, 0, 0, 0)
        assert canvas.getpixel((100, 0)) == (255, 0, 0, 255)

    def test_single_stop_is_solid(self):
        canvas = gradient("radial", (GradientStop("#336699", 40),))

        assert canvas.getpixel((0, 0)) == canvas.getpixel((50, 25)) == (51, 102, 153, 255)

    def test_empty_stops_raise(self):
        with pytest.raises(InvalidInputError, match="at least one color stop"):
            gradient("to-bottom", ())

    @pytest.mark.parametrize("position", [-1, 101])
    def test_stop_out_of_range_raises(self, position):
        stops = (GradientStop("#000000", 0), GradientStop("#FFFFFF", position))

        with pytest.raises(InvalidInputError, match="between 0 and 100"):
            gradient("to-bottom", stops)

    def test_unknown_direction_raises(self):
        with pytest.raises(InvalidInputError, match="Unknown gradient direction"):
            gradient("to-top")

    def test_malformed_stop_color_raises(self):
        with pytest.raises(InvalidInputError):
            gradient("to-bottom", (GradientStop("nope", 0),))
