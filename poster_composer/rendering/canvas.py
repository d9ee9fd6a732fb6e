"""Base raster creation: solid and gradient fills.

Gradients are synthesised with numpy: every pixel gets a position ``t`` in
[0, 1] along the gradient axis, and each RGBA channel is linearly
interpolated between the color stops at ``t``.
"""

from dataclasses import dataclass

import numpy as np
from PIL import Image

from poster_composer.resources.colors import ColorParser
from poster_composer.templates.models import Fill, GradientFill, GradientStop, SolidFill
from poster_composer.utils.constants import (
    GRADIENT_DIRECTIONS,
    GRADIENT_TO_BOTTOM,
    GRADIENT_TO_BOTTOM_RIGHT,
    GRADIENT_TO_RIGHT,
    MAX_STOP_POSITION,
    MIN_STOP_POSITION,
)
from poster_composer.utils.exceptions import InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CanvasOptions:
    """Options for creating a canvas.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        fill: Solid or gradient fill
    """

    width: int
    height: int
    fill: Fill


def create_canvas(options: CanvasOptions) -> Image.Image:
    """Create the base RGBA raster.

    Args:
        options: Canvas size and fill

    Returns:
        RGBA image of the requested size

    Raises:
        InvalidInputError: For a non-positive size, malformed color, empty
            stop list, stop outside [0, 100] or unknown direction

    Example:
        >>> canvas = create_canvas(CanvasOptions(1080, 1350, SolidFill("#1A1A2E")))
        >>> canvas.size
        (1080, 1350)
    """
    if options.width <= 0 or options.height <= 0:
        raise InvalidInputError(
            f"Canvas size must be positive, got {options.width}x{options.height}",
            field="canvas",
        )

    fill = options.fill
    logger.debug(f"Creating canvas: {options.width}x{options.height}, fill={type(fill).__name__}")

    if isinstance(fill, SolidFill):
        color = ColorParser.parse(fill.color)
        return Image.new("RGBA", (options.width, options.height), color)

    if isinstance(fill, GradientFill):
        return _create_gradient(options.width, options.height, fill)

    raise InvalidInputError(f"Unsupported fill: {fill!r}", field="fill")


def _validate_stops(stops: tuple[GradientStop, ...]) -> list[GradientStop]:
    """Check stop positions and return the stops ordered by position."""
    if not stops:
        raise InvalidInputError("Gradient requires at least one color stop", field="stops")

    for stop in stops:
        if not MIN_STOP_POSITION <= stop.position <= MAX_STOP_POSITION:
            raise InvalidInputError(
                f"Gradient stop position must be between 0 and 100, got {stop.position}",
                field="stops",
            )

    # sorted() is stable, so equal positions keep template order (hard stops)
    return sorted(stops, key=lambda stop: stop.position)


def _interpolate(t: np.ndarray, stops: list[GradientStop]) -> np.ndarray:
    """Interpolate RGBA values at axis positions ``t``.

    Returns:
        Array of shape ``t.shape + (4,)`` with float channel values
    """
    positions = np.array([stop.position / 100.0 for stop in stops])
    colors = np.array([ColorParser.parse(stop.color) for stop in stops], dtype=np.float64)

    channels = [np.interp(t, positions, colors[:, channel]) for channel in range(4)]
    return np.stack(channels, axis=-1)


def _create_gradient(width: int, height: int, fill: GradientFill) -> Image.Image:
    if fill.direction not in GRADIENT_DIRECTIONS:
        raise InvalidInputError(
            f"Unknown gradient direction '{fill.direction}', must be one of {GRADIENT_DIRECTIONS}",
            field="direction",
        )

    stops = _validate_stops(fill.stops)

    if fill.direction == GRADIENT_TO_BOTTOM:
        column = _interpolate(np.linspace(0.0, 1.0, height), stops)
        pixels = np.broadcast_to(column[:, np.newaxis, :], (height, width, 4))

    elif fill.direction == GRADIENT_TO_RIGHT:
        row = _interpolate(np.linspace(0.0, 1.0, width), stops)
        pixels = np.broadcast_to(row[np.newaxis, :, :], (height, width, 4))

    elif fill.direction == GRADIENT_TO_BOTTOM_RIGHT:
        ys, xs = np.mgrid[0:height, 0:width]
        t = (xs + ys) / max(width + height - 2, 1)
        pixels = _interpolate(t, stops)

    else:
        # Radial: centered, reaching the farthest corner
        ys, xs = np.mgrid[0:height, 0:width]
        center_x, center_y = (width - 1) / 2, (height - 1) / 2
        distance = np.hypot(xs - center_x, ys - center_y)
        max_distance = max(float(np.hypot(center_x, center_y)), 1.0)
        pixels = _interpolate(distance / max_distance, stops)

    array = np.ascontiguousarray(np.clip(np.rint(pixels), 0, 255).astype(np.uint8))
    logger.debug(f"Gradient {fill.direction} rendered with {len(stops)} stops")
    return Image.fromarray(array)
