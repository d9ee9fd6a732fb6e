"""Anchor strategies for resolving template positions.

This module converts template-relative positions (pixel points or named
anchors such as "center") into absolute canvas coordinates. Resolution is
a pure function of the position and the canvas size.
"""

import math
from typing import Protocol

from poster_composer.templates.models import AnchorPosition, PixelPosition, Position, Size
from poster_composer.utils.exceptions import InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


class AnchorStrategy(Protocol):
    """Protocol for named anchor strategies.

    Strategies return the anchor point for a canvas of the given size.
    """

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        """Calculate the anchor point.

        Args:
            canvas_width: Canvas width in pixels
            canvas_height: Canvas height in pixels

        Returns:
            Tuple of (x, y)
        """
        ...


class CenterAnchor:
    """Middle of the canvas."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (canvas_width // 2, canvas_height // 2)


class TopCenterAnchor:
    """Middle of the top edge."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (canvas_width // 2, 0)


class BottomCenterAnchor:
    """Middle of the bottom edge."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (canvas_width // 2, canvas_height)


class LeftCenterAnchor:
    """Middle of the left edge."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (0, canvas_height // 2)


class RightCenterAnchor:
    """Middle of the right edge."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (canvas_width, canvas_height // 2)


class TopLeftAnchor:
    """Top-left corner."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (0, 0)


class TopRightAnchor:
    """Top-right corner."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (canvas_width, 0)


class BottomLeftAnchor:
    """Bottom-left corner."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (0, canvas_height)


class BottomRightAnchor:
    """Bottom-right corner."""

    def calculate_position(self, canvas_width: int, canvas_height: int) -> tuple[int, int]:
        return (canvas_width, canvas_height)


class AnchorStrategyFactory:
    """Maps anchor names to strategy classes.

    Example:
        >>> strategy = AnchorStrategyFactory.get_strategy("top-center")
        >>> strategy.calculate_position(1000, 1000)
        (500, 0)
    """

    _strategies: dict[str, type[AnchorStrategy]] = {
        "center": CenterAnchor,
        "top-center": TopCenterAnchor,
        "bottom-center": BottomCenterAnchor,
        "left-center": LeftCenterAnchor,
        "right-center": RightCenterAnchor,
        "top-left": TopLeftAnchor,
        "top-right": TopRightAnchor,
        "bottom-left": BottomLeftAnchor,
        "bottom-right": BottomRightAnchor,
    }

    @classmethod
    def get_strategy(cls, anchor: str) -> AnchorStrategy:
        """Get the strategy for an anchor name.

        Raises:
            InvalidInputError: If the anchor name is unknown
        """
        strategy_class = cls._strategies.get(anchor)
        if strategy_class is None:
            raise InvalidInputError(
                f"Unknown anchor '{anchor}', must be one of {', '.join(cls._strategies)}",
                field="position",
            )
        return strategy_class()

    @classmethod
    def get_available_anchors(cls) -> list[str]:
        """Get list of all anchor names."""
        return sorted(cls._strategies)


def resolve(
    position: Position | str | tuple[int, int],
    canvas_size: Size | tuple[int, int],
) -> tuple[int, int]:
    """Resolve a template position to absolute canvas coordinates.

    Pixel positions pass through unchanged; named anchors are computed
    from the canvas size, then any anchor offset is added.

    Args:
        position: PixelPosition, AnchorPosition, a bare anchor name or an
            (x, y) tuple
        canvas_size: Size or (width, height) tuple

    Returns:
        Tuple of (x, y)

    Raises:
        InvalidInputError: For an unknown anchor or position type

    Example:
        >>> resolve("center", (1000, 1000))
        (500, 500)
        >>> resolve(AnchorPosition("top-center", offset_y=40), Size(1000, 1000))
        (500, 40)
    """
    if isinstance(canvas_size, Size):
        canvas_width, canvas_height = canvas_size.width, canvas_size.height
    else:
        canvas_width, canvas_height = canvas_size

    if isinstance(position, PixelPosition):
        return (position.x, position.y)

    if isinstance(position, tuple):
        return (int(position[0]), int(position[1]))

    if isinstance(position, str):
        return AnchorStrategyFactory.get_strategy(position).calculate_position(canvas_width, canvas_height)

    if isinstance(position, AnchorPosition):
        x, y = AnchorStrategyFactory.get_strategy(position.anchor).calculate_position(
            canvas_width, canvas_height
        )
        return (x + position.offset_x, y + position.offset_y)

    raise InvalidInputError(f"Unsupported position: {position!r}", field="position")


def to_top_left(center: tuple[int, int], size: Size) -> tuple[int, int]:
    """Convert a box's center point to its top-left corner.

    Half pixels round up, so odd sizes land the same way on every axis.

    Example:
        >>> to_top_left((540, 500), Size(600, 600))
        (240, 200)
    """
    return (
        math.floor(center[0] - size.width / 2 + 0.5),
        math.floor(center[1] - size.height / 2 + 0.5),
    )
