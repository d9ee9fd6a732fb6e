"""Color parsing and conversion utilities.

This module provides a unified interface for parsing color specifications
used by templates (hex codes first and foremost, plus a few CSS-style
forms) into RGBA tuples suitable for Pillow.
"""

import re
from typing import Final

from poster_composer.utils.exceptions import ColorParseError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)

RGBA = tuple[int, int, int, int]

EXPECTED_FORMAT: Final[str] = "#RGB, #RRGGBB, #RRGGBBAA, rgb(r,g,b), rgba(r,g,b,a) or a color name"


class ColorParser:
    """Parses color specifications into RGBA tuples.

    Supported formats:
        - Hex codes: "#F00", "#FF0000", "#FF000080"
        - CSS functions: "rgb(255,0,0)", "rgba(0,0,0,0.5)"
        - Color names: "black", "white", "transparent", ...

    Example:
        >>> ColorParser.parse("#FF0000")
        (255, 0, 0, 255)
        >>> ColorParser.parse("rgba(0, 0, 0, 0.5)")
        (0, 0, 0, 128)
    """

    COLOR_NAMES: Final[dict[str, RGBA]] = {
        "black": (0, 0, 0, 255),
        "white": (255, 255, 255, 255),
        "red": (255, 0, 0, 255),
        "green": (0, 128, 0, 255),
        "blue": (0, 0, 255, 255),
        "yellow": (255, 255, 0, 255),
        "gold": (255, 215, 0, 255),
        "silver": (192, 192, 192, 255),
        "gray": (128, 128, 128, 255),
        "grey": (128, 128, 128, 255),
        "navy": (0, 0, 128, 255),
        "transparent": (0, 0, 0, 0),
    }

    HEX_PATTERN: Final = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$")
    RGB_PATTERN: Final = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$")
    RGBA_PATTERN: Final = re.compile(
        r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*([0-9]*\.?[0-9]+)\s*\)$"
    )

    @classmethod
    def parse(cls, color_spec: str | None) -> RGBA:
        """Parse a color specification into an RGBA tuple.

        Args:
            color_spec: Color specification

        Returns:
            RGBA tuple

        Raises:
            ColorParseError: If the color cannot be parsed
        """
        if not isinstance(color_spec, str) or not color_spec.strip():
            raise ColorParseError(
                "Color must be a non-empty string",
                color_spec=color_spec,
                expected_format=EXPECTED_FORMAT,
            )

        color_str = color_spec.lower().strip()

        result = (
            cls._parse_name(color_str)
            or cls._parse_hex(color_str)
            or cls._parse_rgb(color_str)
            or cls._parse_rgba(color_str)
        )

        if result is None:
            raise ColorParseError(
                "Color not recognized",
                color_spec=color_spec,
                expected_format=EXPECTED_FORMAT,
            )

        return result

    @classmethod
    def _parse_name(cls, color_str: str) -> RGBA | None:
        return cls.COLOR_NAMES.get(color_str)

    @classmethod
    def _parse_hex(cls, color_str: str) -> RGBA | None:
        """Parse #RGB, #RRGGBB or #RRGGBBAA."""
        match = cls.HEX_PATTERN.match(color_str)
        if not match:
            return None

        hex_value = match.group(1)
        if len(hex_value) == 3:
            hex_value = "".join(ch * 2 for ch in hex_value)
        if len(hex_value) == 6:
            hex_value += "ff"

        return (
            int(hex_value[0:2], 16),
            int(hex_value[2:4], 16),
            int(hex_value[4:6], 16),
            int(hex_value[6:8], 16),
        )

    @classmethod
    def _parse_rgb(cls, color_str: str) -> RGBA | None:
        match = cls.RGB_PATTERN.match(color_str)
        if not match:
            return None

        r, g, b = (int(match.group(i)) for i in (1, 2, 3))
        if all(0 <= val <= 255 for val in (r, g, b)):
            return (r, g, b, 255)

        return None

    @classmethod
    def _parse_rgba(cls, color_str: str) -> RGBA | None:
        """Parse rgba(r,g,b,a) where a is an opacity between 0 and 1."""
        match = cls.RGBA_PATTERN.match(color_str)
        if not match:
            return None

        r, g, b = (int(match.group(i)) for i in (1, 2, 3))
        alpha = float(match.group(4))
        if all(0 <= val <= 255 for val in (r, g, b)) and 0.0 <= alpha <= 1.0:
            return (r, g, b, round(alpha * 255))

        return None

    @classmethod
    def is_valid(cls, color_spec: str | None) -> bool:
        """Check whether a color specification parses.

        Example:
            >>> ColorParser.is_valid("#abc")
            True
            >>> ColorParser.is_valid("#abcd")
            False
        """
        try:
            cls.parse(color_spec)
        except ColorParseError:
            return False
        return True

    @classmethod
    def to_hex(cls, color: RGBA) -> str:
        """Convert an RGBA tuple to a hex string.

        The alpha byte is included only when the color is not opaque.

        Example:
            >>> ColorParser.to_hex((255, 0, 0, 255))
            '#FF0000'
        """
        hex_str = f"#{color[0]:02X}{color[1]:02X}{color[2]:02X}"
        if len(color) == 4 and color[3] != 255:
            hex_str += f"{color[3]:02X}"
        return hex_str

    @classmethod
    def with_alpha(cls, color: RGBA, alpha: int) -> RGBA:
        """Replace the alpha channel of a color."""
        return (color[0], color[1], color[2], alpha)
