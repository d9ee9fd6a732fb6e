"""Text rendering utilities.

This module draws text layers onto a poster: case transformation, letter
spacing, glyph stroke, blurred shadow, multi-line content and the
overflow policies (visible, wrap, shrink).

Every layer's position is its text anchor. The horizontal side comes from
the style's ``align`` and the vertical coordinate is the alphabetic
baseline of the first line.
"""

from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from poster_composer.rendering.effects import ShadowEffect
from poster_composer.resources.colors import ColorParser
from poster_composer.resources.fonts import FontLoader, FontRegistry
from poster_composer.templates.models import TextStyle
from poster_composer.utils.constants import (
    ALIGN_TO_PIL_ANCHOR,
    MIN_SHRINK_FONT_SIZE,
    OVERFLOW_SHRINK,
    OVERFLOW_WRAP,
)
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TextLayer:
    """One string to draw.

    Attributes:
        content: Text (may contain \\n for explicit line breaks)
        position: Anchor point on the canvas
        style: Font, color, alignment and effects
    """

    content: str
    position: tuple[int, int]
    style: TextStyle


class TextTransformer:
    """Transforms text case.

    Example:
        >>> transformer = TextTransformer()
        >>> transformer.transform("hello", "upper")
        'HELLO'
    """

    @staticmethod
    def transform(text: str, transform_type: str) -> str:
        """Transform text based on the specified type.

        Args:
            text: Text to transform
            transform_type: Transformation (none, upper, lower, title, capitalize, swapcase)

        Returns:
            Transformed text

        Example:
            >>> TextTransformer.transform("hello world", "title")
            'Hello World'
        """
        if transform_type == "upper":
            return text.upper()
        elif transform_type == "lower":
            return text.lower()
        elif transform_type == "title":
            return text.title()
        elif transform_type == "capitalize":
            return text.capitalize()
        elif transform_type == "swapcase":
            return text.swapcase()
        else:  # 'none'
            return text


class TextRenderer:
    """Renders text layers with fonts from a registry.

    This class handles all aspects of text rendering including:
    - Font lookup with fallback
    - Letter spacing and text transformations
    - Stroke and shadow effects
    - Wrapping and shrinking to a maximum width

    Attributes:
        font_loader: FontLoader used to turn family names into fonts

    Example:
        >>> renderer = TextRenderer(registry)
        >>> poster = renderer.add_text(poster, [TextLayer("JANE DOE", (540, 1020), style)])
    """

    def __init__(self, registry: FontRegistry | None = None):
        """Initialize text renderer.

        Args:
            registry: FontRegistry to look fonts up in (process-wide one if None)
        """
        self.font_loader = FontLoader(registry)

    def add_text(self, image: Image.Image, layers: list[TextLayer]) -> Image.Image:
        """Draw every text layer, in order, onto the image.

        Args:
            image: Base raster (not modified)
            layers: Text layers to draw

        Returns:
            New RGBA image
        """
        result = image if image.mode == "RGBA" else image.convert("RGBA")
        result = result.copy()

        for layer in layers:
            result = self._render_layer(result, layer)

        logger.debug(f"Rendered {len(layers)} text layer(s)")
        return result

    def layout(self, layer: TextLayer) -> tuple[ImageFont.FreeTypeFont, list[str]]:
        """Resolve the font and the lines a layer is drawn with.

        Applies the text transform, splits explicit newlines and then the
        overflow policy: ``wrap`` word-wraps at ``max_width`` and ``shrink``
        lowers the font size until the widest line fits (never below the
        minimum size). Without ``max_width`` both behave as ``visible``.

        Returns:
            Tuple of (font, lines)
        """
        style = layer.style
        text = TextTransformer.transform(layer.content, style.text_transform)
        font = self.font_loader.load_font(style.font_family, style.font_size)

        if style.max_width is None:
            return font, text.split("\n")

        if style.overflow == OVERFLOW_WRAP:
            return font, self.wrap_text(text, font, style.max_width, style.letter_spacing)

        if style.overflow == OVERFLOW_SHRINK:
            return self._shrink_to_fit(text.split("\n"), font, style)

        return font, text.split("\n")

    def _shrink_to_fit(
        self,
        lines: list[str],
        font: ImageFont.FreeTypeFont,
        style: TextStyle,
    ) -> tuple[ImageFont.FreeTypeFont, list[str]]:
        size = style.font_size
        widest = self._widest(lines, font, style.letter_spacing)

        while widest > style.max_width and size > MIN_SHRINK_FONT_SIZE:
            # Jump close to the fitting size, then step down one pixel at a time
            estimate = int(size * style.max_width / widest)
            size = max(MIN_SHRINK_FONT_SIZE, min(size - 1, estimate))
            font = self.font_loader.load_font(style.font_family, size)
            widest = self._widest(lines, font, style.letter_spacing)

        if size != style.font_size:
            logger.debug(f"Shrunk '{style.font_family}' from {style.font_size}px to {size}px")
        if widest > style.max_width:
            logger.warning(
                f"Text still exceeds max width {style.max_width}px at minimum size {MIN_SHRINK_FONT_SIZE}px"
            )
        return font, lines

    def _widest(self, lines: list[str], font: ImageFont.FreeTypeFont, letter_spacing: int) -> float:
        return max(self.measure_line(line, font, letter_spacing) for line in lines)

    def wrap_text(
        self,
        text: str,
        font: ImageFont.FreeTypeFont,
        max_width: int,
        letter_spacing: int = 0,
    ) -> list[str]:
        """Wrap text to fit within max width.

        Explicit newline characters are preserved before word wrapping is
        applied. A single word wider than ``max_width`` is kept on its own
        line rather than broken.

        Args:
            text: Text to wrap (may contain \\n for explicit line breaks)
            font: Font to measure with
            max_width: Maximum width in pixels
            letter_spacing: Character spacing

        Returns:
            List of text lines

        Example:
            >>> renderer.wrap_text("Regional Championship", font, 300)
            ['Regional', 'Championship']
        """
        all_lines = []
        for line in text.split("\n"):
            words = line.split()
            if not words:
                all_lines.append("")
                continue

            current_line: list[str] = []
            for word in words:
                test_line = " ".join(current_line + [word])
                if self.measure_line(test_line, font, letter_spacing) <= max_width:
                    current_line.append(word)
                elif current_line:
                    all_lines.append(" ".join(current_line))
                    current_line = [word]
                else:
                    # Single word too long, force it anyway
                    all_lines.append(word)

            if current_line:
                all_lines.append(" ".join(current_line))

        return all_lines if all_lines else [""]

    @staticmethod
    def measure_line(text: str, font: ImageFont.FreeTypeFont, letter_spacing: int = 0) -> float:
        """Measure the advance width of one line in pixels.

        Letter spacing is added between characters, not after the last one.
        """
        if not text:
            return 0.0
        if letter_spacing == 0 or len(text) == 1:
            return font.getlength(text)
        return sum(font.getlength(char) for char in text) + letter_spacing * (len(text) - 1)

    def _render_layer(self, image: Image.Image, layer: TextLayer) -> Image.Image:
        style = layer.style
        font, lines = self.layout(layer)
        fill = ColorParser.parse(style.color)

        stroke_width = 0
        stroke_fill = None
        if style.stroke is not None and style.stroke.width > 0:
            stroke_width = style.stroke.width
            stroke_fill = ColorParser.parse(style.stroke.color)

        text_img = Image.new("RGBA", image.size, ColorParser.with_alpha(fill, 0))
        draw = ImageDraw.Draw(text_img)

        x, y = layer.position
        font_size = getattr(font, "size", style.font_size)
        line_advance = round(font_size * style.line_height)
        for line in lines:
            if line:
                self.draw_line(draw, (x, y), line, font, fill, style, stroke_width, stroke_fill)
            y += line_advance

        if style.shadow is not None:
            shadow_layer = ShadowEffect(style.shadow).create_shadow_layer(
                image.size,
                text_img.getchannel("A"),
                (0, 0),
            )
            image = Image.alpha_composite(image, shadow_layer)

        logger.debug(
            f"Text drawn at {layer.position}: {len(lines)} line(s), "
            f"font={style.font_family} {font_size}px, align={style.align}"
        )
        return Image.alpha_composite(image, text_img)

    def draw_line(
        self,
        draw: ImageDraw.ImageDraw,
        position: tuple[int, int],
        text: str,
        font: ImageFont.FreeTypeFont,
        fill: tuple[int, int, int, int],
        style: TextStyle,
        stroke_width: int = 0,
        stroke_fill: tuple[int, int, int, int] | None = None,
    ) -> None:
        """Draw one line anchored at its baseline.

        Args:
            draw: ImageDraw object
            position: (x, y) anchor; y is the alphabetic baseline
            text: Line to draw
            font: Font to use
            fill: Text color
            style: Style supplying align and letter spacing
            stroke_width: Outline width in pixels (0 for none)
            stroke_fill: Outline color
        """
        x, y = position

        if style.letter_spacing == 0 or len(text) == 1:
            draw.text(
                (x, y),
                text,
                font=font,
                fill=fill,
                anchor=ALIGN_TO_PIL_ANCHOR[style.align],
                stroke_width=stroke_width,
                stroke_fill=stroke_fill,
            )
            return

        # Spaced text: place each character by hand from the line's left edge
        width = self.measure_line(text, font, style.letter_spacing)
        if style.align == "center":
            cursor = x - width / 2
        elif style.align == "right":
            cursor = x - width
        else:
            cursor = x

        for char in text:
            draw.text(
                (cursor, y),
                char,
                font=font,
                fill=fill,
                anchor="ls",
                stroke_width=stroke_width,
                stroke_fill=stroke_fill,
            )
            cursor += font.getlength(char) + style.letter_spacing


def add_text(
    image: Image.Image,
    layers: list[TextLayer],
    registry: FontRegistry | None = None,
) -> Image.Image:
    """Draw text layers with a TextRenderer over the given registry."""
    return TextRenderer(registry).add_text(image, layers)
