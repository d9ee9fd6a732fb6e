"""Layer effects: shape masks, drop shadows and borders.

Masks are rendered as 8-bit alpha images. Shapes are drawn at a multiple
of the target size and downsampled, which gives anti-aliased edges that
Pillow's ImageDraw does not produce on its own.
"""

import math

from PIL import Image, ImageChops, ImageDraw, ImageFilter

from poster_composer.resources.colors import ColorParser
from poster_composer.templates.models import Border, CircleMask, Mask, NoMask, RoundedRectMask, Shadow
from poster_composer.utils.constants import MASK_SUPERSAMPLE, SHADOW_BLUR_EXTENT
from poster_composer.utils.exceptions import InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


class MaskRenderer:
    """Renders mask shapes as alpha images.

    Example:
        >>> alpha = MaskRenderer.render(CircleMask(), (400, 400))
        >>> alpha.mode
        'L'
    """

    @staticmethod
    def _shape_box(mask: Mask, size: tuple[int, int], scale: int) -> list[int]:
        """Bounding box of the shape at the given scale."""
        width, height = size

        if isinstance(mask, CircleMask):
            diameter = min(width, height)
            left = (width - diameter) / 2
            top = (height - diameter) / 2
            return [
                round(left * scale),
                round(top * scale),
                round((left + diameter) * scale) - 1,
                round((top + diameter) * scale) - 1,
            ]

        return [0, 0, width * scale - 1, height * scale - 1]

    @classmethod
    def _draw_shape(
        cls,
        mask: Mask,
        size: tuple[int, int],
        stroke_width: int | None = None,
    ) -> Image.Image:
        """Draw a filled shape, or only its outline when stroke_width is given."""
        scale = MASK_SUPERSAMPLE
        width, height = size
        canvas = Image.new("L", (width * scale, height * scale), 0)
        draw = ImageDraw.Draw(canvas)
        box = cls._shape_box(mask, size, scale)

        if stroke_width is None:
            shape_args = {"fill": 255}
        else:
            shape_args = {"outline": 255, "width": max(1, stroke_width * scale)}

        if isinstance(mask, CircleMask):
            draw.ellipse(box, **shape_args)
        elif isinstance(mask, RoundedRectMask):
            radius = min(mask.radius, width // 2, height // 2) * scale
            draw.rounded_rectangle(box, radius=radius, **shape_args)
        elif isinstance(mask, NoMask):
            draw.rectangle(box, **shape_args)
        else:
            raise InvalidInputError(f"Unsupported mask: {mask!r}", field="mask")

        return canvas.resize(size, Image.Resampling.LANCZOS)

    @classmethod
    def render(cls, mask: Mask, size: tuple[int, int]) -> Image.Image:
        """Render the filled mask shape for a layer of the given size.

        Returns:
            "L" image, 255 inside the shape and 0 outside
        """
        if isinstance(mask, NoMask):
            return Image.new("L", size, 255)
        return cls._draw_shape(mask, size)

    @classmethod
    def render_outline(cls, mask: Mask, size: tuple[int, int], width: int) -> Image.Image:
        """Render a stroke of the given width along the inside of the mask boundary."""
        return cls._draw_shape(mask, size, stroke_width=width)


def apply_mask(layer: Image.Image, mask: Mask) -> Image.Image:
    """Clip an RGBA layer to a mask shape.

    The layer's own alpha is kept and multiplied by the shape alpha.
    """
    if isinstance(mask, NoMask):
        return layer

    shape_alpha = MaskRenderer.render(mask, layer.size)
    clipped = layer.copy()
    clipped.putalpha(ImageChops.multiply(layer.getchannel("A"), shape_alpha))
    return clipped


class ShadowEffect:
    """Creates blurred drop shadows from a silhouette.

    The silhouette is an alpha image (a masked photo's alpha or rendered
    text). The shadow is colored, offset and blurred on a canvas-sized
    transparent layer, ready to be composited behind the source.

    Attributes:
        shadow: Shadow configuration

    Example:
        >>> effect = ShadowEffect(Shadow(blur=20, offset_y=10, color="#00000080"))
        >>> layer = effect.create_shadow_layer((1080, 1350), alpha, (240, 200))
    """

    def __init__(self, shadow: Shadow):
        """Initialize shadow effect.

        Args:
            shadow: Shadow configuration
        """
        self.shadow = shadow

    def create_shadow_layer(
        self,
        canvas_size: tuple[int, int],
        silhouette: Image.Image,
        position: tuple[int, int],
    ) -> Image.Image:
        """Create a canvas-sized shadow layer.

        Args:
            canvas_size: (width, height) of canvas
            silhouette: "L" image giving the shape that casts the shadow
            position: Top-left canvas position of the silhouette

        Returns:
            RGBA image with the shadow
        """
        red, green, blue, alpha = ColorParser.parse(self.shadow.color)

        shadow_alpha = silhouette.point(lambda value: value * alpha // 255)
        shadow_shape = Image.new("RGBA", silhouette.size, (red, green, blue, 0))
        shadow_shape.putalpha(shadow_alpha)

        # Work on a canvas padded by the blur reach so silhouette pixels just
        # off the edge still bleed back in
        margin = math.ceil(self.shadow.blur * SHADOW_BLUR_EXTENT)
        padded_size = (canvas_size[0] + 2 * margin, canvas_size[1] + 2 * margin)
        shadow_img = Image.new("RGBA", padded_size, (red, green, blue, 0))
        # Plain paste: the destination is fully transparent, so copying the
        # shape keeps its alpha exact
        shadow_img.paste(
            shadow_shape,
            (position[0] + self.shadow.offset_x + margin, position[1] + self.shadow.offset_y + margin),
        )

        if self.shadow.blur > 0:
            shadow_img = shadow_img.filter(ImageFilter.GaussianBlur(radius=self.shadow.blur))
        if margin:
            shadow_img = shadow_img.crop((margin, margin, margin + canvas_size[0], margin + canvas_size[1]))

        logger.debug(
            f"Shadow created: blur={self.shadow.blur}, "
            f"offset=({self.shadow.offset_x}, {self.shadow.offset_y})"
        )
        return shadow_img


class BorderEffect:
    """Strokes a border along a layer's mask boundary.

    Attributes:
        border: Border configuration
    """

    def __init__(self, border: Border):
        self.border = border

    def apply(self, layer: Image.Image, mask: Mask) -> Image.Image:
        """Draw the border onto a (masked) RGBA layer.

        Returns:
            New RGBA image with the border drawn inside the shape edge
        """
        if self.border.width <= 0:
            return layer

        color = ColorParser.parse(self.border.color)
        stroke_alpha = MaskRenderer.render_outline(mask, layer.size, self.border.width)
        if color[3] != 255:
            stroke_alpha = stroke_alpha.point(lambda value: value * color[3] // 255)

        stroke = Image.new("RGBA", layer.size, ColorParser.with_alpha(color, 0))
        stroke.putalpha(stroke_alpha)

        logger.debug(f"Border drawn: width={self.border.width}, color={self.border.color}")
        return Image.alpha_composite(layer, stroke)
