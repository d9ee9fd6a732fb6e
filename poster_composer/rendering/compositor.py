"""Image layer compositing.

This module places image layers (user photos) onto a raster: each layer
is decoded, fitted to its box, clipped to its mask, given a drop shadow
and a border, and composited in array order.
"""

import math
from dataclasses import dataclass, field

from PIL import Image, ImageOps

from poster_composer.io.loader import load_image
from poster_composer.rendering.effects import BorderEffect, ShadowEffect, apply_mask
from poster_composer.rendering.positioning import to_top_left
from poster_composer.templates.models import Border, Mask, NoMask, Shadow, Size
from poster_composer.utils.constants import (
    CONTAIN_PAD_COLOR,
    DEFAULT_LAYER_FIT,
    FIT_CONTAIN,
    FIT_COVER,
    FIT_FILL,
    FIT_MODES,
    LAYER_ANCHOR_CENTER,
    LAYER_ANCHOR_TOP_LEFT,
    LAYER_ANCHORS,
    SHADOW_BLUR_EXTENT,
)
from poster_composer.utils.exceptions import InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageLayer:
    """One image to composite.

    Attributes:
        image: Encoded image bytes or an already decoded image
        position: Canvas point the layer is placed at
        size: Target box size
        mask: Alpha clip shape
        border: Optional stroke along the mask boundary
        shadow: Optional drop shadow drawn behind the layer
        fit: How the source fills the box (cover, contain or fill)
        anchor: Whether position is the box's top-left corner or its center
    """

    image: bytes | Image.Image
    position: tuple[int, int]
    size: Size
    mask: Mask = field(default_factory=NoMask)
    border: Border | None = None
    shadow: Shadow | None = None
    fit: str = DEFAULT_LAYER_FIT
    anchor: str = LAYER_ANCHOR_TOP_LEFT

    def __post_init__(self) -> None:
        if self.fit not in FIT_MODES:
            raise InvalidInputError(f"Invalid fit '{self.fit}', must be one of {FIT_MODES}", field="fit")
        if self.anchor not in LAYER_ANCHORS:
            raise InvalidInputError(
                f"Invalid layer anchor '{self.anchor}', must be one of {LAYER_ANCHORS}",
                field="anchor",
            )

    @property
    def top_left(self) -> tuple[int, int]:
        """Top-left corner of the layer box on the canvas."""
        if self.anchor == LAYER_ANCHOR_CENTER:
            return to_top_left(self.position, self.size)
        return self.position


def fit_image(image: Image.Image, size: tuple[int, int], fit: str) -> Image.Image:
    """Resize an image into a box.

    Args:
        image: Source image
        size: (width, height) of the box
        fit: cover (crop overflow, keep aspect), contain (letterbox with
            transparent padding, keep aspect) or fill (stretch)

    Returns:
        RGBA image of exactly ``size``
    """
    source = image if image.mode == "RGBA" else image.convert("RGBA")

    if fit == FIT_COVER:
        return ImageOps.fit(source, size, method=Image.Resampling.LANCZOS)
    if fit == FIT_CONTAIN:
        return ImageOps.pad(source, size, method=Image.Resampling.LANCZOS, color=CONTAIN_PAD_COLOR)
    if fit == FIT_FILL:
        return source.resize(size, Image.Resampling.LANCZOS)

    raise InvalidInputError(f"Invalid fit '{fit}', must be one of {FIT_MODES}", field="fit")


def _visible_box(
    box: tuple[int, int, int, int],
    canvas_size: tuple[int, int],
) -> tuple[int, int, int, int] | None:
    """Part of a box that lies on the canvas, or None."""
    left = max(box[0], 0)
    top = max(box[1], 0)
    right = min(box[2], canvas_size[0])
    bottom = min(box[3], canvas_size[1])

    if right <= left or bottom <= top:
        return None
    return (left, top, right, bottom)


def _shadow_box(box: tuple[int, int, int, int], shadow: Shadow) -> tuple[int, int, int, int]:
    """Box a drop shadow can reach: the layer box offset and grown by the blur."""
    spread = math.ceil(shadow.blur * SHADOW_BLUR_EXTENT)
    return (
        box[0] + shadow.offset_x - spread,
        box[1] + shadow.offset_y - spread,
        box[2] + shadow.offset_x + spread,
        box[3] + shadow.offset_y + spread,
    )


class Compositor:
    """Composites image layers onto a background.

    Example:
        >>> compositor = Compositor()
        >>> poster = compositor.composite(canvas, [ImageLayer(photo_bytes, (240, 200), Size(600, 600))])
    """

    def composite(self, background: Image.Image, layers: list[ImageLayer]) -> Image.Image:
        """Composite every layer, in order, onto the background.

        Coordinates outside the canvas are clamped: only the visible part
        of a layer is drawn, and a layer whose box and shadow both lie off the
        canvas is skipped. Every layer is decoded first, so undecodable bytes
        raise wherever the layer sits.

        Args:
            background: Base raster (not modified)
            layers: Layers to draw, bottom first

        Returns:
            New RGBA image

        Raises:
            InvalidInputError: If a layer's image bytes cannot be decoded
        """
        result = background if background.mode == "RGBA" else background.convert("RGBA")
        result = result.copy()

        for index, layer in enumerate(layers):
            result = self._composite_layer(result, layer, index)

        logger.debug(f"Composited {len(layers)} image layer(s)")
        return result

    def _composite_layer(self, canvas: Image.Image, layer: ImageLayer, index: int) -> Image.Image:
        size = (layer.size.width, layer.size.height)
        x, y = layer.top_left

        source = layer.image if isinstance(layer.image, Image.Image) else load_image(layer.image)
        fitted = fit_image(source, size, layer.fit)
        masked = apply_mask(fitted, layer.mask)

        layer_box = (x, y, x + size[0], y + size[1])
        visible = _visible_box(layer_box, canvas.size)
        shadow_visible = (
            layer.shadow is not None
            and _visible_box(_shadow_box(layer_box, layer.shadow), canvas.size) is not None
        )

        if visible is None and not shadow_visible:
            logger.warning(f"Image layer {index} at ({x}, {y}) lies outside the canvas, skipping")
            return canvas
        if visible is not None and visible != layer_box:
            logger.warning(f"Image layer {index} at ({x}, {y}) clamped to canvas bounds {visible}")

        if shadow_visible:
            shadow_layer = ShadowEffect(layer.shadow).create_shadow_layer(
                canvas.size,
                masked.getchannel("A"),
                (x, y),
            )
            canvas = Image.alpha_composite(canvas, shadow_layer)

        if visible is None:
            logger.debug(f"Image layer {index} at ({x}, {y}) is off the canvas, only its shadow is drawn")
            return canvas

        if layer.border is not None:
            masked = BorderEffect(layer.border).apply(masked, layer.mask)

        overlay = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        overlay.paste(masked, (x, y))

        logger.debug(f"Image layer {index}: {size[0]}x{size[1]} at ({x}, {y}), mask={type(layer.mask).__name__}")
        return Image.alpha_composite(canvas, overlay)


def composite_image(background: Image.Image, layers: list[ImageLayer]) -> Image.Image:
    """Composite layers onto a background with a default Compositor."""
    return Compositor().composite(background, layers)
