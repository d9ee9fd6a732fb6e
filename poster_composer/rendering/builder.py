"""Poster image builder using the Builder pattern.

This module implements step-by-step construction of a poster raster from
a template, a decoded photo and the field values. Each step maps to one
stage of the composition pipeline.
"""

from collections.abc import Mapping

from PIL import Image

from poster_composer.rendering.canvas import CanvasOptions, create_canvas
from poster_composer.rendering.compositor import Compositor, ImageLayer
from poster_composer.rendering.positioning import resolve, to_top_left
from poster_composer.rendering.text_renderer import TextLayer, TextRenderer
from poster_composer.resources.fonts import FontRegistry
from poster_composer.templates.models import PosterTemplate
from poster_composer.utils.exceptions import ImageProcessingError, InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


class PosterBuilder:
    """Builder for constructing poster images step by step.

    Example:
        >>> builder = PosterBuilder(template, photo, data, registry)
        >>> image = (builder
        ...     .create_canvas()
        ...     .process_photos()
        ...     .composite_photos()
        ...     .render_text()
        ...     .build())
    """

    def __init__(
        self,
        template: PosterTemplate,
        photo: Image.Image,
        data: Mapping[str, str],
        registry: FontRegistry | None = None,
        compositor: Compositor | None = None,
        text_renderer: TextRenderer | None = None,
    ):
        """Initialize the builder.

        Args:
            template: Template being rendered
            photo: Decoded user photo, placed in every photo slot
            data: Text value per field id
            registry: FontRegistry the text renderer reads
            compositor: Compositor instance
            text_renderer: TextRenderer instance
        """
        self.template = template
        self.photo = photo
        self.data = data
        self.compositor = compositor or Compositor()
        self.text_renderer = text_renderer or TextRenderer(registry)

        # State for building
        self.image: Image.Image | None = None
        self.photo_layers: list[ImageLayer] | None = None

    def create_canvas(self) -> "PosterBuilder":
        """Create the base canvas with the template background.

        Returns:
            Self for method chaining
        """
        self.image = create_canvas(
            CanvasOptions(
                width=self.template.canvas.width,
                height=self.template.canvas.height,
                fill=self.template.background,
            )
        )
        return self

    def process_photos(self) -> "PosterBuilder":
        """Build one image layer per photo slot.

        Slot positions are the center of the slot box; they are converted
        to the box's top-left corner here.

        Returns:
            Self for method chaining

        Raises:
            InvalidInputError: If the template has no photo slot
        """
        if not self.template.photo_slots:
            raise InvalidInputError(
                f"Template '{self.template.id}' has no photo slot",
                field="photos",
            )

        self.photo_layers = []
        for slot in self.template.photo_slots:
            center = resolve(slot.position, self.template.canvas)
            top_left = to_top_left(center, slot.size)
            logger.debug(f"Photo slot '{slot.id}': center={center}, top-left={top_left}")

            self.photo_layers.append(
                ImageLayer(
                    image=self.photo,
                    position=top_left,
                    size=slot.size,
                    mask=slot.mask,
                    border=slot.border,
                    shadow=slot.shadow,
                )
            )

        return self

    def composite_photos(self) -> "PosterBuilder":
        """Composite the photo layers onto the canvas.

        Returns:
            Self for method chaining
        """
        if self.image is None or self.photo_layers is None:
            raise ImageProcessingError("Must call create_canvas() and process_photos() before composite_photos()")

        self.image = self.compositor.composite(self.image, self.photo_layers)
        return self

    def render_text(self) -> "PosterBuilder":
        """Draw every text field with its data value.

        Returns:
            Self for method chaining
        """
        if self.image is None:
            raise ImageProcessingError("Must call create_canvas() before render_text()")

        layers = [
            TextLayer(
                content=self.data[text_field.id],
                position=resolve(text_field.position, self.template.canvas),
                style=text_field.style,
            )
            for text_field in self.template.text_fields
        ]

        self.image = self.text_renderer.add_text(self.image, layers)
        return self

    def build(self) -> Image.Image:
        """Return the final constructed image.

        Raises:
            ImageProcessingError: If image not fully constructed
        """
        if self.image is None:
            raise ImageProcessingError("Image not constructed. Call construction methods first.")

        logger.debug(f"Poster built from template '{self.template.id}'")
        return self.image
