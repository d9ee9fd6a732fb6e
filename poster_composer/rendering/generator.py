"""High-level poster composition orchestrator.

This module provides the main API for composing posters: it validates a
request, drives the builder through every stage while reporting
progress, and encodes the result.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from poster_composer.config.models import OutputOptions
from poster_composer.io.encoder import ComposeResult, ImageEncoder
from poster_composer.io.loader import load_image
from poster_composer.rendering.builder import PosterBuilder
from poster_composer.rendering.progress import ProgressCallback, ProgressObserver, ProgressReporter
from poster_composer.resources.fonts import FontRegistry, get_registry
from poster_composer.templates.catalog import TemplateCatalog, default_catalog
from poster_composer.utils.constants import (
    STAGE_COMPLETE,
    STAGE_COMPOSITING_PHOTO,
    STAGE_CREATING_BACKGROUND,
    STAGE_ENCODING_OUTPUT,
    STAGE_LOADING_TEMPLATE,
    STAGE_PROCESSING_PHOTO,
    STAGE_RENDERING_TEXT,
)
from poster_composer.utils.exceptions import ImageProcessingError, InvalidInputError, PosterComposerError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComposeRequest:
    """Everything needed to compose one poster.

    Attributes:
        template_id: Catalog id of the template
        photo_bytes: Encoded user photo
        data: Text value per template field id
        output: Encoding options (PNG, no resize if None)
    """

    template_id: str
    photo_bytes: bytes
    data: Mapping[str, str] = field(default_factory=dict)
    output: OutputOptions | None = None


class PosterComposer:
    """High-level composer for poster images.

    Compositions share no state apart from read-only lookups in the
    catalog and font registry, so one instance can serve concurrent calls.

    Example:
        >>> composer = PosterComposer()
        >>> result = composer.compose(ComposeRequest("classic", photo_bytes, data))
        >>> result.metadata.width, result.metadata.height
        (1080, 1350)
    """

    def __init__(
        self,
        catalog: TemplateCatalog | None = None,
        registry: FontRegistry | None = None,
    ):
        """Initialize the composer.

        Args:
            catalog: Template catalog (built-in templates if None)
            registry: Font registry (process-wide one if None)
        """
        self.catalog = catalog or default_catalog()
        self.registry = registry or get_registry()

    def compose(
        self,
        request: ComposeRequest,
        on_progress: ProgressCallback | ProgressObserver | None = None,
    ) -> ComposeResult:
        """Compose a poster.

        Stages are reported in order: loading-template (0),
        creating-background (10), processing-photo (30),
        compositing-photo (50), rendering-text (70), encoding-output (90)
        and complete (100).

        Args:
            request: Template id, photo bytes, field values and output options
            on_progress: Optional observer receiving (stage, percent)

        Returns:
            ComposeResult with the encoded poster and its metadata

        Raises:
            TemplateNotFoundError: If the template id is unknown
            InvalidInputError: If data fields are missing, the photo cannot
                be decoded or the template has no photo slot
            ImageProcessingError: For any other failure, with the original
                exception chained
        """
        progress = ProgressReporter(on_progress)

        try:
            return self._compose(request, progress)
        except PosterComposerError as e:
            logger.error(f"Composition with template '{request.template_id}' failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Composition with template '{request.template_id}' failed unexpectedly: {e}")
            raise ImageProcessingError(f"Failed to compose poster: {e}") from e

    def _compose(self, request: ComposeRequest, progress: ProgressReporter) -> ComposeResult:
        progress.report(STAGE_LOADING_TEMPLATE)
        template = self.catalog.lookup(request.template_id)
        self.catalog.validate(template, request.data)
        photo = load_image(request.photo_bytes)
        if not template.photo_slots:
            raise InvalidInputError(f"Template '{template.id}' has no photo slot", field="photos")

        logger.info(
            f"Composing poster with template '{template.id}' "
            f"({template.canvas.width}x{template.canvas.height}), photo {photo.width}x{photo.height}"
        )

        builder = PosterBuilder(template, photo, request.data, self.registry)

        progress.report(STAGE_CREATING_BACKGROUND)
        builder.create_canvas()

        progress.report(STAGE_PROCESSING_PHOTO)
        builder.process_photos()

        progress.report(STAGE_COMPOSITING_PHOTO)
        builder.composite_photos()

        progress.report(STAGE_RENDERING_TEXT)
        image = builder.render_text().build()

        progress.report(STAGE_ENCODING_OUTPUT)
        result = ImageEncoder(request.output).encode(image)

        progress.report(STAGE_COMPLETE)
        logger.info(f"Poster composed with template '{template.id}'")
        return result


def compose_poster(
    request: ComposeRequest,
    on_progress: ProgressCallback | ProgressObserver | None = None,
    catalog: TemplateCatalog | None = None,
    registry: FontRegistry | None = None,
) -> ComposeResult:
    """Compose a poster with a PosterComposer over the given collaborators.

    Example:
        >>> result = compose_poster(
        ...     ComposeRequest("classic", photo_bytes, data),
        ...     on_progress=lambda stage, percent: print(stage, percent),
        ... )
    """
    return PosterComposer(catalog, registry).compose(request, on_progress)
