"""Poster composition engine.

Renders a finished poster from a declarative template, a user photo and a
map of text values.

Example:
    >>> from poster_composer import ComposeRequest, compose_poster
    >>> result = compose_poster(ComposeRequest("classic", photo_bytes, {
    ...     "athleteName": "Ana Souza",
    ...     "achievement": "Gold Medal",
    ...     "tournamentName": "Regional Open",
    ...     "date": "May 2024",
    ... }))
    >>> result.metadata.format
    'png'
"""

from .config.models import EngineConfig, OutputOptions, ResizeOptions
from .io.encoder import ComposeResult, ImageEncoder
from .io.loader import ImageMetadata
from .rendering.canvas import CanvasOptions, create_canvas
from .rendering.compositor import ImageLayer, composite_image
from .rendering.generator import ComposeRequest, PosterComposer, compose_poster
from .rendering.positioning import resolve
from .rendering.progress import ProgressObserver
from .rendering.text_renderer import TextLayer, add_text
from .resources.fonts import (
    FontRegistry,
    clear_fonts,
    get_default_font,
    get_font,
    init_bundled_fonts,
    is_font_registered,
    list_bundled_fonts,
    list_fonts,
    register_font,
)
from .templates.catalog import TemplateCatalog, default_catalog
from .templates.models import PosterTemplate
from .utils.exceptions import (
    ColorParseError,
    FontLoadError,
    ImageProcessingError,
    InvalidInputError,
    PosterComposerError,
    TemplateNotFoundError,
)
from .utils.logger import disable_logging, enable_logging, set_level, setup_logging, setup_logging_from_config

__version__ = "1.0.0"

__all__ = [
    'CanvasOptions',
    'ColorParseError',
    'ComposeRequest',
    'ComposeResult',
    'EngineConfig',
    'FontLoadError',
    'FontRegistry',
    'ImageEncoder',
    'ImageLayer',
    'ImageMetadata',
    'ImageProcessingError',
    'InvalidInputError',
    'OutputOptions',
    'PosterComposer',
    'PosterComposerError',
    'PosterTemplate',
    'ProgressObserver',
    'ResizeOptions',
    'TemplateCatalog',
    'TemplateNotFoundError',
    'TextLayer',
    'add_text',
    'clear_fonts',
    'compose_poster',
    'composite_image',
    'create_canvas',
    'default_catalog',
    'disable_logging',
    'enable_logging',
    'get_default_font',
    'get_font',
    'init_bundled_fonts',
    'is_font_registered',
    'list_bundled_fonts',
    'list_fonts',
    'register_font',
    'resolve',
    'set_level',
    'setup_logging',
    'setup_logging_from_config',
]
