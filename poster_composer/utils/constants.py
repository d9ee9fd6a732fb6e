"""Constants for poster composition.

This module collects every fixed value the engine relies on: progress
stages, encoding defaults, anchor names, and font locations.
"""

from pathlib import Path
from typing import Final

# Progress stages, in pipeline order (name, percent)
STAGE_LOADING_TEMPLATE: Final[tuple[str, int]] = ("loading-template", 0)
STAGE_CREATING_BACKGROUND: Final[tuple[str, int]] = ("creating-background", 10)
STAGE_PROCESSING_PHOTO: Final[tuple[str, int]] = ("processing-photo", 30)
STAGE_COMPOSITING_PHOTO: Final[tuple[str, int]] = ("compositing-photo", 50)
STAGE_RENDERING_TEXT: Final[tuple[str, int]] = ("rendering-text", 70)
STAGE_ENCODING_OUTPUT: Final[tuple[str, int]] = ("encoding-output", 90)
STAGE_COMPLETE: Final[tuple[str, int]] = ("complete", 100)

COMPOSE_STAGES: Final[tuple[tuple[str, int], ...]] = (
    STAGE_LOADING_TEMPLATE,
    STAGE_CREATING_BACKGROUND,
    STAGE_PROCESSING_PHOTO,
    STAGE_COMPOSITING_PHOTO,
    STAGE_RENDERING_TEXT,
    STAGE_ENCODING_OUTPUT,
    STAGE_COMPLETE,
)

# Output encoding defaults
DEFAULT_FORMAT: Final[str] = "png"
SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("png", "jpeg")
FORMAT_ALIASES: Final[dict[str, str]] = {"jpg": "jpeg"}
DEFAULT_JPEG_QUALITY: Final[int] = 85
MIN_JPEG_QUALITY: Final[int] = 1
MAX_JPEG_QUALITY: Final[int] = 100

# Logging
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")

# Resize / fit modes
FIT_CONTAIN: Final[str] = "contain"
FIT_COVER: Final[str] = "cover"
FIT_FILL: Final[str] = "fill"
FIT_MODES: Final[tuple[str, ...]] = (FIT_CONTAIN, FIT_COVER, FIT_FILL)
DEFAULT_OUTPUT_FIT: Final[str] = FIT_CONTAIN
DEFAULT_LAYER_FIT: Final[str] = FIT_COVER

# Padding color used by "contain" output resizes (transparent black)
CONTAIN_PAD_COLOR: Final[tuple[int, int, int, int]] = (0, 0, 0, 0)

# Gradient directions
GRADIENT_TO_BOTTOM: Final[str] = "to-bottom"
GRADIENT_TO_RIGHT: Final[str] = "to-right"
GRADIENT_TO_BOTTOM_RIGHT: Final[str] = "to-bottom-right"
GRADIENT_RADIAL: Final[str] = "radial"
GRADIENT_DIRECTIONS: Final[tuple[str, ...]] = (
    GRADIENT_TO_BOTTOM,
    GRADIENT_TO_RIGHT,
    GRADIENT_TO_BOTTOM_RIGHT,
    GRADIENT_RADIAL,
)
MIN_STOP_POSITION: Final[float] = 0.0
MAX_STOP_POSITION: Final[float] = 100.0

# Named canvas anchors understood by the position resolver
NAMED_ANCHORS: Final[tuple[str, ...]] = (
    "center",
    "top-center",
    "bottom-center",
    "left-center",
    "right-center",
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
)

# Layer anchors
LAYER_ANCHOR_TOP_LEFT: Final[str] = "top-left"
LAYER_ANCHOR_CENTER: Final[str] = "center"
LAYER_ANCHORS: Final[tuple[str, ...]] = (LAYER_ANCHOR_TOP_LEFT, LAYER_ANCHOR_CENTER)

# Mask rendering: masks are drawn this many times larger, then downsampled
MASK_SUPERSAMPLE: Final[int] = 4
# Gaussian blur reach, in multiples of the blur radius
SHADOW_BLUR_EXTENT: Final[int] = 3

# Text defaults
TEXT_ALIGNMENTS: Final[tuple[str, ...]] = ("left", "center", "right")
TEXT_TRANSFORMS: Final[tuple[str, ...]] = (
    "none",
    "upper",
    "lower",
    "title",
    "capitalize",
    "swapcase",
)
OVERFLOW_VISIBLE: Final[str] = "visible"
OVERFLOW_WRAP: Final[str] = "wrap"
OVERFLOW_SHRINK: Final[str] = "shrink"
OVERFLOW_MODES: Final[tuple[str, ...]] = (OVERFLOW_VISIBLE, OVERFLOW_WRAP, OVERFLOW_SHRINK)
DEFAULT_FONT_SIZE: Final[int] = 48
DEFAULT_TEXT_COLOR: Final[str] = "#FFFFFF"
DEFAULT_LINE_HEIGHT: Final[float] = 1.2
MIN_SHRINK_FONT_SIZE: Final[int] = 8

# Pillow anchors for each alignment (horizontal side + alphabetic baseline)
ALIGN_TO_PIL_ANCHOR: Final[dict[str, str]] = {
    "left": "ls",
    "center": "ms",
    "right": "rs",
}

# Bundled fonts shipped in poster_composer/assets/fonts
BUNDLED_FONTS_DIR: Final[Path] = Path(__file__).resolve().parent.parent / "assets" / "fonts"
BUNDLED_FONTS: Final[dict[str, str]] = {
    "Oswald-Bold": "Oswald-Bold.ttf",
    "Roboto-Regular": "Roboto-Regular.ttf",
    "BebasNeue-Regular": "BebasNeue-Regular.ttf",
}

# Accepted font file extensions for explicit registration
FONT_EXTENSIONS: Final[tuple[str, ...]] = (".ttf", ".otf")

# Name reported for the fallback font
DEFAULT_FONT_NAME: Final[str] = "sans-serif"

# System fonts tried (in order) before Pillow's built-in font
DEFAULT_FONTS: Final[tuple[str, ...]] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",  # Linux
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",  # Linux (Fedora)
    "/System/Library/Fonts/Helvetica.ttc",  # macOS
    "C:\\Windows\\Fonts\\arial.ttf",  # Windows
)
