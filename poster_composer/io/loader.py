"""Decoding of raw image bytes.

Every image entering the engine (user photos, layer sources, encoded
output read back for metadata) goes through these helpers so decode
failures are always reported as InvalidInputError.
"""

import io
from dataclasses import dataclass

from PIL import Image

from poster_composer.utils.exceptions import InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageMetadata:
    """Basic facts about an encoded image.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        format: Lowercase format name (png, jpeg, ...)
        size: Encoded size in bytes
    """

    width: int
    height: int
    format: str
    size: int


def load_image(data: bytes) -> Image.Image:
    """Decode image bytes into a fully loaded Pillow image.

    Args:
        data: Encoded image in any format Pillow can read

    Returns:
        Decoded image

    Raises:
        InvalidInputError: If the bytes are empty or cannot be decoded, or
            the image has a zero dimension
    """
    if not data:
        raise InvalidInputError("Image data is empty", field="image")

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Exception as e:
        raise InvalidInputError(f"Invalid image: {e}", field="image") from e

    if not image.width or not image.height:
        raise InvalidInputError("Image has zero width or height", field="image")

    logger.debug(f"Decoded {image.format} image {image.width}x{image.height} ({image.mode})")
    return image


def get_image_metadata(data: bytes) -> ImageMetadata:
    """Read size and format from encoded bytes without keeping the image.

    Raises:
        InvalidInputError: If the bytes cannot be decoded
    """
    if not data:
        raise InvalidInputError("Image data is empty", field="image")

    try:
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
            image_format = (image.format or "").lower()
    except Exception as e:
        raise InvalidInputError(f"Invalid image: {e}", field="image") from e

    return ImageMetadata(width=width, height=height, format=image_format, size=len(data))
