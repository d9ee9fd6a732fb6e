"""Encoding of finished posters.

This module resizes the composed raster if requested and encodes it as
PNG or JPEG. The returned metadata is read back from the encoded bytes,
so it always describes what the caller actually receives.
"""

import io
from dataclasses import dataclass

from PIL import Image, ImageOps

from poster_composer.config.models import OutputOptions, ResizeOptions
from poster_composer.io.loader import ImageMetadata, get_image_metadata
from poster_composer.utils.constants import CONTAIN_PAD_COLOR, FIT_CONTAIN, FIT_COVER
from poster_composer.utils.exceptions import ImageProcessingError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComposeResult:
    """Encoded poster and its metadata.

    Attributes:
        data: Encoded image bytes
        metadata: Width, height, format and byte size of ``data``
    """

    data: bytes
    metadata: ImageMetadata

    @property
    def bytes(self) -> bytes:
        """Alias of ``data``."""
        return self.data


class ImageEncoder:
    """Resizes and encodes images per OutputOptions.

    Example:
        >>> encoder = ImageEncoder(OutputOptions(format="jpeg", quality=90))
        >>> result = encoder.encode(poster)
        >>> result.metadata.format
        'jpeg'
    """

    def __init__(self, options: OutputOptions | None = None):
        """Initialize image encoder.

        Args:
            options: Output options (PNG, no resize if None)
        """
        self.options = options or OutputOptions()

    def encode(self, image: Image.Image) -> ComposeResult:
        """Resize (optionally) and encode an image.

        Args:
            image: Composed poster

        Returns:
            ComposeResult with the encoded bytes and their metadata

        Raises:
            ImageProcessingError: If encoding fails
        """
        if self.options.resize is not None:
            image = self.resize(image, self.options.resize)

        buffer = io.BytesIO()
        try:
            if self.options.format == "jpeg":
                # JPEG has no alpha channel
                image.convert("RGB").save(
                    buffer,
                    format="JPEG",
                    quality=self.options.quality,
                    optimize=True,
                )
            else:
                image.save(buffer, format="PNG")
        except (OSError, ValueError) as e:
            raise ImageProcessingError(
                f"Failed to encode image: {e}",
                stage="encoding-output",
                details=f"format={self.options.format}",
            ) from e

        data = buffer.getvalue()
        metadata = get_image_metadata(data)
        logger.info(
            f"Encoded {metadata.format} {metadata.width}x{metadata.height} ({metadata.size} bytes)"
        )
        return ComposeResult(data=data, metadata=metadata)

    @staticmethod
    def target_size(source: tuple[int, int], resize: ResizeOptions) -> tuple[int, int]:
        """Compute the output size for a resize.

        With one dimension given, the other follows the source aspect ratio.

        Example:
            >>> ImageEncoder.target_size((1080, 1350), ResizeOptions(width=540))
            (540, 675)
        """
        width, height = source
        if resize.width is not None and resize.height is not None:
            return (resize.width, resize.height)
        if resize.width is not None:
            return (resize.width, max(1, round(height * resize.width / width)))
        return (max(1, round(width * resize.height / height)), resize.height)

    @classmethod
    def resize(cls, image: Image.Image, resize: ResizeOptions) -> Image.Image:
        """Resize an image according to the fit mode.

        ``contain`` keeps the aspect ratio and pads to the exact box with
        transparency, ``cover`` keeps the aspect ratio and crops, ``fill``
        stretches.
        """
        size = cls.target_size(image.size, resize)
        logger.debug(f"Resizing {image.width}x{image.height} to {size[0]}x{size[1]} ({resize.fit})")

        if size == image.size:
            return image
        if resize.fit == FIT_CONTAIN:
            source = image if image.mode == "RGBA" else image.convert("RGBA")
            return ImageOps.pad(source, size, method=Image.Resampling.LANCZOS, color=CONTAIN_PAD_COLOR)
        if resize.fit == FIT_COVER:
            return ImageOps.fit(image, size, method=Image.Resampling.LANCZOS)
        return image.resize(size, Image.Resampling.LANCZOS)
