"""Image decoding and encoding."""

from .encoder import ComposeResult, ImageEncoder
from .loader import ImageMetadata, get_image_metadata, load_image

__all__ = ['ComposeResult', 'ImageEncoder', 'ImageMetadata', 'get_image_metadata', 'load_image']
