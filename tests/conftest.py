"""
Pytest configuration and fixtures for poster_composer tests.

Provides photo bytes, an isolated font registry, the default template
catalog and small templates that render quickly.
"""

import io
from pathlib import Path

import pytest
from PIL import Image

from poster_composer.resources.fonts import FontRegistry
from poster_composer.templates.catalog import TemplateCatalog, default_catalog
from poster_composer.templates.models import PosterTemplate


def encode(image: Image.Image, image_format: str = "PNG") -> bytes:
    """Encode a Pillow image to bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


def decode(data: bytes) -> Image.Image:
    """Decode bytes into a loaded Pillow image."""
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


@pytest.fixture
def photo_bytes() -> bytes:
    """A 100x100 solid red JPEG."""
    return encode(Image.new("RGB", (100, 100), (255, 0, 0)), "JPEG")


@pytest.fixture
def wide_photo_bytes() -> bytes:
    """A 200x100 PNG, left half blue and right half green."""
    image = Image.new("RGB", (200, 100), (0, 0, 255))
    image.paste((0, 255, 0), (100, 0, 200, 100))
    return encode(image)


@pytest.fixture
def registry(tmp_path: Path) -> FontRegistry:
    """An empty registry whose bundled font folder is an empty temp dir."""
    bundled_dir = tmp_path / "bundled"
    bundled_dir.mkdir()
    return FontRegistry(bundled_fonts_dir=bundled_dir)


@pytest.fixture
def fake_font_file(tmp_path: Path) -> Path:
    """A .ttf file whose bytes are not a real font."""
    font_path = tmp_path / "Fake.ttf"
    font_path.write_bytes(b"not really a font")
    return font_path


@pytest.fixture
def catalog() -> TemplateCatalog:
    return default_catalog()


@pytest.fixture
def valid_data() -> dict[str, str]:
    """Values for every field of the built-in templates."""
    return {
        "athleteName": "Ana Souza",
        "achievement": "Gold Medal",
        "tournamentName": "Regional Open 2024",
        "date": "May 12, 2024",
    }


@pytest.fixture
def small_template() -> PosterTemplate:
    """A 200x200 template with one centered photo slot and one text field."""
    return PosterTemplate.from_dict({
        "id": "small",
        "name": "Small",
        "canvas": {"width": 200, "height": 200},
        "background": {"type": "solid", "color": "#102030"},
        "photos": [
            {
                "id": "photo",
                "position": "center",
                "size": {"width": 100, "height": 100},
            }
        ],
        "text": [
            {
                "id": "title",
                "position": {"x": 100, "y": 190},
                "style": {"fontFamily": "Missing", "fontSize": 16, "color": "#FFFFFF"},
            }
        ],
    })


@pytest.fixture
def small_catalog(small_template: PosterTemplate) -> TemplateCatalog:
    return TemplateCatalog([small_template])
