"""Font registry and font loading with fallback handling.

The registry is a process-wide store of raw font bytes keyed by family
name. It is populated once at startup (bundled fonts plus any explicit
registrations) and read by the text renderer for every composition.
Font files are read from disk only at registration time.
"""

import io
import threading
from dataclasses import dataclass
from pathlib import Path

from PIL import ImageFont

from poster_composer.utils.constants import (
    BUNDLED_FONTS,
    BUNDLED_FONTS_DIR,
    DEFAULT_FONT_NAME,
    DEFAULT_FONTS,
    FONT_EXTENSIONS,
)
from poster_composer.utils.exceptions import FontLoadError, InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegisteredFont:
    """A font registered under a family name.

    Attributes:
        name: Family name used in text styles
        path: File the bytes were read from
        data: Raw font file contents
    """

    name: str
    path: str
    data: bytes


class FontRegistry:
    """In-memory store of font data keyed by family name.

    Reads are plain dictionary lookups and are always safe. Writes are
    serialised by a lock but are meant to happen during a single startup
    phase; re-registering a name overwrites the previous entry.

    Example:
        >>> registry = FontRegistry()
        >>> registry.register_font("Brand", "/path/to/Brand.ttf")
        >>> registry.is_font_registered("Brand")
        True
    """

    def __init__(self, bundled_fonts_dir: Path | str | None = None):
        """Initialize an empty registry.

        Args:
            bundled_fonts_dir: Directory holding the bundled font files
                (defaults to the package's assets/fonts directory)
        """
        self.bundled_fonts_dir = Path(bundled_fonts_dir) if bundled_fonts_dir else BUNDLED_FONTS_DIR
        self._fonts: dict[str, RegisteredFont] = {}
        self._write_lock = threading.Lock()

    def register_font(self, name: str, path: str | Path) -> None:
        """Register a font file under a family name.

        Args:
            name: Family name to reference in TextStyle.font_family
            path: Path to a .ttf or .otf file

        Raises:
            InvalidInputError: If the name is empty or the path is not a
                .ttf/.otf file
            FontLoadError: If the file is missing or cannot be read
        """
        if not name or not isinstance(name, str):
            raise InvalidInputError("Font name must be a non-empty string", field="name")

        if not path or not str(path).strip():
            raise InvalidInputError("Font path must be a non-empty string", field="path")

        font_path = Path(path)
        if font_path.suffix.lower() not in FONT_EXTENSIONS:
            raise InvalidInputError("Font file must be .ttf or .otf format", field="path")

        if not font_path.is_file():
            raise FontLoadError(name, f"File not found: {font_path}")

        try:
            data = font_path.read_bytes()
        except OSError as e:
            raise FontLoadError(name, str(e)) from e

        with self._write_lock:
            if name in self._fonts:
                logger.debug(f"Overwriting registered font '{name}'")
            self._fonts[name] = RegisteredFont(name=name, path=str(font_path), data=data)

        logger.debug(f"Font registered: {name} ({font_path})")

    def get_font(self, name: str) -> bytes | None:
        """Get the raw data of a registered font, or None."""
        font = self._fonts.get(name)
        return font.data if font else None

    def is_font_registered(self, name: str) -> bool:
        """Check if a font family is registered."""
        return name in self._fonts

    def list_fonts(self) -> list[str]:
        """List registered family names in registration order."""
        return list(self._fonts)

    def init_bundled_fonts(self) -> list[str]:
        """Register every bundled font that can be loaded.

        A missing or unreadable bundled font is logged and skipped, so the
        process still starts with whatever fonts are available.

        Returns:
            Names of the bundled fonts that were registered
        """
        loaded = []

        for name, filename in BUNDLED_FONTS.items():
            font_path = self.bundled_fonts_dir / filename

            if not font_path.exists():
                logger.warning(f"Bundled font file not found: {name} ({font_path})")
                continue

            try:
                self.register_font(name, font_path)
            except (FontLoadError, InvalidInputError) as e:
                logger.warning(f"Failed to load bundled font {name}: {e}")
                continue

            loaded.append(name)

        logger.info(f"Loaded {len(loaded)} of {len(BUNDLED_FONTS)} bundled fonts")
        if len(loaded) < len(BUNDLED_FONTS):
            logger.warning(
                "Built-in templates will use the fallback font for missing families; "
                f"see {self.bundled_fonts_dir / 'README.md'} for where to get them"
            )
        return loaded

    def clear_fonts(self) -> None:
        """Remove every registered font. Intended for tests."""
        with self._write_lock:
            self._fonts.clear()
        logger.debug("Font registry cleared")


class FontLoader:
    """Turns a family name into a Pillow font, with fallback.

    Lookup order: the registry's bytes for the family, then the first
    system default font that exists, then Pillow's built-in scalable font.
    Falling back is never an error; it is logged as a warning.

    Attributes:
        registry: FontRegistry the families are looked up in
    """

    def __init__(self, registry: FontRegistry | None = None):
        """Initialize the font loader.

        Args:
            registry: FontRegistry instance (uses the process-wide one if None)
        """
        self.registry = registry or get_registry()

    def load_font(self, family: str | None, size: int) -> ImageFont.FreeTypeFont:
        """Load a font family at a pixel size.

        Args:
            family: Registered family name
            size: Font size in pixels

        Returns:
            Loaded font object
        """
        data = self.registry.get_font(family) if family else None

        if data is None:
            logger.warning(f"Font '{family}' is not registered, using {DEFAULT_FONT_NAME}")
            return self.load_default_font(size)

        try:
            return ImageFont.truetype(io.BytesIO(data), size=size)
        except OSError as e:
            logger.warning(f"Cannot read registered font '{family}' ({e}), using {DEFAULT_FONT_NAME}")
            return self.load_default_font(size)

    def load_default_font(self, size: int) -> ImageFont.FreeTypeFont:
        """Load the fallback font at a pixel size."""
        for font_str in DEFAULT_FONTS:
            font_path = Path(font_str)
            if not font_path.exists():
                continue
            try:
                return ImageFont.truetype(str(font_path), size=size)
            except OSError as e:
                logger.warning(f"Cannot load default font {font_path}: {e}")

        logger.debug("No system default font found, using Pillow's built-in font")
        return ImageFont.load_default(size=size)


_default_registry = FontRegistry()


def get_registry() -> FontRegistry:
    """Return the process-wide font registry."""
    return _default_registry


def register_font(name: str, path: str | Path) -> None:
    """Register a font in the process-wide registry.

    Example:
        >>> register_font("MyFont", "/path/to/font.ttf")
    """
    _default_registry.register_font(name, path)


def get_font(name: str) -> bytes | None:
    """Get font data from the process-wide registry."""
    return _default_registry.get_font(name)


def is_font_registered(name: str) -> bool:
    """Check the process-wide registry for a family."""
    return _default_registry.is_font_registered(name)


def list_fonts() -> list[str]:
    """List families in the process-wide registry."""
    return _default_registry.list_fonts()


def list_bundled_fonts() -> list[str]:
    """List bundled font names, whether or not they are loaded."""
    return list(BUNDLED_FONTS)


def get_default_font() -> str:
    """Name of the fallback font used for unregistered families."""
    return DEFAULT_FONT_NAME


def init_bundled_fonts() -> list[str]:
    """Load the bundled fonts into the process-wide registry."""
    return _default_registry.init_bundled_fonts()


def clear_fonts() -> None:
    """Clear the process-wide registry. Intended for tests."""
    _default_registry.clear_fonts()
