"""Configuration data models for poster composition.

This module defines the options a caller passes with a compose request
(output format, quality and resize) and the engine-wide configuration
the CLI loads. These models support:
- JSON serialization/deserialization
- Validation
- Default values
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from poster_composer.utils.constants import (
    DEFAULT_FORMAT,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_FIT,
    FIT_MODES,
    FORMAT_ALIASES,
    LOG_LEVELS,
    MAX_JPEG_QUALITY,
    MIN_JPEG_QUALITY,
    SUPPORTED_FORMATS,
)
from poster_composer.utils.exceptions import InvalidInputError
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


def normalize_format(image_format: str) -> str:
    """Lowercase a format name and resolve aliases ("jpg" -> "jpeg").

    Raises:
        InvalidInputError: If the format is not supported
    """
    normalized = image_format.lower()
    normalized = FORMAT_ALIASES.get(normalized, normalized)
    if normalized not in SUPPORTED_FORMATS:
        raise InvalidInputError(
            f"Invalid format '{image_format}', must be one of {SUPPORTED_FORMATS}",
            field="format",
        )
    return normalized


def validate_quality(quality: int) -> None:
    """Check a JPEG quality value.

    Raises:
        InvalidInputError: If quality is outside 1-100
    """
    if not MIN_JPEG_QUALITY <= quality <= MAX_JPEG_QUALITY:
        raise InvalidInputError(
            f"Quality must be between {MIN_JPEG_QUALITY} and {MAX_JPEG_QUALITY}, got {quality}",
            field="quality",
        )


@dataclass
class ResizeOptions:
    """Target size for the encoded poster.

    Attributes:
        width: Target width in pixels (None = follow aspect ratio)
        height: Target height in pixels (None = follow aspect ratio)
        fit: contain, cover or fill

    Example:
        >>> resize = ResizeOptions(width=540)
    """

    width: int | None = None
    height: int | None = None
    fit: str = DEFAULT_OUTPUT_FIT

    def __post_init__(self) -> None:
        """Validate resize options."""
        if self.width is None and self.height is None:
            raise InvalidInputError("Resize requires a width, a height or both", field="resize")
        for name, value in (("width", self.width), ("height", self.height)):
            if value is not None and value <= 0:
                raise InvalidInputError(f"Resize {name} must be positive, got {value}", field=name)
        if self.fit not in FIT_MODES:
            raise InvalidInputError(f"Invalid fit '{self.fit}', must be one of {FIT_MODES}", field="fit")


@dataclass
class OutputOptions:
    """Encoding options for a compose request.

    Attributes:
        format: png or jpeg ("jpg" is accepted and normalized)
        quality: JPEG quality (1-100)
        resize: Optional resize applied before encoding

    Example:
        >>> output = OutputOptions(format="jpg", quality=90)
        >>> output.format
        'jpeg'
    """

    format: str = DEFAULT_FORMAT
    quality: int = DEFAULT_JPEG_QUALITY
    resize: ResizeOptions | None = None

    def __post_init__(self) -> None:
        """Validate output options."""
        self.format = normalize_format(self.format)
        validate_quality(self.quality)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OutputOptions":
        """Create options from a dictionary.

        Example:
            >>> OutputOptions.from_dict({"format": "jpeg", "resize": {"width": 540}})
        """
        resize = data.get("resize")
        if isinstance(resize, dict):
            resize = ResizeOptions(**resize)

        return cls(
            format=data.get("format", DEFAULT_FORMAT),
            quality=int(data.get("quality", DEFAULT_JPEG_QUALITY)),
            resize=resize,
        )


@dataclass
class EngineConfig:
    """Engine-wide settings loaded by the CLI.

    Attributes:
        fonts_dir: Folder of extra fonts to register (file stem = family)
        templates_dir: Folder of extra template JSON files
        default_format: Output format when a request does not set one
        jpeg_quality: JPEG quality when a request does not set one
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        fonts: Explicit family -> font file mapping

    Example:
        >>> config = EngineConfig(default_format="jpeg", jpeg_quality=90)
    """

    fonts_dir: str | None = None
    templates_dir: str | None = None
    default_format: str = DEFAULT_FORMAT
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    log_level: str = "INFO"
    log_file: str | None = None
    fonts: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration."""
        self.default_format = normalize_format(self.default_format)
        validate_quality(self.jpeg_quality)
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise InvalidInputError(
                f"Invalid log level '{self.log_level}', must be one of {LOG_LEVELS}",
                field="log_level",
            )

    def output_options(self) -> OutputOptions:
        """Output options built from the configured defaults."""
        return OutputOptions(format=self.default_format, quality=self.jpeg_quality)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_json(self, filepath: str | Path) -> None:
        """Save configuration to JSON file.

        Args:
            filepath: Path to JSON file

        Example:
            >>> config = EngineConfig()
            >>> config.to_json("engine.json")
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

        logger.info(f"Saved configuration to {path}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored with a warning.

        Example:
            >>> config = EngineConfig.from_dict({"default_format": "jpg"})
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, filepath: str | Path) -> "EngineConfig":
        """Load configuration from JSON file.

        Raises:
            InvalidInputError: If the file is missing or not valid JSON

        Example:
            >>> config = EngineConfig.from_json("engine.json")
        """
        path = Path(filepath)

        try:
            with open(path, "r") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise InvalidInputError(f"Configuration file not found: {path}", field="config") from e
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Invalid JSON in {path}: {e}", field="config") from e

        if not isinstance(data, dict):
            raise InvalidInputError(f"Configuration in {path} must be a JSON object", field="config")

        logger.info(f"Loaded configuration from {path}")
        return cls.from_dict(data)
