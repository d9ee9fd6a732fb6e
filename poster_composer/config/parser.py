"""Command-line argument parser for the poster composer.

This module provides a unified parser for converting command-line arguments
into configuration objects and the field map of a compose request.
"""

import argparse
from typing import Any

from poster_composer.config.models import EngineConfig, OutputOptions, ResizeOptions
from poster_composer.utils.constants import DEFAULT_OUTPUT_FIT, FIT_MODES, FORMAT_ALIASES, LOG_LEVELS, SUPPORTED_FORMATS
from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


def key_value(text: str) -> tuple[str, str]:
    """Split a NAME=VALUE argument on its first '='.

    Raises:
        argparse.ArgumentTypeError: If there is no '=' or the name is empty
    """
    name, separator, value = text.partition("=")
    name = name.strip()
    if not separator or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    return name, value


class ConfigParser:
    """Parser for command-line arguments.

    This class creates an argparse parser and converts the parsed arguments
    into an EngineConfig, OutputOptions and the request's field map.

    Example:
        >>> parser = ConfigParser()
        >>> config, output, extra = parser.parse_args(
        ...     ["classic", "photo.jpg", "poster.png", "--field", "athleteName=Ana"]
        ... )
        >>> extra["fields"]
        {'athleteName': 'Ana'}
    """

    def __init__(self) -> None:
        """Initialize the argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser with all options.

        Returns:
            Configured ArgumentParser
        """
        parser = argparse.ArgumentParser(
            description="Compose a poster from a template, a photo and text values.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self._get_epilog(),
        )

        # Required arguments (unless using --list-templates)
        parser.add_argument("template", nargs="?", help="Template id (e.g. classic)")
        parser.add_argument("photo", nargs="?", help="Path to the photo to place in the template")
        parser.add_argument("output", nargs="?", help="Path of the poster file to write")

        parser.add_argument(
            "--config",
            type=str,
            help="Load settings from JSON configuration file",
        )

        # Template data
        data_group = parser.add_argument_group("Template Data")
        data_group.add_argument(
            "--field",
            dest="fields",
            type=key_value,
            action="append",
            default=[],
            metavar="ID=VALUE",
            help="Text value for a template field (repeatable)",
        )
        data_group.add_argument(
            "--templates-dir",
            default=None,
            help="Folder of extra template JSON files",
        )
        data_group.add_argument(
            "--font",
            dest="fonts",
            type=key_value,
            action="append",
            default=[],
            metavar="NAME=PATH",
            help="Register a font file under a family name (repeatable)",
        )

        # Output settings
        output_group = parser.add_argument_group("Output Settings")
        output_group.add_argument(
            "--format",
            default=None,
            choices=[*SUPPORTED_FORMATS, *FORMAT_ALIASES],
            help="Output format (default: png)",
        )
        output_group.add_argument(
            "--quality",
            type=int,
            default=None,
            help="JPEG quality 1-100 (default: 85)",
        )
        output_group.add_argument("--width", type=int, default=None, help="Resize to this width")
        output_group.add_argument("--height", type=int, default=None, help="Resize to this height")
        output_group.add_argument(
            "--fit",
            default=None,
            choices=FIT_MODES,
            help="How the poster fills the resize box (default: contain)",
        )

        # Modes and logging
        mode_group = parser.add_argument_group("Modes and Logging")
        mode_group.add_argument(
            "--list-templates",
            action="store_true",
            help="List available template ids and exit",
        )
        mode_group.add_argument(
            "--log-level",
            default=None,
            choices=LOG_LEVELS,
            help="Logging level (default: INFO)",
        )
        mode_group.add_argument(
            "--log-file",
            type=str,
            default=None,
            help="Write log output to file",
        )
        mode_group.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose logging output",
        )
        mode_group.add_argument(
            "--quiet",
            action="store_true",
            help="Silence log output (progress and results are still printed)",
        )

        return parser

    def _get_epilog(self) -> str:
        """Get epilog text for help message."""
        return """
Built-in templates:
  classic  - circular photo, gold border, centered text
  modern   - rounded photo, left-aligned text

  Both use the fields athleteName, achievement, tournamentName and date.

Examples:
  List templates:
    python compose_poster.py --list-templates

  Basic usage:
    python compose_poster.py classic photo.jpg poster.png \\
      --field athleteName="Ana Souza" --field achievement="Gold Medal" \\
      --field tournamentName="Regional Open" --field date="2024-05-01"

  JPEG at half size:
    python compose_poster.py classic photo.jpg poster.jpg --format jpeg --width 540 ...

  Custom fonts and templates:
    python compose_poster.py mytemplate photo.jpg out.png --templates-dir templates/ \\
      --font Oswald-Bold=fonts/Oswald-Bold.ttf ...
"""

    def parse_args(
        self,
        args: list[str] | None = None,
    ) -> tuple[EngineConfig, OutputOptions, dict[str, Any]]:
        """Parse command-line arguments.

        Args:
            args: Arguments to parse (None = use sys.argv)

        Returns:
            Tuple of (config, output_options, extra_args) where extra_args
            contains template, photo, output, fields, list_templates and quiet

        Raises:
            InvalidInputError: If the configuration file or output options
                are invalid
        """
        parsed = self.parser.parse_args(args)

        if parsed.config:
            logger.info(f"Loading configuration from {parsed.config}")
            config = EngineConfig.from_json(parsed.config)
        else:
            config = EngineConfig()

        self._apply_args_to_config(config, parsed)
        output = self._build_output_options(config, parsed)

        extra_args = {
            "template": parsed.template,
            "photo": parsed.photo,
            "output": parsed.output,
            "fields": dict(parsed.fields),
            "list_templates": parsed.list_templates,
            "quiet": parsed.quiet,
        }

        return config, output, extra_args

    def _apply_args_to_config(self, config: EngineConfig, args: argparse.Namespace) -> None:
        """Apply parsed arguments to configuration object.

        Args:
            config: Configuration to modify
            args: Parsed arguments
        """
        if args.verbose:
            config.log_level = "DEBUG"
        elif args.log_level:
            config.log_level = args.log_level

        if args.log_file:
            config.log_file = args.log_file
        if args.templates_dir:
            config.templates_dir = args.templates_dir

        # Command-line fonts override same-named fonts from the config file
        config.fonts = {**config.fonts, **dict(args.fonts)}

    def _build_output_options(self, config: EngineConfig, args: argparse.Namespace) -> OutputOptions:
        resize = None
        if args.width is not None or args.height is not None:
            resize = ResizeOptions(width=args.width, height=args.height, fit=args.fit or DEFAULT_OUTPUT_FIT)
        elif args.fit:
            logger.warning("--fit has no effect without --width or --height")

        return OutputOptions(
            format=args.format or config.default_format,
            quality=args.quality if args.quality is not None else config.jpeg_quality,
            resize=resize,
        )
