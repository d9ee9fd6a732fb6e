#!/usr/bin/env python3
"""
Poster Composer - CLI

Composes a finished poster image from a template, a photo and a set of
text values, and writes it to disk.

BUILT-IN TEMPLATES:
- classic: circular photo with a gold border, centered text
- modern:  rounded photo, left-aligned text

Both templates use the fields athleteName, achievement, tournamentName
and date. Every field must be given with --field ID=VALUE.

USAGE:
    python compose_poster.py TEMPLATE PHOTO OUTPUT --field ID=VALUE ... [options]

For full help:
    python compose_poster.py --help
"""

import sys
from pathlib import Path

from poster_composer.config.parser import ConfigParser
from poster_composer.rendering.generator import ComposeRequest, PosterComposer
from poster_composer.resources.fonts import FontRegistry
from poster_composer.templates.catalog import default_catalog
from poster_composer.utils.constants import FONT_EXTENSIONS
from poster_composer.utils.exceptions import PosterComposerError
from poster_composer.utils.logger import disable_logging, get_logger, setup_logging_from_config


def build_registry(fonts_dir: str | None, fonts: dict[str, str]) -> FontRegistry:
    """Create a registry with the bundled fonts plus configured extras.

    Fonts found in ``fonts_dir`` are registered under their file stem;
    explicit ``fonts`` entries are registered last and win on conflicts.
    """
    registry = FontRegistry()
    registry.init_bundled_fonts()

    if fonts_dir:
        for font_path in sorted(Path(fonts_dir).iterdir()):
            if font_path.suffix.lower() in FONT_EXTENSIONS:
                registry.register_font(font_path.stem, font_path)

    for name, path in fonts.items():
        registry.register_font(name, path)

    return registry


def print_progress(stage: str, percent: int) -> None:
    print(f"  [{percent:3d}%] {stage}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Arguments to parse (None = use sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    print("=" * 80)
    print("Poster Composer".center(80))
    print("=" * 80)
    print()

    try:
        parser = ConfigParser()
        config, output, extra_args = parser.parse_args(argv)

        setup_logging_from_config(config)
        if extra_args["quiet"]:
            disable_logging()
        logger = get_logger(__name__)

        catalog = default_catalog()
        if config.templates_dir:
            catalog.load_directory(config.templates_dir)

        if extra_args["list_templates"]:
            print("Available templates:")
            for template_id in catalog.list_templates():
                template = catalog.lookup(template_id)
                print(f"  • {template_id:<12} {template.name} - fields: {', '.join(template.field_ids)}")
            return 0

        if not extra_args["template"] or not extra_args["photo"] or not extra_args["output"]:
            print("\nError: TEMPLATE, PHOTO and OUTPUT are required (unless using --list-templates)", file=sys.stderr)
            parser.parser.print_help()
            return 1

        photo_path = Path(extra_args["photo"])
        if not photo_path.is_file():
            print(f"\nError: photo not found: {photo_path}", file=sys.stderr)
            return 1

        registry = build_registry(config.fonts_dir, config.fonts)
        composer = PosterComposer(catalog, registry)

        logger.info(f"Composing '{extra_args['template']}' from {photo_path}")
        print(f"Composing poster with template '{extra_args['template']}'...")

        request = ComposeRequest(
            template_id=extra_args["template"],
            photo_bytes=photo_path.read_bytes(),
            data=extra_args["fields"],
            output=output,
        )
        result = composer.compose(request, on_progress=print_progress)

        output_path = Path(extra_args["output"])
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(result.data)

        metadata = result.metadata
        print()
        print("=" * 80)
        print(f"✓ Poster saved: {output_path.absolute()}")
        print(f"  {metadata.width}x{metadata.height} {metadata.format}, {metadata.size} bytes")
        print("=" * 80)
        return 0

    except PosterComposerError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    except OSError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\n\nInterrupted by user.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
