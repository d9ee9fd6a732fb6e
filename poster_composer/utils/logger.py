"""Logging helpers for the poster_composer package.

Every module logs through ``get_logger(__name__)``, which places its
logger under the ``poster_composer`` namespace. The library installs no
handlers of its own; applications (the CLI included) call
:func:`setup_logging` once to attach console and file output.
"""

import logging
import sys
from pathlib import Path
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT: Final[str] = "%(levelname)s: %(message)s"

LOGGER_PREFIX: Final[str] = "poster_composer"

# Handlers attached by setup_logging, replaced on the next call
_installed_handlers: list[logging.Handler] = []


def _resolve_level(level: int | str) -> int:
    """Turn a level name such as "debug" into its numeric value."""
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    _installed_handlers.append(handler)


def setup_logging(
    level: int | str = logging.INFO,
    log_file: Path | str | None = None,
    console: bool = True,
    verbose: bool = False,
) -> None:
    """Attach console and/or file output to the package logger.

    Handlers installed by a previous call are closed and replaced; handlers
    added by anyone else are left alone.

    Args:
        level: Logging level name or number
        log_file: Optional file that receives the detailed format
        console: Whether to log to stderr
        verbose: Use the detailed format on the console too

    Raises:
        ValueError: If ``level`` is not a known level name

    Example:
        >>> setup_logging(level="DEBUG", log_file="logs/compose.log")
        >>> get_logger(__name__).info("Composing classic")
    """
    numeric_level = _resolve_level(level)
    package_logger = logging.getLogger(LOGGER_PREFIX)
    package_logger.setLevel(numeric_level)

    while _installed_handlers:
        handler = _installed_handlers.pop()
        package_logger.removeHandler(handler)
        handler.close()

    detailed = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    if console:
        console_formatter = detailed if verbose else logging.Formatter(CONSOLE_FORMAT)
        _attach(package_logger, logging.StreamHandler(sys.stderr), numeric_level, console_formatter)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach(package_logger, logging.FileHandler(log_path, encoding="utf-8"), numeric_level, detailed)


def setup_logging_from_config(config) -> None:
    """Configure logging from an EngineConfig's log_level and log_file.

    DEBUG also switches the console to the detailed format.
    """
    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        verbose=_resolve_level(config.log_level) <= logging.DEBUG,
    )


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, namespaced under poster_composer.

    Args:
        name: Module name (typically __name__)
    """
    if name == LOGGER_PREFIX or name.startswith(f"{LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def set_level(level: int | str) -> None:
    """Change the level of the package logger and of its handlers."""
    numeric_level = _resolve_level(level)
    package_logger = logging.getLogger(LOGGER_PREFIX)
    package_logger.setLevel(numeric_level)

    for handler in package_logger.handlers:
        handler.setLevel(numeric_level)


def disable_logging() -> None:
    """Silence every poster_composer logger."""
    logging.getLogger(LOGGER_PREFIX).setLevel(logging.CRITICAL + 1)


def enable_logging() -> None:
    """Re-enable logging at INFO after :func:`disable_logging`."""
    logging.getLogger(LOGGER_PREFIX).setLevel(logging.INFO)
