"""Progress reporting for poster composition."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from poster_composer.utils.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ProgressObserver(Protocol):
    """Protocol for objects that want composition progress.

    Example:
        >>> class PrintObserver:
        ...     def on_progress(self, stage: str, percent: int) -> None:
        ...         print(f"{percent:3d}% {stage}")
    """

    def on_progress(self, stage: str, percent: int) -> None:
        ...


ProgressCallback = Callable[[str, int], None]


class ProgressReporter:
    """Forwards stage updates to an optional observer.

    The observer may be a plain callable ``(stage, percent)`` or a
    ProgressObserver. Exceptions it raises are logged and swallowed so a
    faulty observer never aborts a composition.

    Attributes:
        observer: Callable or ProgressObserver, or None
    """

    def __init__(self, observer: ProgressCallback | ProgressObserver | None = None):
        self.observer = observer

    def report(self, stage: tuple[str, int]) -> None:
        """Report one stage, given as a (name, percent) pair."""
        name, percent = stage
        logger.debug(f"Stage {name} ({percent}%)")

        if self.observer is None:
            return

        try:
            if isinstance(self.observer, ProgressObserver):
                self.observer.on_progress(name, percent)
            else:
                self.observer(name, percent)
        except Exception as e:
            logger.warning(f"Progress observer failed at stage '{name}': {e}")
