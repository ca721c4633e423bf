"""Error types and logging setup.

All engine failures are raised synchronously at the point of detection and
propagate to the caller; nothing is retried internally. Each error kind also
derives from the builtin exception family it refines, so ``except ValueError``
or ``except IndexError`` keeps working for callers that do not know about
this module.

Logging follows the standard library: every module uses
``logging.getLogger(__name__)`` below the ``pixel_forge`` namespace and the
package only installs a ``NullHandler``. Applications opt into output with
:func:`configure_logging`.
"""

import logging
import traceback
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger("pixel_forge")


class PixelForgeError(Exception):
    """Base exception for engine errors."""

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class OutOfBoundsError(PixelForgeError, IndexError):
    """Pixel or anchor coordinate beyond the buffer dimensions."""


class InvalidArgumentError(PixelForgeError, ValueError):
    """Bad direction, build, height, style, color or coordinate input."""


class ValidationError(PixelForgeError, ValueError):
    """Malformed template, character data or duplicate registration."""


class NotFoundError(PixelForgeError, LookupError):
    """Registry, preset or palette lookup miss."""


class SlotMismatchError(NotFoundError):
    """A part was equipped into a slot it does not declare."""


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Calling this more than once does not stack duplicate handlers.
    """
    logger.setLevel(level)

    # FileHandler subclasses StreamHandler
    has_console = any(
        type(h) is logging.StreamHandler for h in logger.handlers
    )
    if not has_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    if log_file is not None:
        path = Path(log_file)
        if not any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve() == path.resolve()
            for h in logger.handlers
        ):
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
            logger.addHandler(file_handler)

    return logger


def log_error(error: Exception, context: str = "") -> None:
    """Log an error with its traceback at ERROR level."""
    message = f"{context}: {error}" if context else str(error)
    logger.error(message)
    logger.debug("".join(traceback.format_exception(type(error), error, error.__traceback__)))
