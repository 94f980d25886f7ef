"""
Argosy logging setup.

Library modules log through logging.getLogger(__name__); the package only
installs a NullHandler on the "argosy" logger, so nothing is printed unless
the application opts in.

setup_logging() is that opt-in: it attaches a rich RichHandler (stderr by
default) to the "argosy" logger. The level comes from the argument, else the
ARGOSY_LOG_LEVEL environment variable (a level name or a number), else
WARNING.
"""
import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .utils import Unset, coalesce

LOGGER_NAME = "argosy"
LOG_FORMAT = "%(message)s"
DEBUG_LOG_FORMAT = "[%(name)s] %(message)s"


def resolve_env_log_level():
    """
    Return the level named by ARGOSY_LOG_LEVEL, or None when unset or unknown.
    """
    if not (value := os.environ.get("ARGOSY_LOG_LEVEL", "").strip().upper()):
        return None
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value)
    return level if isinstance(level, int) else None


def get_logger(name=LOGGER_NAME, /):
    """
    Return a logger below the "argosy" namespace.
    """
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level=None, /, console=Unset):
    """
    Attach a RichHandler to the "argosy" logger and set its level.

    Calling it again replaces the handler installed by the previous call.
    Returns the configured logger.
    """
    if level is None and (level := resolve_env_log_level()) is None:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    for handler in [handler for handler in logger.handlers if getattr(handler, "_argosy", False)]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=coalesce(console, Console(stderr=True)),
        show_path=level <= logging.DEBUG if isinstance(level, int) else False,
        rich_tracebacks=True,
        markup=False,
    )
    handler._argosy = True
    handler.setFormatter(logging.Formatter(
        DEBUG_LOG_FORMAT if isinstance(level, int) and level <= logging.DEBUG else LOG_FORMAT
    ))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = (
    "resolve_env_log_level",
    "get_logger",
    "setup_logging",
)
