# File: src/mstair/prettyprint/xlogging/logger_factory.py
"""
Logger factory for CoreLogger instances.

Names default to the calling module, so `create_logger(None)` and
`create_logger(__name__)` agree. Levels come from LogLevelConfig unless
passed explicitly.
"""

import logging
import sys
from pathlib import Path

from mstair.prettyprint.base.caller_module_name_and_level import caller_module_name_and_level
from mstair.prettyprint.xlogging.core_logger import CoreLogger


__all__ = ["create_logger", "get_caller_logger_name"]


def create_logger(
    name: str | None,
    *,
    level: int | str | None = None,
    stacklevel: int = 1,
) -> CoreLogger:
    """
    Return a CoreLogger with a consistent, context-aware name.

    Handles:
    - Normal imports (uses given name)
    - Direct script execution (__main__)
    - Anonymous loggers (uses caller-derived name)

    :param name: Logger name, usually `__name__`.
    :param level: Explicit level, overriding the environment.
    :param stacklevel: Frames to skip when deriving a name from the caller.
    :return CoreLogger: The new or existing logger.
    """
    logger_name: str = name or ""

    if logger_name == "__main__":
        arg0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
        logger_name = arg0.stem if arg0 and arg0.exists() else "embedded_main"

    if not logger_name:
        logger_name = get_caller_logger_name(stacklevel=stacklevel + 1)

    existing = logging.Logger.manager.loggerDict.get(logger_name)
    if isinstance(existing, CoreLogger):
        if level is not None:
            existing.setLevel(level)
        return existing

    logger = _get_core_logger_from_logging(logger_name)
    if level is not None:
        logger.setLevel(level)
    return logger


def _get_core_logger_from_logging(name: str) -> CoreLogger:
    """
    Create or retrieve a CoreLogger through logging.getLogger().

    Temporarily sets CoreLogger as the logger class so the new logger joins the
    logging hierarchy (parent links, propagation) and pytest's caplog sees it.

    :param name: Logger name.
    :return: CoreLogger instance.
    :raises TypeError: If getLogger() returns a plain Logger created earlier under the same name.
    """
    logging_class = logging.getLoggerClass()
    if logging_class is not CoreLogger:
        logging.setLoggerClass(CoreLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        if logging_class is not CoreLogger:
            logging.setLoggerClass(logging_class)
    if not isinstance(logger, CoreLogger):
        raise TypeError(f"Failed to create CoreLogger: {logger!r}")
    return logger


def get_caller_logger_name(*, stacklevel: int = 1) -> str:
    """Resolve the default logger name based on caller context."""
    name = caller_module_name_and_level(stacklevel=stacklevel + 1)[0]
    if not name or name == "__main__":
        executable = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
        name = Path(executable).stem
    return name


# End of file: src/mstair/prettyprint/xlogging/logger_factory.py
