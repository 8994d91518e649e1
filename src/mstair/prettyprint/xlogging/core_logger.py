# File: src/mstair/prettyprint/xlogging/core_logger.py
"""
Structured logging with environment-driven configuration.

Example:
    >>> from mstair.prettyprint.xlogging.logger_factory import create_logger
    >>> LOG = create_logger(__name__)
    >>> LOG.debug("rendering %s", type(value).__name__)
    >>>
    >>> with LOG.prefix_with("[pp]"):
    ...     LOG.trace("writing %r", text)

Features:
- Custom TRACE level below DEBUG
- Stack-aware caller resolution (class and method of the caller, not of the logger)
- Scoped message prefixes via contextvars
- Non-primitive arguments are pretty-printed with pformat() before formatting

Design:
- Only the root logger owns a handler; CoreLogger instances propagate.
- Per-logger levels come from LogLevelConfig (environment).
- initialize_root() is the only entry point for root setup and is idempotent.
"""

from __future__ import annotations

import contextvars
import inspect
import logging
import os
import re
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Any, ClassVar, TextIO

from mstair.prettyprint.base import config as cfg
from mstair.prettyprint.base.types import PRIMITIVE_TYPES
from mstair.prettyprint.xlogging.frame_analyzer import StackFrameInfo
from mstair.prettyprint.xlogging.logger_constants import (
    K_KLASS_NAME,
    TRACE,
    initialize_logger_constants,
)
from mstair.prettyprint.xlogging.logger_formatter import CoreFormatter
from mstair.prettyprint.xlogging.logger_util import LogLevelConfig


__all__: list[str] = [
    "CoreLogger",
    "initialize_root",
]

_LOG_FRAME_NOISE_METHODS: list[str] = [f"__{m}__" for m in ["enter", "exit", "call"]]
_LOG_KWARGS_FORBIDDEN: set[str] = {"filename", "lineno", "msg", "args", "levelname", "levelno"}
_LOG_KWARGS_STANDARD: set[str] = {"exc_info", "stack_info", "stacklevel", "extra"}
_LOG_ROOT_ATTR_NAME = "_prettyprint_corelogger_initialized"


_cached_caller_info: contextvars.ContextVar[StackFrameInfo | None] = contextvars.ContextVar(
    "cached_caller_info", default=None
)
_log_prefix: contextvars.ContextVar[str] = contextvars.ContextVar("log_prefix", default="")


class CoreLogger(logging.Logger):
    """
    Application logger that extends logging.Logger with:

    - TRACE level.
    - Accurate caller info using stack inspection.
    - Pretty-printed serialization of non-primitive args.
    - Prefix context manager for scoped message prefixes.

    Handlers are not attached directly; all CoreLogger instances propagate
    to the root logger, which holds a single stderr handler per initialize_root().
    """

    _INTERNAL_FRAME_OFFSET: ClassVar[int] = 2  # log() + wrapper method (debug/info/etc)

    def __init__(self, name: str, level: int | str = logging.NOTSET) -> None:
        """
        :param name: The logger name, typically the module name.
        :param level: Initial level. NOTSET means "ask LogLevelConfig".
        """
        initialize_logger_constants()
        if level in {logging.NOTSET, "NOTSET", ""}:
            level = LogLevelConfig.get_instance().get_effective_level(name)
        super().__init__(name, level)

        root_level = logging.getLogger().getEffectiveLevel()
        if self.level < root_level:
            self.setLevel(root_level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{type(self).__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def log(self, level: int, *args: Any, **kwargs: Any) -> None:
        """
        Emit a log record with stack-aware caller context.

        Delegates to super().log() so handler filtering and propagation are unchanged.
        """
        initialize_root()
        if cfg.in_analysis_mode() or not self.isEnabledFor(level):
            return

        _validate_and_move_kwargs_to_extra(kwargs)

        stacklevel: int = kwargs.pop("stacklevel", 1) + 1 + self._INTERNAL_FRAME_OFFSET
        found_frame_info = _find_caller_frame(stacklevel)

        extra: dict[str, Any] = kwargs.setdefault("extra", {})
        if found_frame_info.f_locals_class_name:
            extra[K_KLASS_NAME] = found_frame_info.f_locals_class_name

        args = _normalize_unsupported_args(*args)
        prefix = _log_prefix.get()
        msg: Any = args[0] if args else ""
        if prefix:
            msg = f"{prefix}{msg}"

        token = _cached_caller_info.set(found_frame_info)
        try:
            super().log(
                level,
                msg,
                *args[1:],
                exc_info=kwargs.get("exc_info"),
                stack_info=kwargs.get("stack_info", False),
                stacklevel=1,
                extra=extra,
            )
        finally:
            _cached_caller_info.reset(token)

    def findCaller(
        self,
        stack_info: bool = False,
        stacklevel: int = 1,
    ) -> tuple[str, int, str, str | None]:
        """
        Use the frame already located by log() instead of walking the stack again.

        The cached frame is cleared right after the record is built so frames
        are never kept alive across calls.
        """
        if (info := _cached_caller_info.get()) is not None:
            sinfo: str | None = None
            if stack_info:
                import traceback  # noqa: PLC0415

                sinfo = "Stack (most recent call last):\n" + "".join(
                    traceback.format_stack(info.frame)
                )
            return (info.f_code_filename, info.frame.f_lineno, info.f_code_name, sinfo)
        return super().findCaller(stack_info=stack_info, stacklevel=stacklevel)

    def trace(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        self.log(TRACE, *args, **kwargs)

    def debug(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at DEBUG level."""
        self.log(logging.DEBUG, *args, **kwargs)

    def info(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at INFO level."""
        self.log(logging.INFO, *args, **kwargs)

    def warning(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at WARNING level."""
        self.log(logging.WARNING, *args, **kwargs)

    def error(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at ERROR level."""
        self.log(logging.ERROR, *args, **kwargs)

    def critical(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at CRITICAL level with a stack trace."""
        kwargs.setdefault("stack_info", True)
        self.log(logging.CRITICAL, *args, **kwargs)

    def exception(self, *args: Any, **kwargs: Any) -> None:
        """Log a message at ERROR level with exception info, through CoreLogger.log()."""
        kwargs.setdefault("exc_info", True)
        self.log(logging.ERROR, *args, **kwargs)

    @contextmanager
    def prefix_with(self, prefix: str) -> Iterator[None]:
        """
        Prefix all log messages emitted within the current context.

        Nested prefixes accumulate. State lives in a ContextVar, so threads and
        tasks do not see each other's prefixes.

        :param prefix: The prefix string to prepend to all log messages.
        """
        current = _log_prefix.get()
        token = _log_prefix.set(f"{current}{prefix} > ")
        try:
            yield
        finally:
            _log_prefix.reset(token)


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
) -> None:
    """
    Idempotently configure the root logger for CoreLogger.

    - Ensures exactly one stderr StreamHandler with CoreFormatter exists.
    - If `force=True`, removes and recreates the stderr handler.
    - Sets root level to `level` if provided, otherwise WARNING if NOTSET.
    - Never touches handlers owned by the host application.

    :param fmt: Format string. Defaults to LOG_FORMAT or the package default.
    :param datefmt: Date format. Defaults to LOG_DATEFMT; with no '%' directive, timestamps are dropped.
    :param level: Root logger level (int or name).
    :param force: Reinitialize even if already initialized.
    """
    root = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)
    initialize_logger_constants()

    if force:
        root.handlers = [h for h in root.handlers if not _is_stderr_handler(h)]

    fmt = fmt or os.environ.get(
        "LOG_FORMAT",
        r"%(levelName)s %(asctime)s %(fileAndLine)s %(klassAndMethod)s %(message)s",
    )
    datefmt = os.environ.get("LOG_DATEFMT", "%-I:%M%p") if datefmt is None else datefmt
    if "%" not in datefmt:
        fmt = re.sub(r"\s*%\(asctime\)s\s*", " ", fmt)
        datefmt = None

    stderr_handlers = [h for h in root.handlers if _is_stderr_handler(h)]
    if not stderr_handlers:
        handler: logging.StreamHandler[TextIO] = logging.StreamHandler(sys.stderr)
        handler.setFormatter(CoreFormatter(fmt, datefmt))
        root.addHandler(handler)
    elif not any(isinstance(h.formatter, CoreFormatter) for h in stderr_handlers):
        stderr_handlers[0].setFormatter(CoreFormatter(fmt, datefmt))

    if level is not None:
        if isinstance(level, str):
            level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
        root.setLevel(level)
    elif root.getEffectiveLevel() == logging.NOTSET:
        root.setLevel(logging.WARNING)


def _is_stderr_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr


def _find_caller_frame(stacklevel: int) -> StackFrameInfo:
    """
    Find the caller frame `stacklevel - 1` meaningful frames above this function.

    Context-manager and __call__ frames are skipped so that logging from inside
    `with` blocks reports the user's line.
    """
    current_frame: FrameType | None = inspect.currentframe()
    if current_frame is None:
        raise RuntimeError("Cannot retrieve current stack frame for caller resolution")

    found_frame_info: StackFrameInfo | None = None
    frames_walked = 0
    noise_frames_seen = 0
    while current_frame is not None:
        found_frame_info = StackFrameInfo.from_raw_frame(
            raw_frame=current_frame, stack_position=frames_walked
        )
        if _is_noise_frame(found_frame_info):
            noise_frames_seen += 1
        elif (frames_walked - noise_frames_seen) >= stacklevel - 1:
            break
        current_frame = current_frame.f_back
        frames_walked += 1

    if found_frame_info is None:
        raise RuntimeError(f"Stack walk found no caller frame (walked {frames_walked} frames)")
    return found_frame_info


def _is_noise_frame(info: StackFrameInfo) -> bool:
    """Frames that never count as the logging caller."""
    if info.f_code_name in _LOG_FRAME_NOISE_METHODS:
        return True
    if info.f_code_filename == "<string>":
        return True
    return info.f_code_name == "__init__" and info.f_locals_self is None


def _validate_and_move_kwargs_to_extra(kwargs: dict[str, Any]) -> None:
    """
    Move non-standard keyword arguments into the `extra` dict.

    :param kwargs: The keyword arguments passed to log().
    :raises ValueError: If a keyword would clobber a LogRecord attribute.
    """
    for key in list(kwargs):
        if key in _LOG_KWARGS_FORBIDDEN:
            raise ValueError(f"Invalid keyword argument {key!r} for a log call")
        if key not in _LOG_KWARGS_STANDARD:
            kwargs.setdefault("extra", {})[key] = kwargs.pop(key)


def _normalize_unsupported_args(*args: Any) -> tuple[Any, ...]:
    """
    Pretty-print non-primitive format arguments so records stay readable and picklable.

    :param args: The log() arguments (format string first).
    :return tuple[Any, ...]: Arguments with non-primitive values replaced by strings.
    """
    from mstair.prettyprint.xpretty.pp_api import pformat  # noqa: PLC0415

    normalized: list[Any] = []
    for index, arg in enumerate(args):
        if index == 0 or isinstance(arg, PRIMITIVE_TYPES):
            normalized.append(arg)
            continue
        try:
            normalized.append(pformat(arg))
        except Exception as e:
            normalized.append(f"<unrenderable {type(arg).__name__}: {e}>")
    return tuple(normalized)


# End of file: src/mstair/prettyprint/xlogging/core_logger.py
