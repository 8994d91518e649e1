import logging
import os
import re
import sys
import traceback
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Literal

import pytz
from colorama import Fore

import mstair.prettyprint.base.config as cfg
from mstair.prettyprint.base.fs_helpers import fs_find_pyproject_toml
from mstair.prettyprint.xlogging.logger_constants import K_COLOR, K_KLASS_NAME


__all__ = ["CoreFormatter", "get_color_code", "rgb_code"]


FormatStyle = Literal["%", "{", "$"]
"""Format string style accepted by `CoreFormatter` (and `logging.Formatter`)."""


def rgb_code(r: int, g: int, b: int) -> str:
    """
    Convert RGB values to an ANSI 24-bit foreground escape code.

    :param r: Red component (0-255)
    :param g: Green component (0-255)
    :param b: Blue component (0-255)
    :return str: ANSI escape code for the specified RGB color.
    """
    return f"\033[38;2;{max(0, min(255, r))};{max(0, min(255, g))};{max(0, min(255, b))}m"


RGB_CALLER_0 = rgb_code(3 << 4, 12 << 4, 10 << 4)
RGB_CALLER_1 = rgb_code(4 << 4, 8 << 4, 10 << 4)
COLOR_MAP: dict[str | None, str] = {
    "fileAndLine": RGB_CALLER_1,
    "klassAndMethod": RGB_CALLER_0,
    "TRACE": rgb_code(96, 0, 64),
    "DEBUG": rgb_code(128, 128, 128),
    "INFO": rgb_code(184, 184, 216),
    "WARNING": rgb_code(192, 176, 0),
    "ERROR": rgb_code(224, 128, 0),
    "CRITICAL": rgb_code(255, 64, 64),
    "SUPPRESS": rgb_code(0, 0, 128),
    None: Fore.RESET,
}


def get_color_code(key: Any = None) -> str:
    """
    Return the escape code for a COLOR_MAP key, a '#rrggbb' string, or a colorama Fore name.

    Returns "" outside desktop mode so piped logs stay plain.
    """
    if not cfg.in_desktop_mode():
        return ""
    if key in {"", "RESET"} or key is None:
        return Fore.RESET
    if key in COLOR_MAP:
        return COLOR_MAP[key]
    if isinstance(key, str) and key.startswith("#") and len(key) == 7:
        return rgb_code(*[int(key[i : i + 2], 16) for i in (1, 3, 5)])

    clean_key = str(key).upper().replace("BRIGHT", "LIGHT")
    if "LIGHT" in clean_key and not clean_key.endswith("_EX"):
        clean_key += "_EX"
    return getattr(Fore, clean_key, Fore.RESET)


class CoreFormatter(logging.Formatter):
    """
    Formatter for CoreLogger records.

    Adds the `levelName`, `fileAndLine` and `klassAndMethod` record fields,
    colors them in desktop mode, and shortens traceback paths relative to the
    project root.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        """
        :param fmt: The format string for log messages.
        :param datefmt: The date format string for log timestamps.
        :param style: The style for the format string (default is "%").
        :param validate: Whether to validate the format strings (default is True).
        :param defaults: Default values for custom format fields.
        """
        super().__init__(fmt=fmt, datefmt=datefmt, style=style, validate=validate, defaults=defaults)
        self.tz = pytz.timezone(os.environ.get("LOG_TIMEZONE", "UTC"))

    def format(self, record: logging.LogRecord) -> str:
        record.fileAndLine = self.format_fileAndLine(record.pathname, record.lineno)
        record.klassAndMethod = self.format_klassAndMethod(record)
        record.levelName = get_color_code(record.levelname) + record.levelname + get_color_code()

        try:
            message_str = super().format(record)
            color_key = getattr(record, K_COLOR, record.levelname)
            message_str = get_color_code(color_key) + message_str + get_color_code()
        except Exception as exc:
            message_str = format_logging_error(record, exc)

        return self.message_filter(message_str)

    @staticmethod
    def format_file(file: str) -> str:
        """Format a source path relative to the project root, else as an absolute POSIX path."""
        if not file:
            return "<unknown file>"
        path = Path(file)
        project_file = fs_find_pyproject_toml(start_dir=path.parent)
        if project_file is not None:
            try:
                return path.relative_to(project_file.parent).as_posix()
            except ValueError:
                pass
        return path.absolute().as_posix()

    def format_fileAndLine(self, file: str, lineno: int) -> str:
        fileAndLine = f"{self.format_file(file)}:{lineno}"
        return get_color_code("fileAndLine") + fileAndLine + get_color_code()

    @staticmethod
    def format_klassAndMethod(record: logging.LogRecord) -> str:
        klass_name: str = getattr(record, K_KLASS_NAME, "")
        if not klass_name:
            klassAndMethod = (
                record.funcName if record.funcName == "<module>" else f"{record.funcName}()"
            )
        elif record.funcName == "__init__":
            klassAndMethod = f"{klass_name}()"
        else:
            klassAndMethod = f"{klass_name}.{record.funcName}()"
        return get_color_code("klassAndMethod") + klassAndMethod + get_color_code()

    def formatException(
        self,
        ei: (
            tuple[type[BaseException], BaseException, TracebackType | None]
            | tuple[None, None, None]
            | BaseException
            | bool
            | None
        ),
    ) -> str:
        """Normalize `ei` to a stdlib-compatible 3-tuple, then format and filter."""
        if ei is True:
            cur = sys.exc_info()
            ei = (cur[0], cur[1], cur[2]) if cur[0] is not None else (None, None, None)
        elif ei is False or ei is None:
            ei = (None, None, None)
        elif isinstance(ei, BaseException):
            ei = (type(ei), ei, ei.__traceback__)

        message = super().formatException(ei)  # type: ignore[arg-type]
        return self.message_filter(message)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        _datetime = datetime.fromtimestamp(record.created, self.tz)
        result = ""
        if datefmt:
            try:
                result = _datetime.strftime(datefmt.replace("%-", "%"))
                result = result.replace("AM", "am").replace("PM", "pm").lstrip("0")
            except ValueError:
                result = ""
        return result or _datetime.isoformat()

    def message_filter(self, message: str, excludes: list[str] | None = None) -> str:
        """
        Drop traceback frames from virtualenvs and frozen modules and shorten the rest.

        :param message: The formatted message, possibly containing a traceback.
        :param excludes: Regex patterns of paths to drop.
        :return str: The filtered message.
        """
        excludes = excludes or [r"[/\\]\.venv", r"[/\\]site-packages", "<frozen"]
        filtered_lines: list[str] = []
        skip_indent_lines = False

        for line in message.splitlines():
            if skip_indent_lines and line.startswith("    "):
                continue
            skip_indent_lines = False

            match = re.search(r'^  File "([^"]+)", line (\d+), in (.*?)$', line)
            if match and any(re.search(ex, match.group(1)) for ex in excludes):
                skip_indent_lines = True
                continue
            if match:
                fileAndLine = self.format_fileAndLine(match.group(1), int(match.group(2)))
                method = get_color_code("klassAndMethod") + match.group(3) + "()" + get_color_code()
                filtered_lines.append(f"  {fileAndLine} {method}")
            else:
                filtered_lines.append(line)

        return "\n".join(filtered_lines)


def format_logging_error(record: logging.LogRecord, exc: Exception) -> str:
    """
    Describe a record that failed to format, instead of raising from inside a handler.

    :param record: The LogRecord that failed to format
    :param exc: The exception raised while formatting
    :return: Multi-line diagnostic string
    """
    posix_path = Path(getattr(record, "pathname", "<unknown>")).as_posix()
    message_lines = [
        "Internal error: Failed to format log record",
        f"{posix_path}:{getattr(record, 'lineno', '?')}",
        f"{type(exc).__name__}: {exc}",
        f"record.msg: {getattr(record, 'msg', None)!r}",
        f"record.args: {getattr(record, 'args', None)!r}",
        "",
        *traceback.format_exc().splitlines(),
    ]
    return "\n>> " + "\n>> ".join(message_lines) + "\n\n"


# End of file: src/mstair/prettyprint/xlogging/logger_formatter.py
