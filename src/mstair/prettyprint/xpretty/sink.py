# File: src/mstair/prettyprint/xpretty/sink.py
"""
Append-only text output for the renderer.

All rendering goes through write() and write_line(); nothing is ever
rewritten once appended.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mstair.prettyprint.base.constants import LINE_TERMINATOR
from mstair.prettyprint.base.types import SupportsAppend, SupportsWrite, TextDestination
from mstair.prettyprint.xlogging.logger_factory import create_logger


__all__ = ["TextSink"]

LOG = create_logger(__name__)


class TextSink:
    """Writes rendered text to a file-like object or a list-like collector."""

    destination: TextDestination
    _append: Callable[[str], Any]

    def __init__(self, destination: TextDestination) -> None:
        """
        :param destination: An object with write(str), such as sys.stdout or io.StringIO,
            or with append(str), such as a list[str].
        :raises TypeError: If the destination supports neither.
        """
        if isinstance(destination, SupportsWrite):
            self._append = destination.write
        elif isinstance(destination, SupportsAppend):
            self._append = destination.append
        else:
            raise TypeError(
                f"Cannot write to {type(destination).__name__}: needs write() or append()"
            )
        self.destination = destination

    def write(self, text: str) -> None:
        """Append `text` with no line terminator."""
        LOG.trace("writing %r", text)
        self._append(text)

    def write_line(self, text: str = "") -> None:
        """Append `text` followed by a line terminator."""
        self.write(text + LINE_TERMINATOR)


# End of file: src/mstair/prettyprint/xpretty/sink.py
