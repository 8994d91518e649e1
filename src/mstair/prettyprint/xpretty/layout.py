# File: src/mstair/prettyprint/xpretty/layout.py
"""
Indentation, delimited blocks, and greedy word wrapping.

A block with items is laid out one item per line:

    open
    <indent+width>item1<separator>
    <indent+width>item2
    <indent>close

An empty block collapses to ``open + close``, e.g. ``[]`` or ``Point()``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from mstair.prettyprint.xpretty.sink import TextSink


__all__ = ["deepen", "wrap_words", "write_block"]

T = TypeVar("T")


def deepen(indent: str, width: int) -> str:
    """Return the prefix for one nesting level below `indent`."""
    return " " * width + indent


def write_block(
    sink: TextSink,
    items: Sequence[T],
    indent: str,
    width: int,
    render_item: Callable[[T, str], None],
    *,
    open: str,
    close: str,
    separator: str = "",
) -> None:
    """
    Write a delimited block, rendering each item on its own indented line.

    The item prefix is written here; `render_item` writes the rest of the line
    and receives the prefix so nested values can indent relative to it.

    :param sink: Output.
    :param items: Items in output order.
    :param indent: Prefix of the line holding `open`; `close` is aligned to it.
    :param width: Spaces added for the items.
    :param render_item: Called as render_item(item, item_indent).
    :param open: Opening delimiter, e.g. "[" or "Point(".
    :param close: Closing delimiter.
    :param separator: Written after every item but the last.
    """
    sink.write(open)
    if items:
        item_indent = deepen(indent, width)
        sink.write_line()
        for index, item in enumerate(items):
            if index:
                sink.write_line(separator)
            sink.write(item_indent)
            render_item(item, item_indent)
        sink.write_line()
        sink.write(indent)
    sink.write(close)


def wrap_words(text: str, width: int) -> list[str]:
    """
    Greedily split `text` on single spaces into lines that fit within `width`.

    Each word counts with one trailing space, so a joined line is shorter than
    `width`. A word that does not fit alone gets a line of its own. Joining
    the result with " " gives back `text` exactly, including runs of spaces.

    :param text: The text to wrap.
    :param width: Room per line, counting one space after each word.
    :return list[str]: The lines, never empty.
    """
    words = text.split(" ")
    lines: list[str] = []
    start = 0
    while start < len(words):
        end = start + 1
        used = len(words[start]) + 1
        while end < len(words) and used + len(words[end]) + 1 <= width:
            used += len(words[end]) + 1
            end += 1
        lines.append(" ".join(words[start:end]))
        start = end
    return lines


# End of file: src/mstair/prettyprint/xpretty/layout.py
