# File: src/mstair/prettyprint/xpretty/pp_api.py
"""
Pretty-print arbitrary Python objects for debugging.

Output is for humans: nested containers and objects are laid out one item
per line, long strings are word-wrapped, and cycles are reported instead of
followed.

    >>> pp({"a": [1, None]})
    {
      "a" -> [
        1,
        None
      ]
    }

Per-call options override the defaults for that call only. Defaults are
read from PRETTYPRINT_* environment variables on first use and can be
changed with set_default_config() or, scoped, with default_config_context().
They are held in a ContextVar, so threads and asyncio tasks started from a
context inherit its defaults without sharing later changes.
"""

from __future__ import annotations

import contextvars
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from mstair.prettyprint.base.constants import LINE_TERMINATOR
from mstair.prettyprint.base.types import TextDestination
from mstair.prettyprint.xlogging.logger_factory import create_logger
from mstair.prettyprint.xpretty.model import PrettyConfig
from mstair.prettyprint.xpretty.renderer import Renderer
from mstair.prettyprint.xpretty.sink import TextSink


T = TypeVar("T")


__all__ = [
    "PrettyPrinter",
    "default_config_context",
    "get_default_config",
    "pformat",
    "pp",
    "pp_chain",
    "reset_default_config",
    "set_default_config",
]

LOG = create_logger(__name__)

_default_config: contextvars.ContextVar[PrettyConfig] = contextvars.ContextVar(
    "prettyprint_default_config"
)


def get_default_config() -> PrettyConfig:
    """Return the defaults for this context, reading the environment on first use."""
    try:
        return _default_config.get()
    except LookupError:
        config = PrettyConfig.from_environment()
        _default_config.set(config)
        return config


def set_default_config(**changes: Any) -> PrettyConfig:
    """
    Change the defaults for this context and return the new defaults.

    :param changes: PrettyConfig fields to change. None values are ignored.
    :raises PrettyConfigError: On unknown fields or invalid values.
    """
    config = get_default_config().replace(**changes)
    _default_config.set(config)
    return config


def reset_default_config() -> PrettyConfig:
    """Discard changes to the defaults and re-read the environment."""
    config = PrettyConfig.from_environment()
    _default_config.set(config)
    return config


@contextmanager
def default_config_context(**changes: Any) -> Iterator[PrettyConfig]:
    """
    Change the defaults for the duration of the block.

    Example:
        >>> with default_config_context(indent=4):
        ...     pp([1])
        [
            1
        ]
    """
    token = _default_config.set(get_default_config().replace(**changes))
    try:
        yield _default_config.get()
    finally:
        _default_config.reset(token)


class PrettyPrinter:
    """
    Pretty-printer bound to an explicit configuration.

    Unlike the module-level functions, a PrettyPrinter ignores the context
    defaults entirely, which makes it the right choice for libraries.
    """

    config: PrettyConfig

    def __init__(self, config: PrettyConfig | None = None, **changes: Any) -> None:
        """
        :param config: Base configuration. Defaults to PrettyConfig().
        :param changes: PrettyConfig fields to change on top of `config`.
        """
        self.config = (config or PrettyConfig()).replace(**changes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"

    def pp(self, value: Any, **changes: Any) -> None:
        """Render `value` followed by a line terminator."""
        config = self.config.replace(**changes)
        destination = config.write_to if config.write_to is not None else sys.stdout
        sink = TextSink(destination)
        self._render(value, config, sink)
        sink.write(LINE_TERMINATOR)

    def pp_chain(self, value: T, **changes: Any) -> T:
        """Same as pp(), returning `value` so it can be used inside an expression."""
        self.pp(value, **changes)
        return value

    def pformat(self, value: Any, **changes: Any) -> str:
        """Return the rendering of `value` as a string, with no trailing line terminator."""
        chunks: list[str] = []
        self._render(value, self.config.replace(**changes), TextSink(chunks))
        return "".join(chunks)

    @staticmethod
    def _render(value: Any, config: PrettyConfig, sink: TextSink) -> None:
        # Log records from one top-level call share a prefix naming the rendered type.
        with LOG.prefix_with(f"[pp {type(value).__name__}]"):
            Renderer(config, sink).render(value)


def pp(
    value: Any,
    *,
    indent: int | None = None,
    write_to: TextDestination | None = None,
    **changes: Any,
) -> None:
    """
    Pretty-print `value` followed by a line terminator.

    :param value: Any object.
    :param indent: Spaces per nesting level, for this call only.
    :param write_to: Destination with write() or append(), for this call only. Default is sys.stdout.
    :param changes: Other PrettyConfig fields, for this call only.
    :raises RenderDepthError: If nesting exceeds max_depth.
    :raises FieldAccessError: If a composite field cannot be read.
    """
    PrettyPrinter(get_default_config()).pp(value, indent=indent, write_to=write_to, **changes)


def pp_chain(
    value: T,
    *,
    indent: int | None = None,
    write_to: TextDestination | None = None,
    **changes: Any,
) -> T:
    """
    Pretty-print `value` and return it unchanged.

    Example:
        >>> total = sum(pp_chain([1, 2, 3]))
    """
    pp(value, indent=indent, write_to=write_to, **changes)
    return value


def pformat(value: Any, **changes: Any) -> str:
    """
    Return the pretty-printed form of `value` without a trailing line terminator.

    :param value: Any object.
    :param changes: PrettyConfig fields, for this call only. `write_to` is ignored.
    :return str: The rendered text.
    """
    changes.pop("write_to", None)
    return PrettyPrinter(get_default_config()).pformat(value, **changes)


# End of file: src/mstair/prettyprint/xpretty/pp_api.py
