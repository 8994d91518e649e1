# File: src/mstair/prettyprint/xpretty/renderer.py
"""
Recursive, cycle-safe rendering of arbitrary values.

Each value is classified once and handed to the matching ``_render_*``
method. Containers and composites recurse through render() with a deeper
indentation prefix and the same CycleTracker, so a value that refers back to
one of its ancestors produces a one-line cycle notice instead of infinite
output:

    Node(
      name = "a",
      next = cyclic reference detected for 140230
    )[$id=140230]
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mstair.prettyprint.base.constants import CYCLE_DETECTED_FMT, CYCLE_MARKER_FMT, TRIPLE_QUOTES
from mstair.prettyprint.xlogging.logger_factory import create_logger
from mstair.prettyprint.xpretty.classifier import classify, scalar_text
from mstair.prettyprint.xpretty.cycle_tracker import CycleTracker
from mstair.prettyprint.xpretty.field_registry import FieldRegistry, get_field_registry
from mstair.prettyprint.xpretty.layout import deepen, wrap_words, write_block
from mstair.prettyprint.xpretty.model import Category, PrettyConfig
from mstair.prettyprint.xpretty.sink import TextSink


__all__ = ["Renderer"]

LOG = create_logger(__name__)


class Renderer:
    """Renders values into a TextSink according to a PrettyConfig."""

    config: PrettyConfig
    sink: TextSink
    tracker: CycleTracker
    fields: FieldRegistry

    def __init__(
        self,
        config: PrettyConfig,
        sink: TextSink,
        tracker: CycleTracker | None = None,
    ) -> None:
        """
        :param config: Rendering options.
        :param sink: Output.
        :param tracker: Cycle bookkeeping; a fresh one per top-level render when omitted.
        """
        self.config = config
        self.sink = sink
        self.tracker = tracker or CycleTracker(max_depth=config.max_depth)
        self.fields = config.fields or get_field_registry()

    def render(self, value: Any, indent: str = "") -> None:
        """
        Write `value` to the sink, with nested lines prefixed by `indent` plus nesting.

        The first line is not prefixed; the caller has already positioned it.

        :param value: Any object.
        :param indent: Prefix of the line on which the value starts.
        :raises RenderDepthError: If nesting exceeds config.max_depth.
        :raises FieldAccessError: If a composite field cannot be read.
        """
        category = classify(value)
        if not category.tracks_identity:
            self._render_untracked(value, category, indent)
            return

        obj_id = id(value)
        if self.tracker.is_active(obj_id):
            self.sink.write(CYCLE_DETECTED_FMT.format(obj_id=obj_id))
            self.tracker.mark_revisited(obj_id)
            return

        with self.tracker.visiting(obj_id):
            if category is Category.SEQUENCE:
                self._render_sequence(value, indent)
            elif category is Category.MAPPING:
                self._render_mapping(value, indent)
            else:
                self._render_composite(value, indent)

        if self.tracker.pop_revisited(obj_id):
            self.sink.write(CYCLE_MARKER_FMT.format(obj_id=obj_id))

    def _render_untracked(self, value: Any, category: Category, indent: str) -> None:
        if category is Category.TEXT:
            self._render_text(value, indent)
        else:
            self.sink.write(scalar_text(value, self.config.literals))

    def _render_text(self, text: str, indent: str) -> None:
        if len(text) <= self.config.wrap_width:
            self.sink.write(f'"{text}"')
            return
        lines = wrap_words(text, self.config.wrap_width)
        LOG.debug("wrapping %d chars into %d lines", len(text), len(lines))
        write_block(
            self.sink,
            lines,
            indent,
            self.config.indent,
            lambda line, _pad: self.sink.write(line),
            open=TRIPLE_QUOTES,
            close=TRIPLE_QUOTES,
        )

    def _render_sequence(self, items: Any, indent: str) -> None:
        write_block(
            self.sink,
            list(items),
            indent,
            self.config.indent,
            self.render,
            open="[",
            close="]",
            separator=",",
        )

    def _render_mapping(self, mapping: Mapping[Any, Any], indent: str) -> None:
        def _render_entry(entry: tuple[Any, Any], pad: str) -> None:
            key, value = entry
            self.render(key, pad)
            self.sink.write(" -> ")
            self.render(value, pad)

        write_block(
            self.sink,
            list(mapping.items()),
            indent,
            self.config.indent,
            _render_entry,
            open="{",
            close="}",
            separator=",",
        )

    def _render_composite(self, value: Any, indent: str) -> None:
        def _render_field(field: tuple[str, Any], pad: str) -> None:
            name, field_value = field
            self.sink.write(f"{name} = ")
            self.render(field_value, pad)

        type_name = type(value).__name__
        LOG.debug("rendering %s at depth %d", type_name, self.tracker.depth)
        write_block(
            self.sink,
            self.fields.enumerate_fields(value),
            indent,
            self.config.indent,
            _render_field,
            open=f"{type_name}(",
            close=")",
            separator=",",
        )


# End of file: src/mstair/prettyprint/xpretty/renderer.py
