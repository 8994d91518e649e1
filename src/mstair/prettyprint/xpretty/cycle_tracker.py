# File: src/mstair/prettyprint/xpretty/cycle_tracker.py
"""
Per-render identity bookkeeping for cycle detection.

An identity sits in `visited` only while its subtree is being rendered, so a
value shared by two sibling branches is printed twice, while a value that
contains itself is reported as a cycle. `revisited` collects identities that
were hit while active; the outer occurrence then writes a marker.

Example:
    >>> tracker = CycleTracker(max_depth=10)
    >>> items = []
    >>> with tracker.visiting(id(items)):
    ...     assert tracker.is_active(id(items))
    >>> tracker.is_active(id(items))
    False
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from mstair.prettyprint.base.constants import DEFAULT_MAX_DEPTH
from mstair.prettyprint.xlogging.logger_factory import create_logger
from mstair.prettyprint.xpretty.model import RenderDepthError


__all__ = ["CycleTracker"]

LOG = create_logger(__name__)


class CycleTracker:
    """Visited/revisited identity sets for one top-level render."""

    visited: set[int]
    """Identities on the current render path."""

    revisited: set[int]
    """Identities referenced again while still on the path."""

    depth: int
    """Number of tracked values on the current path."""

    max_depth: int

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.visited = set()
        self.revisited = set()
        self.depth = 0
        self.max_depth = max_depth

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(depth={self.depth}, "
            f"visited={len(self.visited)}, revisited={len(self.revisited)})"
        )

    def is_active(self, obj_id: int) -> bool:
        """True if the identity is an ancestor of the value being rendered."""
        return obj_id in self.visited

    def mark_revisited(self, obj_id: int) -> None:
        LOG.debug("cycle back to id=%d at depth %d", obj_id, self.depth)
        self.revisited.add(obj_id)

    def pop_revisited(self, obj_id: int) -> bool:
        """Remove the identity from `revisited`, returning whether it was there."""
        if obj_id in self.revisited:
            self.revisited.remove(obj_id)
            return True
        return False

    @contextmanager
    def visiting(self, obj_id: int) -> Iterator[None]:
        """
        Mark the identity active for the duration of the block.

        The identity is removed on exit, including when rendering raises.

        :param obj_id: id() of the value about to be rendered.
        :raises RenderDepthError: If entering would exceed `max_depth`.
        """
        if self.depth >= self.max_depth:
            LOG.error("nesting exceeds max_depth=%d", self.max_depth)
            raise RenderDepthError(self.max_depth)
        self.visited.add(obj_id)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1
            self.visited.discard(obj_id)


# End of file: src/mstair/prettyprint/xpretty/cycle_tracker.py
