# File: src/mstair/prettyprint/xpretty/test_cycle_tracker.py
"""Tests for CycleTracker bookkeeping and the depth guard."""

from __future__ import annotations

import pytest

from mstair.prettyprint.xpretty.cycle_tracker import CycleTracker
from mstair.prettyprint.xpretty.model import RenderDepthError


@pytest.mark.unit
def test_identity_is_active_only_inside_visiting() -> None:
    tracker = CycleTracker(max_depth=5)
    with tracker.visiting(101):
        assert tracker.is_active(101)
        assert tracker.depth == 1
        with tracker.visiting(202):
            assert tracker.visited == {101, 202}
        assert not tracker.is_active(202)
    assert tracker.visited == set()
    assert tracker.depth == 0


@pytest.mark.unit
def test_identity_is_removed_when_rendering_raises() -> None:
    tracker = CycleTracker()
    with pytest.raises(KeyError), tracker.visiting(7):
        raise KeyError("boom")
    assert not tracker.is_active(7)
    assert tracker.depth == 0


@pytest.mark.unit
def test_revisited_is_reported_once() -> None:
    tracker = CycleTracker()
    tracker.mark_revisited(9)
    assert tracker.pop_revisited(9) is True
    assert tracker.pop_revisited(9) is False
    assert tracker.pop_revisited(10) is False


@pytest.mark.unit
def test_depth_guard_raises_before_entering() -> None:
    tracker = CycleTracker(max_depth=2)
    with tracker.visiting(1), tracker.visiting(2):
        with pytest.raises(RenderDepthError, match="max_depth=2"):
            with tracker.visiting(3):
                pass  # pragma: no cover
        assert not tracker.is_active(3)
        assert tracker.depth == 2
    assert tracker.visited == set()


@pytest.mark.unit
def test_trackers_are_independent() -> None:
    first, second = CycleTracker(), CycleTracker()
    with first.visiting(1):
        assert not second.is_active(1)


# End of file: src/mstair/prettyprint/xpretty/test_cycle_tracker.py
