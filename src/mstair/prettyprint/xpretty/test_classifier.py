# File: src/mstair/prettyprint/xpretty/test_classifier.py
"""Tests for value classification and scalar text."""

from __future__ import annotations

import dataclasses
import enum
import uuid
from collections import Counter, OrderedDict, deque
from datetime import date, datetime, timedelta
from decimal import Decimal
from fractions import Fraction
from pathlib import Path
from types import MappingProxyType
from typing import Any

import pytest

from mstair.prettyprint.xpretty.classifier import classify, scalar_text
from mstair.prettyprint.xpretty.model import Category


class Suit(enum.Enum):
    HEARTS = "h"


@dataclasses.dataclass
class Card:
    suit: Suit


@pytest.mark.unit
@pytest.mark.parametrize(
    "value",
    [
        None,
        True,
        0,
        -1.5,
        2j,
        Decimal("1"),
        Fraction(1, 3),
        uuid.UUID(int=0),
        b"",
        bytearray(b"x"),
        memoryview(b"x"),
        Suit.HEARTS,
        date(2024, 1, 2),
        datetime(2024, 1, 2),
        timedelta(1),
        Path("."),
        int,
    ],
)
def test_scalars(value: Any) -> None:
    assert classify(value) is Category.SCALAR


@pytest.mark.unit
@pytest.mark.parametrize("value", ["", "text"])
def test_text(value: Any) -> None:
    assert classify(value) is Category.TEXT


@pytest.mark.unit
@pytest.mark.parametrize(
    "value",
    [[], (1,), {1}, frozenset(), deque(), range(0), {"a": 1}.keys(), {"a": 1}.values()],
)
def test_sequences(value: Any) -> None:
    assert classify(value) is Category.SEQUENCE


@pytest.mark.unit
@pytest.mark.parametrize(
    "value", [{}, OrderedDict(), Counter("ab"), MappingProxyType({"k": 1})]
)
def test_mappings(value: Any) -> None:
    assert classify(value) is Category.MAPPING


@pytest.mark.unit
@pytest.mark.parametrize("value", [Card(Suit.HEARTS), object(), ValueError("x"), len])
def test_composites(value: Any) -> None:
    assert classify(value) is Category.COMPOSITE


@pytest.mark.unit
def test_only_containers_and_composites_track_identity() -> None:
    tracked = {c for c in Category if c.tracks_identity}
    assert tracked == {Category.SEQUENCE, Category.MAPPING, Category.COMPOSITE}


@pytest.mark.unit
def test_scalar_text_uses_literals_for_singletons_only() -> None:
    literals = ("nil", "yes", "no")
    assert [scalar_text(v, literals) for v in (None, True, False, 1, 0)] == [
        "nil",
        "yes",
        "no",
        "1",
        "0",
    ]


# End of file: src/mstair/prettyprint/xpretty/test_classifier.py
