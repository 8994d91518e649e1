# File: src/mstair/prettyprint/base/types.py

from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any, Final, Protocol, TypeAlias, runtime_checkable
from uuid import UUID


# ---------- Runtime tuples (for isinstance/issubclass) ----------

NUMERIC_TYPES: Final[tuple[type, ...]] = (int, float, complex, Decimal, Fraction)
PRIMITIVE_NON_STRING_TYPES: Final[tuple[type, ...]] = (
    *NUMERIC_TYPES,
    bool,
    UUID,
    type(None),
)
PRIMITIVE_TYPES: Final[tuple[type, ...]] = (*PRIMITIVE_NON_STRING_TYPES, str)
BYTES_LIKE_TYPES: Final[tuple[type, ...]] = (bytes, bytearray, memoryview)

ATOMIC_HOST_TYPES: Final[tuple[type, ...]] = (
    *BYTES_LIKE_TYPES,
    Enum,
    date,  # also covers datetime
    time,
    timedelta,
    PurePath,
    type,
)
"""Library types with no user-meaningful fields; printed by str() like primitives."""

SCALAR_TYPES: Final[tuple[type, ...]] = PRIMITIVE_NON_STRING_TYPES + ATOMIC_HOST_TYPES


@runtime_checkable
class SupportsWrite(Protocol):
    """A text destination with a file-like write()."""

    def write(self, s: str, /) -> Any: ...


@runtime_checkable
class SupportsAppend(Protocol):
    """A text destination with a list-like append()."""

    def append(self, s: str, /) -> Any: ...


TextDestination: TypeAlias = SupportsWrite | SupportsAppend


# End of file: src/mstair/prettyprint/base/types.py
