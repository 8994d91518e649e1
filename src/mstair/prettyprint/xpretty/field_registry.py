# File: src/mstair/prettyprint/xpretty/field_registry.py
"""
Named-field enumeration for composite values.

A FieldRegistry holds an ordered list of enumerator functions. The first one
that recognizes a value returns its fields as (name, value) pairs, in
declaration order. Names synthesized by the interpreter (``__dunder__``) are
never reported.

Example:
    >>> registry = FieldRegistry()
    >>> @registry.register
    ... def money_fields(value, /):
    ...     if isinstance(value, Money):
    ...         return [("amount", f"{value.cents / 100:.2f}"), ("currency", value.currency)]
    ...     return None
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from functools import cache
from typing import Any

from mstair.prettyprint.xlogging.logger_factory import create_logger
from mstair.prettyprint.xpretty.model import FieldAccessError


__all__ = [
    "FieldEnumerator",
    "FieldRegistry",
    "get_field_registry",
    "read_field",
]

LOG = create_logger(__name__)

FieldEnumerator = Callable[[Any], list[tuple[str, Any]] | None]
"""
Return the named fields of a value, or None to defer to the next enumerator.

Enumerators should read attributes with read_field() so access failures
surface as FieldAccessError.
"""

_SLOT_NAMES_EXCLUDED: frozenset[str] = frozenset({"__dict__", "__weakref__"})


def read_field(value: Any, name: str, attr_name: str | None = None) -> Any:
    """
    Read one attribute, converting any failure into FieldAccessError.

    :param value: The composite value.
    :param name: The field name as displayed.
    :param attr_name: The attribute to read, if it differs from `name` (mangled slots).
    :return Any: The attribute value.
    :raises FieldAccessError: If the attribute is unset or its getter raises.
    """
    try:
        return getattr(value, attr_name or name)
    except Exception as e:
        reason = f"{type(e).__name__}: {e}"
        LOG.error("Cannot read %s.%s: %s", type(value).__name__, name, reason)
        raise FieldAccessError(type(value).__name__, name, reason) from e


def is_synthesized_name(name: str) -> bool:
    """True for interpreter-owned names such as __class__ or __module__."""
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


class FieldRegistry:
    """Maintains an ordered, mutable registry of field enumerators."""

    enumerators: list[FieldEnumerator]
    """Enumerators in priority order; the first non-None result wins."""

    def __init__(self, *, enumerators: list[FieldEnumerator] | None = None) -> None:
        """
        :param enumerators: Extra enumerators, registered ahead of the built-ins in the given order.
        """
        self.enumerators = []
        self.reset()
        for idx, fn in enumerate(enumerators or []):
            self.register(fn, idx=idx)

    def enumerate_fields(self, value: Any) -> list[tuple[str, Any]]:
        """
        Return the user-visible fields of `value` as (name, value) pairs.

        :param value: A value classified as COMPOSITE.
        :return list[tuple[str, Any]]: Fields in declaration order, dunder names removed.
        :raises FieldAccessError: If reading a field fails.
        """
        for enumerator in self.enumerators:
            fields = enumerator(value)
            if fields is None:
                continue
            visible = [(name, v) for name, v in fields if not is_synthesized_name(name)]
            LOG.debug(
                "%s: %d field(s) via %s()",
                type(value).__name__,
                len(visible),
                getattr(enumerator, "__name__", "?"),
            )
            return visible
        return []

    def reset(self) -> None:
        """Reset and (re)register the built-in enumerators."""
        self.enumerators.clear()
        self.register(self._fields_of_plain_object)
        self.register(self._fields_of_slotted_object)
        self.register(self._fields_of_dataclass)

    def register(self, func: FieldEnumerator, idx: int = 0) -> FieldEnumerator:
        """
        Register an enumerator, with highest priority by default. Usable as a decorator.

        Registering a function that is already present moves it to `idx`.
        """
        if func in self.enumerators:
            del self.enumerators[self.enumerators.index(func)]
        self.enumerators.insert(idx, func)
        return func

    @staticmethod
    def _fields_of_dataclass(value: Any) -> list[tuple[str, Any]] | None:
        """Dataclass fields in declaration order, skipping those declared with repr=False."""
        if isinstance(value, type) or not dataclasses.is_dataclass(value):
            return None
        return [(f.name, read_field(value, f.name)) for f in dataclasses.fields(value) if f.repr]

    @staticmethod
    def _fields_of_slotted_object(value: Any) -> list[tuple[str, Any]] | None:
        """Slots from the base class down, then any instance __dict__ entries."""
        mro = type(value).__mro__
        if not any("__slots__" in vars(klass) for klass in mro):
            return None

        fields: list[tuple[str, Any]] = []
        for klass in reversed(mro):
            slots = vars(klass).get("__slots__", ())
            for name in (slots,) if isinstance(slots, str) else slots:
                if name in _SLOT_NAMES_EXCLUDED:
                    continue
                attr_name = name
                if name.startswith("__") and not name.endswith("__"):
                    attr_name = f"_{klass.__name__.lstrip('_')}{name}"
                fields.append((name, read_field(value, name, attr_name)))

        instance_dict = getattr(value, "__dict__", None)
        if isinstance(instance_dict, dict):
            fields.extend(instance_dict.items())
        return fields

    @staticmethod
    def _fields_of_plain_object(value: Any) -> list[tuple[str, Any]] | None:
        """Instance attributes in insertion order."""
        instance_dict = getattr(value, "__dict__", None)
        if not isinstance(instance_dict, dict):
            return None
        return list(instance_dict.items())


@cache
def get_field_registry() -> FieldRegistry:
    """Return the shared FieldRegistry used when a PrettyConfig names none."""
    return FieldRegistry()


# End of file: src/mstair/prettyprint/xpretty/field_registry.py
