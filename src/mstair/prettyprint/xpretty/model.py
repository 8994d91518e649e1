# File: src/mstair/prettyprint/xpretty/model.py
"""
Data model for pretty-printing: value categories, configuration, and errors.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Any, Self

from mstair.prettyprint.base.config import env_int
from mstair.prettyprint.base.constants import (
    DEFAULT_INDENT,
    DEFAULT_LITERALS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_WRAP_WIDTH,
    K_PRETTYPRINT_INDENT,
    K_PRETTYPRINT_MAX_DEPTH,
    K_PRETTYPRINT_WRAP_WIDTH,
)
from mstair.prettyprint.base.fs_helpers import fs_load_dotenv
from mstair.prettyprint.base.types import TextDestination


if TYPE_CHECKING:
    from mstair.prettyprint.xpretty.field_registry import FieldRegistry


__all__ = [
    "Category",
    "FieldAccessError",
    "PrettyConfig",
    "PrettyConfigError",
    "PrettyPrintError",
    "RenderDepthError",
]


class Category(enum.Enum):
    """Rendering category of a value. Each value has exactly one."""

    SCALAR = "scalar"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    COMPOSITE = "composite"

    @property
    def tracks_identity(self) -> bool:
        """True for categories that can contain themselves."""
        return self in (Category.SEQUENCE, Category.MAPPING, Category.COMPOSITE)


class PrettyPrintError(Exception):
    """Base class for pretty-printing failures."""


class PrettyConfigError(PrettyPrintError, ValueError):
    """A PrettyConfig field holds an unusable value."""


class FieldAccessError(PrettyPrintError, AttributeError):
    """Reading a named field of a composite value failed."""

    def __init__(self, type_name: str, field_name: str, reason: str) -> None:
        super().__init__(f"Cannot read {type_name}.{field_name}: {reason}")
        self.type_name = type_name
        self.field_name = field_name


class RenderDepthError(PrettyPrintError, RecursionError):
    """Nesting went deeper than PrettyConfig.max_depth."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Value nesting exceeds max_depth={max_depth}")
        self.max_depth = max_depth


@dataclasses.dataclass(frozen=True, slots=True)
class PrettyConfig:
    """
    Immutable rendering options.

    A config is passed explicitly to every render; process-wide defaults live
    in pp_api and are only changed on request, never as a side effect of pp().
    """

    indent: int = DEFAULT_INDENT
    """Spaces per nesting level."""

    write_to: TextDestination | None = None
    """Destination with write() or append(). None means the current sys.stdout."""

    wrap_width: int = DEFAULT_WRAP_WIDTH
    """Longer strings are wrapped into a triple-quoted block of lines this wide."""

    max_depth: int = DEFAULT_MAX_DEPTH
    """Nesting limit for sequences, mappings and composites."""

    literals: tuple[str, str, str] = DEFAULT_LITERALS
    """Textual forms of (None, True, False)."""

    fields: FieldRegistry | None = None
    """Field enumeration for composites. None means the shared registry."""

    def __post_init__(self) -> None:
        for name in ("indent", "wrap_width", "max_depth"):
            value: Any = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise PrettyConfigError(f"{name} must be a positive int, got {value!r}")
        if len(self.literals) != 3 or not all(isinstance(s, str) for s in self.literals):
            raise PrettyConfigError(f"literals must be 3 strings, got {self.literals!r}")

    def replace(self, **changes: Any) -> Self:
        """Return a copy with `changes` applied. None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise PrettyConfigError(f"Unknown PrettyConfig option(s): {sorted(unknown)}")
        return dataclasses.replace(self, **changes) if changes else self

    @classmethod
    def from_environment(cls) -> PrettyConfig:
        """
        Build a config from PRETTYPRINT_* environment variables (and `.env`).

        Malformed values are logged and replaced by the built-in defaults.
        """
        fs_load_dotenv()
        return cls(
            indent=env_int(K_PRETTYPRINT_INDENT, DEFAULT_INDENT),
            wrap_width=env_int(K_PRETTYPRINT_WRAP_WIDTH, DEFAULT_WRAP_WIDTH),
            max_depth=env_int(K_PRETTYPRINT_MAX_DEPTH, DEFAULT_MAX_DEPTH),
        )


# End of file: src/mstair/prettyprint/xpretty/model.py
