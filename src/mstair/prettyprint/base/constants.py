# File: src/mstair/prettyprint/base/constants.py
from __future__ import annotations


DEFAULT_INDENT = 2
"""Spaces added per nesting level."""

DEFAULT_WRAP_WIDTH = 80
"""Strings longer than this are wrapped into a triple-quoted block."""

DEFAULT_MAX_DEPTH = 100
"""Nesting limit for sequences, mappings and composites in a single render."""

DEFAULT_LITERALS: tuple[str, str, str] = ("None", "True", "False")
"""Textual forms of (None, True, False)."""

LINE_TERMINATOR = "\n"


# Environment variable names

K_PRETTYPRINT_INDENT = "PRETTYPRINT_INDENT"
K_PRETTYPRINT_MAX_DEPTH = "PRETTYPRINT_MAX_DEPTH"
K_PRETTYPRINT_WRAP_WIDTH = "PRETTYPRINT_WRAP_WIDTH"

# Rendering tokens

CYCLE_DETECTED_FMT = "cyclic reference detected for {obj_id}"
CYCLE_MARKER_FMT = "[$id={obj_id}]"
TRIPLE_QUOTES = '"""'


# End of file: src/mstair/prettyprint/base/constants.py
