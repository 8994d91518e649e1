# File: src/mstair/prettyprint/base/config.py
"""
Execution context detection and typed environment lookups.

The logging layer consults these flags to decide whether to colorize output
(desktop mode) or to stay silent (analysis mode). Overrides are stored in
thread-local state so a test or tool can flip a flag without affecting other
threads.

Exports:
- analysis_mode_context(): context manager for analysis mode.
- in_analysis_mode(): check if analysis mode is active.
- in_test_mode(): check or override whether code is running under a test runner.
- in_desktop_mode(): check or override whether output goes to an interactive terminal.
- env_int(): read a positive integer setting from the environment.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


_tls = threading.local()


@dataclass
class TLSAttrs:
    """Thread-local flags for environment context."""

    in_code_analyzer: bool = False
    in_test_mode_override: bool | None = None
    in_desktop_mode_override: bool | None = None


def _get_tls() -> TLSAttrs:
    """Return the current thread's TLSAttrs instance, initializing if needed."""
    try:
        return _tls.state
    except AttributeError:
        _tls.state = TLSAttrs()
        return _tls.state


@contextmanager
def analysis_mode_context() -> Iterator[None]:
    """
    Context manager to enable code analysis mode temporarily.

    While active, CoreLogger drops every record. Nested contexts are supported.
    """
    tls = _get_tls()
    previous_state = tls.in_code_analyzer
    tls.in_code_analyzer = True
    try:
        yield
    finally:
        tls.in_code_analyzer = previous_state


def in_analysis_mode() -> bool:
    """Return True if code analysis mode is active on this thread."""
    return _get_tls().in_code_analyzer


def in_test_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Check if running under a test runner, with optional override.

    Detection order:
      1. Analysis mode check (always False).
      2. Explicit override (thread-local).
      3. Presence of pytest/unittest in sys.modules.
      4. Known environment variables (PYTEST_CURRENT_TEST, CI).

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if test mode is active, False otherwise.
    """
    if in_analysis_mode():
        return False

    tls = _get_tls()
    if unset_override:
        tls.in_test_mode_override = None
    if override is not None:
        tls.in_test_mode_override = override
        return override
    if tls.in_test_mode_override is not None:
        return tls.in_test_mode_override
    if "pytest" in sys.modules or "unittest" in sys.modules:
        return True

    env = os.environ
    return bool(env.get("PYTEST_CURRENT_TEST")) or env.get("CI") == "true"


def in_desktop_mode(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Determine if log output should carry terminal colors.

    Rules:
      - Explicit override wins.
      - False in analysis mode.
      - True in test mode.
      - Otherwise True only when stderr is a terminal.

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if desktop mode is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.in_desktop_mode_override = None
    if override is not None:
        tls.in_desktop_mode_override = override
        return override
    if tls.in_desktop_mode_override is not None:
        return tls.in_desktop_mode_override

    if in_analysis_mode():
        return False
    if in_test_mode():
        return True
    stream = sys.stderr
    return bool(stream is not None and hasattr(stream, "isatty") and stream.isatty())


def env_int(name: str, default: int, *, minimum: int = 1) -> int:
    """
    Read an integer setting from the environment.

    Missing variables return `default`. Values that are not integers, or are
    below `minimum`, are reported with a warning and replaced by `default`.

    :param name: Environment variable name.
    :param default: Value used when the variable is missing or invalid.
    :param minimum: Smallest accepted value.
    :return int: The configured value.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw, 10)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum:
        logging.getLogger(__name__).warning("Ignoring %s=%r: must be >= %d", name, raw, minimum)
        return default
    return value


# End of file: src/mstair/prettyprint/base/config.py
