"""
Environment variable-driven log level configuration.

Two sources are supported:
- Pattern-based DSL strings in LOG_LEVEL / LOG_LEVELS, e.g.
  ``LOG_LEVELS="mstair.prettyprint.xpretty.*:DEBUG; root=WARNING"``
- Per-logger overrides in variables like LOG_LEVEL_MSTAIR_PRETTYPRINT_XPRETTY_SINK=TRACE
  (``_`` separates name parts, ``__`` stands for a literal underscore)

This module only resolves the desired level for a logger name. CoreLogger
never goes below the root logger's level; to see TRACE output, also call
initialize_root(level="TRACE").
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar, Final, NamedTuple

from mstair.prettyprint.base.fs_helpers import fs_load_dotenv
from mstair.prettyprint.xlogging.logger_constants import initialize_logger_constants


__all__ = ["LogLevelConfig"]

_LOG_VAR_FRAGMENT_SEPARATOR_RX: Final[re.Pattern[str]] = re.compile(r"[;, ]+")
_LOG_VAR_ASSIGNMENT_OPERATOR_RX: Final[re.Pattern[str]] = re.compile(r"[:=]+")

_log_level_config_instance: LogLevelConfig | None = None


@dataclass(slots=True)
class LogEnvVar:
    """
    Parsed representation of a log-level environment variable.

    The suffix after LOG_LEVEL / LOG_LEVELS names the target logger.
    """

    NAME_RX: ClassVar[re.Pattern[str]] = re.compile(
        r"""
        ^(?P<BASENAME>LOG_LEVELS?)          # LOG_LEVEL or LOG_LEVELS
        (?P<SUFFIX>(?:_[A-Z][A-Z0-9_]*)*)$  # optional logger-name suffix
        """,
        re.VERBOSE,
    )

    name: str = field(default="", repr=False)
    module: str = field(default="", repr=True)
    value: str = field(default="", repr=False)

    @classmethod
    def from_env_var(cls, name: str, value: str) -> LogEnvVar | None:
        """Return a LogEnvVar if the given (name, value) is a log-level variable, else None."""
        re_match = cls.NAME_RX.match(name)
        if re_match is None:
            return None
        suffix = re_match["SUFFIX"].lstrip("_")
        if not suffix or suffix.upper() == "ROOT":
            module = ""
        else:
            module = suffix.replace("__", "\0").replace("_", ".").replace("\0", "_").lower()
        return cls(name=name, module=module, value=value)

    @classmethod
    def from_environ(cls) -> Iterator[LogEnvVar]:
        """Yield LogEnvVar instances for all matching environment variables."""
        fs_load_dotenv()
        for name, value in sorted(os.environ.items(), reverse=True):
            env_var = cls.from_env_var(name, value)
            if env_var:
                yield env_var


class LogEnvPatternLevel(NamedTuple):
    """Mapping from a logger-name pattern to an integer log level."""

    pattern: str
    level: int


@dataclass(slots=True)
class LogLevelConfig:
    """
    Resolve log levels using environment variables.

    Precedence: exact > ancestor > glob > default > fallback.
    """

    pattern_to_level: dict[str, int] = field(default_factory=dict)
    _level_names_mapping: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.pattern_to_level:
            self.update_from_environment()

    def update_from_environment(self) -> None:
        """Rebuild pattern->level mappings from the current environment."""
        self._level_names_mapping.clear()
        self.pattern_to_level.clear()
        for var in LogEnvVar.from_environ():
            for dsl in self.parse_log_var(var):
                self.pattern_to_level[dsl.pattern] = dsl.level

    def get_effective_level(self, logger_name: str, *, default: int = logging.WARNING) -> int:
        """Return the configured level for a logger name."""
        name_lc = logger_name.lower()
        lc_map: dict[str, int] = {k.lower(): v for k, v in self.pattern_to_level.items() if k}

        if name_lc in lc_map:
            return lc_map[name_lc]

        for anc in self._ancestors(name_lc):
            if anc in lc_map:
                return lc_map[anc]

        best_level: int | None = None
        best_score = -1
        for pat, level in lc_map.items():
            if not self._is_glob_pattern(pat) or not fnmatch.fnmatch(name_lc, pat):
                continue
            score = self._glob_specificity(pat)
            if score > best_score:
                best_score, best_level = score, level
        if best_level is not None:
            return best_level

        return self.pattern_to_level.get("", default)

    @classmethod
    def get_instance(cls) -> LogLevelConfig:
        """Return the shared LogLevelConfig, creating it on first use."""
        global _log_level_config_instance
        if _log_level_config_instance is None:
            initialize_logger_constants()
            _log_level_config_instance = LogLevelConfig()
        return _log_level_config_instance

    @property
    def level_names_mapping(self) -> dict[str, int]:
        """Uppercase level-name mapping, including TRACE."""
        initialize_logger_constants()
        if not self._level_names_mapping:
            self._level_names_mapping = {
                k.upper(): v
                for k, v in logging.getLevelNamesMapping().items()
                if isinstance(k, str) and isinstance(v, int)
            }
        return self._level_names_mapping

    def parse_log_var(self, var: LogEnvVar) -> Iterator[LogEnvPatternLevel]:
        """Parse one LogEnvVar into pattern->level mappings, skipping unknown level names."""
        for fragment in _LOG_VAR_FRAGMENT_SEPARATOR_RX.split(var.value):
            fragment = fragment.strip()
            if not fragment:
                continue

            parts = _LOG_VAR_ASSIGNMENT_OPERATOR_RX.split(fragment, maxsplit=1)
            if len(parts) == 2:
                pattern = parts[0].strip().strip("'\"")
                level_name = parts[1].strip().strip("'\"").upper()
            else:
                pattern = ""
                level_name = parts[0].strip().strip("'\"").upper()

            if var.module:
                pattern = var.module if pattern in {"", "root"} else f"{var.module}.{pattern}"
            if pattern.lower() == "root":
                pattern = ""

            level_num = self.level_names_mapping.get(level_name, logging.NOTSET)
            if level_num == logging.NOTSET:
                continue
            yield LogEnvPatternLevel(pattern, level_num)

    @staticmethod
    def _is_glob_pattern(pattern: str) -> bool:
        return any(ch in pattern for ch in "*?[")

    @staticmethod
    def _ancestors(logger_name: str) -> list[str]:
        """Return ancestor names of a dotted logger path, most specific first."""
        parts = logger_name.split(".")
        return [".".join(parts[:i]) for i in range(len(parts) - 1, 0, -1)]

    @staticmethod
    def _glob_specificity(pattern: str) -> int:
        """Length of the fixed prefix before the first wildcard."""
        return min((i for i, ch in enumerate(pattern) if ch in "*?["), default=len(pattern))


# End of file: src/mstair/prettyprint/xlogging/logger_util.py
