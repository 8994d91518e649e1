# File: src/mstair/prettyprint/base/fs_helpers.py
"""
Filesystem helpers used by the configuration and logging layers.

- fs_load_dotenv(): merge a `.env` file into os.environ before settings are read.
- fs_find_pyproject_toml(): locate the project root so log records show short paths.
"""

from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path
from typing import IO, TypeAlias

import dotenv


StrPath: TypeAlias = str | os.PathLike[str]

_fs_pyproject_toml_cache: dict[Path, Path | None] = {}


def fs_find_pyproject_toml(
    *,
    start_dir: Path | None = None,
    strict: bool = False,
    warn: bool = False,
) -> Path | None:
    """
    Return the absolute path of the nearest `pyproject.toml` file.

    :param start_dir: The directory to start searching from, default is the current working directory.
    :param strict: If True, raises `FileNotFoundError` if the file is not found, default is False.
    :param warn: If True, emits a `UserWarning` if the file is not found, default is False.
    :return: The absolute path of the nearest `pyproject.toml` file, or None.
    :raises FileNotFoundError: If no file is found and `strict` is True.
    """
    start_dir = (start_dir or Path.cwd()).absolute()
    if start_dir in _fs_pyproject_toml_cache:
        cached = _fs_pyproject_toml_cache[start_dir]
        if cached is not None or not strict:
            return cached

    for dir in [start_dir, *start_dir.parents]:
        if not dir.is_dir():
            continue
        candidate = dir / "pyproject.toml"
        if candidate.is_file():
            _fs_pyproject_toml_cache[start_dir] = candidate
            return candidate

    _fs_pyproject_toml_cache[start_dir] = None
    if strict:
        raise FileNotFoundError(f"No pyproject.toml found for {start_dir}")
    if warn:
        warnings.warn(
            message=f"No pyproject.toml found for {start_dir}.",
            category=UserWarning,
            stacklevel=2,
        )
    return None


def fs_load_dotenv(
    *,
    logger: logging.Logger | None = None,
    dotenv_path: StrPath | None = None,
    stream: IO[str] | None = None,
    verbose: bool = False,
    override: bool = False,
    interpolate: bool = True,
    encoding: str | None = "utf-8",
) -> bool:
    """
    Parse a .env file and then load all the variables found as environment variables.

    Existing variables win unless `override` is True, so an exported
    PRETTYPRINT_INDENT always beats the one in `.env`.

    :param logger: Logger to use for warnings and info messages, if supplied verbose is enabled.
    :param dotenv_path: Absolute or relative path to .env file.
    :param stream: Text stream (such as `io.StringIO`) with .env content, used if `dotenv_path` is `None`.
    :param verbose: Whether to output a warning the .env file is missing.
    :param override: Whether to override the environment variables with the variables from the `.env` file.
    :param interpolate: Whether to interpolate environment variables in the .env file.
    :return: True if at least one environment variable is set else False
    """
    if logger is not None:
        dotenv.main.logger = logger
        verbose = True
    return dotenv.load_dotenv(
        dotenv_path=dotenv_path,
        stream=stream,
        verbose=verbose,
        override=override,
        interpolate=interpolate,
        encoding=encoding,
    )


# End of file: src/mstair/prettyprint/base/fs_helpers.py
