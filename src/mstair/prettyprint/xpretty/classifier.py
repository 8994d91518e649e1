# File: src/mstair/prettyprint/xpretty/classifier.py
"""
Assigns every value exactly one rendering Category.

Order matters: a str is a Collection and a Mapping is a Collection, so the
narrower checks run first.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from mstair.prettyprint.base.types import BYTES_LIKE_TYPES, SCALAR_TYPES
from mstair.prettyprint.xpretty.model import Category


__all__ = ["classify", "scalar_text"]


def classify(value: Any) -> Category:
    """
    Return the rendering category of `value`. Never raises.

    :param value: Any object.
    :return Category: MAPPING, TEXT, SEQUENCE, SCALAR or COMPOSITE, checked in that order.
    """
    if isinstance(value, Mapping):
        return Category.MAPPING
    if isinstance(value, str):
        return Category.TEXT
    if isinstance(value, Collection) and not isinstance(value, BYTES_LIKE_TYPES):
        return Category.SEQUENCE
    if isinstance(value, SCALAR_TYPES):
        return Category.SCALAR
    return Category.COMPOSITE


def scalar_text(value: Any, literals: tuple[str, str, str]) -> str:
    """
    Textual form of a scalar.

    :param value: A value classified as SCALAR.
    :param literals: Replacements for (None, True, False).
    :return str: The literal for None/True/False, otherwise str(value).
    """
    if value is None:
        return literals[0]
    if value is True:
        return literals[1]
    if value is False:
        return literals[2]
    return str(value)


# End of file: src/mstair/prettyprint/xpretty/classifier.py
