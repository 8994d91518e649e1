# File: src/mstair/prettyprint/xlogging/frame_analyzer.py
"""
Stack frame snapshots for CoreLogger caller resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import CodeType, FrameType
from typing import Any


@dataclass
class StackFrameInfo:
    frame: FrameType
    """The frame this info was extracted from."""

    stack_position: int
    """Number of frames between the logging call and this frame."""

    f_locals_self: object | None
    """The 'self' local, if the frame is a method call."""

    f_locals_class_name: str
    """Class name if the frame is a method, otherwise an empty string."""

    f_code_name: str
    """Name of the function or method."""

    f_code_filename: str
    """Path to the source file ("<string>" and "<stdin>" included)."""

    @classmethod
    def from_raw_frame(cls, *, raw_frame: FrameType, stack_position: int) -> StackFrameInfo:
        """Snapshot a frame. Robust to interpreter teardown, where attributes may be missing."""

        def _get_code_attr(code: CodeType | None, attr: str, default: str = "") -> str:
            val = getattr(code, attr, default)
            return val if isinstance(val, str) else default

        def _get_class_name(locals_: dict[str, Any]) -> str:
            if (zelf := locals_.get("self")) is not None:
                return type(zelf).__name__
            if (cls_obj := locals_.get("cls")) and hasattr(cls_obj, "__name__"):
                return cls_obj.__name__
            return ""

        f_code: CodeType | None = getattr(raw_frame, "f_code", None)
        f_locals: dict[str, Any] = getattr(raw_frame, "f_locals", {})
        filename = _get_code_attr(f_code, "co_filename")
        return StackFrameInfo(
            frame=raw_frame,
            stack_position=stack_position,
            f_locals_self=f_locals.get("self"),
            f_locals_class_name=_get_class_name(f_locals),
            f_code_name=_get_code_attr(f_code, "co_name", "<unknown>"),
            f_code_filename=filename,
        )


# End of file: src/mstair/prettyprint/xlogging/frame_analyzer.py
