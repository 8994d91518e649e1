# File: src/mstair/prettyprint/base/caller_module_name_and_level.py

import inspect
from types import FrameType


__all__ = [
    "caller_module_name_and_level",
]


def caller_module_name_and_level(
    *, stacklevel: int = 1, skip_module_frames: bool = True
) -> tuple[str, int]:
    """
    Resolve the name of the calling module and the number of frames walked to reach it.

    Used by create_logger() when no logger name is given, so that
    `create_logger(None)` inside `mstair.prettyprint.xpretty.sink` yields a
    logger named after that module.

    :param stacklevel: Number of meaningful (non-<module>) frames to skip.
    :param skip_module_frames: Skip top-level `<module>` frames. Default is True.
    :return tuple[str, int]: (module name or "", number of frames walked from this call)
    :raises ValueError: If stacklevel is less than 1.
    """
    if stacklevel < 1:
        raise ValueError("stacklevel must be greater than 0")

    frame: FrameType | None = inspect.currentframe()
    walked = 0
    try:
        for _ in range(stacklevel):
            while skip_module_frames and frame and frame.f_code.co_name == "<module>":
                frame = frame.f_back
                walked += 1
            if not frame:
                break
            frame = frame.f_back
            walked += 1

        name = ""
        if frame:
            module = inspect.getmodule(frame)
            if module and module.__name__:
                name = module.__name__
        return name, walked
    finally:
        # frame -> f_locals -> frame reference cycle
        del frame


# End of file: src/mstair/prettyprint/base/caller_module_name_and_level.py
