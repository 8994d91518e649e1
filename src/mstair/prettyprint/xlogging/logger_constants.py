# File: src/mstair/prettyprint/xlogging/logger_constants.py

import logging


K_KLASS_NAME = "klass_name"
K_COLOR = "color"

TRACE = logging.DEBUG - 1  # (9) every sink append is logged here; silent at DEBUG
SUPPRESS = -1  # Never shown, for internal bookkeeping records


_logging_constants_initialized = False


def initialize_logger_constants() -> None:
    """Register the custom level names with the logging module once."""
    global _logging_constants_initialized
    if _logging_constants_initialized:
        return
    _logging_constants_initialized = True
    for key, value in {"TRACE": TRACE, "SUPPRESS": SUPPRESS}.items():
        if key not in logging.getLevelNamesMapping():
            logging.addLevelName(value, key)


# End of file: src/mstair/prettyprint/xlogging/logger_constants.py
