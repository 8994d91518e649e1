"""
package: mstair.prettyprint.base
"""

# <AUTOGEN_INIT>
from mstair.prettyprint.base import (
    caller_module_name_and_level,
    config,
    constants,
    fs_helpers,
    types,
)


__all__ = [
    "caller_module_name_and_level",
    "config",
    "constants",
    "fs_helpers",
    "types",
]
# </AUTOGEN_INIT>
