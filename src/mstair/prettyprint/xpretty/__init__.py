"""
package: mstair.prettyprint.xpretty
"""

# <AUTOGEN_INIT>
from mstair.prettyprint.xpretty import (
    classifier,
    cycle_tracker,
    field_registry,
    layout,
    model,
    pp_api,
    renderer,
    sink,
)


__all__ = [
    "classifier",
    "cycle_tracker",
    "field_registry",
    "layout",
    "model",
    "pp_api",
    "renderer",
    "sink",
]
# </AUTOGEN_INIT>
