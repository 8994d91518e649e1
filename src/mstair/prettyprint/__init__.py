"""
package: mstair.prettyprint
"""

# <AUTOGEN_INIT>
from mstair.prettyprint import (
    base,
    xlogging,
    xpretty,
)


__all__ = [
    "base",
    "xlogging",
    "xpretty",
]
# </AUTOGEN_INIT>

from mstair.prettyprint.xpretty.model import PrettyConfig
from mstair.prettyprint.xpretty.pp_api import PrettyPrinter, pformat, pp, pp_chain


__all__ += ["PrettyConfig", "PrettyPrinter", "pformat", "pp", "pp_chain"]

__version__ = "0.1.0"
