__title__ = 'argot'
__license__ = 'MIT'
__version__ = "0.1.0"

from .faults import *
from .slots import *
from .specs import *
from .parser import *
from .printers import *
from .extras import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the slots
__all__ += slots.__all__  # type: ignore[attr-defined]
# Load the exposed API of the specs
__all__ += specs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parser
__all__ += parser.__all__  # type: ignore[attr-defined]
# Load the exposed API of the printers
__all__ += printers.__all__  # type: ignore[attr-defined]
# Load the exposed API of the extras
__all__ += extras.__all__  # type: ignore[attr-defined]
