__title__ = 'usagematch'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .faults import *
from .lists import *
from .matching import *
from .normalizer import *
from .patterns import *
from .transformer import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every engine module
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += lists.__all__  # type: ignore[attr-defined]
__all__ += matching.__all__  # type: ignore[attr-defined]
__all__ += normalizer.__all__  # type: ignore[attr-defined]
__all__ += patterns.__all__  # type: ignore[attr-defined]
__all__ += transformer.__all__  # type: ignore[attr-defined]
