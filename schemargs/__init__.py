__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'schemargs'
__author__ = 'Schemargs contributors'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

from .values import *
from .arguments import *
from .schemas import *
from .resolver import *
from .tokenizer import *
from .help import *
from .parsers import *
from .commands import *
from .runner import *
from .faults import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the value types
__all__ += values.__all__  # type: ignore[attr-defined]
# Load the exposed API of the arguments
__all__ += arguments.__all__  # type: ignore[attr-defined]
# Load the exposed API of the schemas
__all__ += schemas.__all__  # type: ignore[attr-defined]
# Load the exposed API of the resolver
__all__ += resolver.__all__  # type: ignore[attr-defined]
# Load the exposed API of the tokenizer
__all__ += tokenizer.__all__  # type: ignore[attr-defined]
# Load the exposed API of the help renderer
__all__ += help.__all__  # type: ignore[attr-defined]
# Load the exposed API of the parsers
__all__ += parsers.__all__  # type: ignore[attr-defined]
# Load the exposed API of the commands
__all__ += commands.__all__  # type: ignore[attr-defined]
# Load the exposed API of the runner
__all__ += runner.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
