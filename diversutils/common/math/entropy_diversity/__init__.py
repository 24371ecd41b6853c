"""Core entropy and diversity theory (Rényi / Tsallis / Hill framework).

DO NOT add explicit __all__ lists here - use auto_export instead.
See diversutils/common/auto_export.py for documentation on how this works.
"""

from diversutils.common.auto_export import auto_export

__all__ = auto_export(__file__, __name__, globals())

# Explicitly re-export _EPS (underscore-prefixed but needed by other modules)
from .core import _EPS

__all__ = __all__ + ["_EPS"]
