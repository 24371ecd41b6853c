"""Common utilities shared by the diversutils engine.

DO NOT add explicit __all__ lists here - use auto_export instead.
See diversutils/common/auto_export.py for documentation on how this works.
"""

from diversutils.common.auto_export import auto_export

__all__ = auto_export(__file__, __name__, globals())
