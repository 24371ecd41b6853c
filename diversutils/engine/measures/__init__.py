"""Diversity measure library.

DO NOT add explicit __all__ lists here - use auto_export instead.

Modules:
- measure_ids: Measure (stable integer ids) and Family
- entropy_measures / index_measures / disparity_measures: the measures
- catalog: MEASURES dispatch table and compute()
"""

from diversutils.common.auto_export import auto_export

__all__ = auto_export(__file__, __name__, globals())
