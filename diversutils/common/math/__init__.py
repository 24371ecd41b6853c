"""Math utilities for diversity measurement.

DO NOT add explicit __all__ lists here - use auto_export instead.

Module hierarchy:
- entropy_diversity/: Rényi, Shannon, Tsallis, Patil-Taillie and Good entropies,
  Hill numbers, log-sum-exp and probability conversions
- num_types: Type aliases (Num, Nums, Buffer) and dispatch guards

Usage:
    from diversutils.common.math import q_diversity, shannon_entropy, probs_to_logprobs
"""

from diversutils.common.auto_export import auto_export

__all__ = auto_export(__file__, __name__, globals())
