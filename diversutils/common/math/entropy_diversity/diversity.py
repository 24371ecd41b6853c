"""Diversity functions (Hill numbers).

Provides:
- q_diversity: Hill number D_q (effective number of categories)
- q_evenness: Hill's ratio D_a / D_b
"""

from __future__ import annotations

from ..num_types import Num, Nums, is_numpy, is_tensor
from .diversity_impl import (
    _q_diversity_native,
    _q_diversity_numpy,
    _q_diversity_torch,
    _q_evenness_native,
    _q_evenness_numpy,
    _q_evenness_torch,
)


def q_diversity(logprobs: Nums, q: float) -> Num:
    """Hill number D_q: effective number of categories of order q.

    D_q = exp(H_q) where H_q is Rényi entropy.

    Standard indices are special cases:
        q = 0:  richness S  (count of categories with p > 0)
        q = 1:  exp(H)      (Shannon diversity, via L'Hôpital)
        q = 2:  1 / Σpᵢ²    (inverse Simpson)
        q → +∞: 1 / max pᵢ  (inverse Berger-Parker)

    Range: [1, n] where n = number of categories.
    Monotonically non-increasing in q.
    """
    if is_tensor(logprobs):
        return _q_diversity_torch(logprobs, q)
    if is_numpy(logprobs):
        return _q_diversity_numpy(logprobs, q)
    return _q_diversity_native(logprobs, q)


def q_evenness(logprobs: Nums, a: float, b: float) -> Num:
    """Hill (1973) evenness E_{a,b} = D_a / D_b."""
    if is_tensor(logprobs):
        return _q_evenness_torch(logprobs, a, b)
    if is_numpy(logprobs):
        return _q_evenness_numpy(logprobs, a, b)
    return _q_evenness_native(logprobs, a, b)
