"""Entropy functions.

Provides:
- renyi_entropy: generalized entropy of order q
- shannon_entropy: special case q=1
- tsallis_entropy: q-logarithmic entropy
- patil_taillie_entropy: Patil & Taillie (1982) diversity of order β
- good_entropy: Good (1953) two-parameter entropy
"""

from __future__ import annotations

from ..num_types import Num, Nums, is_numpy, is_tensor
from .entropy_impl import (
    _good_entropy_native,
    _good_entropy_numpy,
    _good_entropy_torch,
    _renyi_entropy_native,
    _renyi_entropy_numpy,
    _renyi_entropy_torch,
    _tsallis_entropy_native,
    _tsallis_entropy_numpy,
    _tsallis_entropy_torch,
)


def renyi_entropy(logprobs: Nums, q: float) -> Num:
    """Rényi entropy of order q (numerically stable, takes logprobs).

    H_q = (1/(1-q)) · log(Σ pᵢ^q)

    Special cases:
        q = 0:  log(S)      (Hartley entropy, log of richness)
        q = 1:  H           (Shannon entropy, via L'Hôpital)
        q = 2:  -log(Σpᵢ²)  (collision entropy)
        q → ∞:  -log(max pᵢ) (min-entropy)

    Connection to Hill numbers: D_q = exp(H_q)

    Args:
        logprobs: Log-probabilities (Sequence[float], np.ndarray, or torch.Tensor)
        q: Order parameter
    """
    if is_tensor(logprobs):
        return _renyi_entropy_torch(logprobs, q)
    if is_numpy(logprobs):
        return _renyi_entropy_numpy(logprobs, q)
    return _renyi_entropy_native(logprobs, q)


def shannon_entropy(logprobs: Nums) -> Num:
    """Shannon entropy (= renyi_entropy with q=1).

    H = -Σ pᵢ log pᵢ = -Σ exp(lpᵢ) * lpᵢ
    """
    return renyi_entropy(logprobs, q=1.0)


def tsallis_entropy(logprobs: Nums, q: float) -> Num:
    """Tsallis entropy of order q.

    S_q = Σ pᵢ ln_q(1/pᵢ),   ln_q(x) = (x^(1-q) - 1) / (1 - q)
        = (Σ pᵢ^q - 1) / (1 - q)

    q = 1 recovers Shannon entropy. The matching Hill number is
    D_q = (1 - (q-1)·S_q)^(1/(1-q)).
    """
    if is_tensor(logprobs):
        return _tsallis_entropy_torch(logprobs, q)
    if is_numpy(logprobs):
        return _tsallis_entropy_numpy(logprobs, q)
    return _tsallis_entropy_native(logprobs, q)


def patil_taillie_entropy(logprobs: Nums, beta: float) -> Num:
    """Patil-Taillie diversity of order β.

    Δ_β = (1 - Σ pᵢ^(β+1)) / β

    Equal to the Tsallis entropy of order β + 1; β = 0 is Shannon entropy,
    β = 1 is the Gini-Simpson index.
    """
    return tsallis_entropy(logprobs, q=beta + 1.0)


def good_entropy(logprobs: Nums, alpha: float, beta: float) -> Num:
    """Good's generalized entropy.

    G_{α,β} = Σ pᵢ^α (-log pᵢ)^β

    G_{1,1} is Shannon entropy and G_{α,0} = Σ pᵢ^α. Returns nan when β < 0
    and some pᵢ = 1.
    """
    if is_tensor(logprobs):
        return _good_entropy_torch(logprobs, alpha, beta)
    if is_numpy(logprobs):
        return _good_entropy_numpy(logprobs, alpha, beta)
    return _good_entropy_native(logprobs, alpha, beta)
