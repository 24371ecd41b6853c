"""Implementation functions for entropy calculations.

Provides native/numpy/torch implementations of:
- _renyi_entropy: Rényi entropy of order q
- _tsallis_entropy: Tsallis (q-logarithmic) entropy of order q
- _good_entropy: Good's generalized entropy Σ pᵢ^α (-log pᵢ)^β
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import torch
from scipy.special import logsumexp as scipy_logsumexp

from .core_impl import _EPS, _log_sum_exp_native


# ── Rényi ─────────────────────────────────────────────────────────────────────


def _renyi_entropy_native(logprobs: Sequence[float], q: float) -> float:
    """Rényi entropy of order q (pure Python, takes logprobs)."""
    finite_lps = [lp for lp in logprobs if math.isfinite(lp)]
    if not finite_lps:
        return float("inf")

    # q = 0: Hartley entropy = log(count of non-zero)
    if q == 0:
        return math.log(len(finite_lps))

    # q = 1: Shannon entropy H = -Σ pᵢ log pᵢ = -Σ exp(lp) * lp
    if abs(q - 1.0) < _EPS:
        return -sum(math.exp(lp) * lp for lp in finite_lps)

    # q → ∞: min-entropy = -log(max p) = -max(lp)
    if q == float("inf"):
        return -max(finite_lps)

    # q → -∞: max-entropy = -log(min p) = -min(lp)
    if q == float("-inf"):
        return -min(finite_lps)

    # H_q = (1/(1-q)) * log(Σ exp(q * lp))
    log_sum = _log_sum_exp_native([q * lp for lp in finite_lps])
    return log_sum / (1.0 - q)


def _renyi_entropy_numpy(logprobs: np.ndarray, q: float) -> np.floating:
    """Rényi entropy of order q (NumPy, takes logprobs)."""
    finite_mask = np.isfinite(logprobs)
    if not finite_mask.any():
        return np.float64(float("inf"))

    finite_lps = logprobs[finite_mask]

    if q == 0:
        return np.log(len(finite_lps))

    if abs(q - 1.0) < _EPS:
        probs = np.exp(finite_lps)
        return -(probs * finite_lps).sum()

    if q == float("inf"):
        return -finite_lps.max()

    if q == float("-inf"):
        return -finite_lps.min()

    log_sum = scipy_logsumexp(q * finite_lps)
    return log_sum / (1.0 - q)


def _renyi_entropy_torch(logprobs: torch.Tensor, q: float) -> torch.Tensor:
    """Rényi entropy of order q (PyTorch, takes logprobs)."""
    finite_mask = torch.isfinite(logprobs)
    if not finite_mask.any():
        return torch.tensor(float("inf"), device=logprobs.device)

    finite_lps = logprobs[finite_mask]

    if q == 0:
        return torch.log(
            torch.tensor(
                finite_lps.numel(), dtype=logprobs.dtype, device=logprobs.device
            )
        )

    if abs(q - 1.0) < _EPS:
        probs = finite_lps.exp()
        return -(probs * finite_lps).sum()

    if q == float("inf"):
        return -finite_lps.max()

    if q == float("-inf"):
        return -finite_lps.min()

    log_sum = torch.logsumexp(q * finite_lps, dim=-1)
    return log_sum / (1.0 - q)


# ── Tsallis (q-logarithmic) ───────────────────────────────────────────────────
# S_q = Σ pᵢ ln_q(1/pᵢ) = (Σ pᵢ^q - 1) / (1 - q)


def _tsallis_entropy_native(logprobs: Sequence[float], q: float) -> float:
    """Tsallis entropy of order q (pure Python, takes logprobs)."""
    finite_lps = [lp for lp in logprobs if math.isfinite(lp)]
    if not finite_lps:
        return 0.0

    if abs(q - 1.0) < _EPS:
        return -sum(math.exp(lp) * lp for lp in finite_lps)

    power_sum = math.exp(_log_sum_exp_native([q * lp for lp in finite_lps]))
    return (power_sum - 1.0) / (1.0 - q)


def _tsallis_entropy_numpy(logprobs: np.ndarray, q: float) -> np.floating:
    """Tsallis entropy of order q (NumPy, takes logprobs)."""
    finite_lps = logprobs[np.isfinite(logprobs)]
    if finite_lps.size == 0:
        return np.float64(0.0)

    if abs(q - 1.0) < _EPS:
        return -(np.exp(finite_lps) * finite_lps).sum()

    power_sum = np.exp(scipy_logsumexp(q * finite_lps))
    return (power_sum - 1.0) / (1.0 - q)


def _tsallis_entropy_torch(logprobs: torch.Tensor, q: float) -> torch.Tensor:
    """Tsallis entropy of order q (PyTorch, takes logprobs)."""
    finite_lps = logprobs[torch.isfinite(logprobs)]
    if finite_lps.numel() == 0:
        return torch.tensor(0.0, dtype=logprobs.dtype, device=logprobs.device)

    if abs(q - 1.0) < _EPS:
        return -(finite_lps.exp() * finite_lps).sum()

    power_sum = torch.logsumexp(q * finite_lps, dim=-1).exp()
    return (power_sum - 1.0) / (1.0 - q)


# ── Good ──────────────────────────────────────────────────────────────────────
# G_{α,β} = Σ pᵢ^α (-ln pᵢ)^β. Terms with pᵢ = 1 are singular for β < 0.


def _good_entropy_native(logprobs: Sequence[float], alpha: float, beta: float) -> float:
    """Good's entropy (pure Python, takes logprobs)."""
    finite_lps = [lp for lp in logprobs if math.isfinite(lp)]
    if beta == 0:
        return sum(math.exp(alpha * lp) for lp in finite_lps)
    total = 0.0
    for lp in finite_lps:
        surprise = abs(lp)
        if surprise == 0.0:
            if beta < 0:
                return float("nan")
            continue
        total += math.exp(alpha * lp) * surprise**beta
    return total


def _good_entropy_numpy(
    logprobs: np.ndarray, alpha: float, beta: float
) -> np.floating:
    """Good's entropy (NumPy, takes logprobs)."""
    finite_lps = logprobs[np.isfinite(logprobs)]
    weights = np.exp(alpha * finite_lps)
    if beta == 0:
        return weights.sum()
    surprise = np.abs(finite_lps)
    certain = surprise == 0.0
    if beta < 0 and certain.any():
        return np.float64(float("nan"))
    return (weights[~certain] * surprise[~certain] ** beta).sum()


def _good_entropy_torch(
    logprobs: torch.Tensor, alpha: float, beta: float
) -> torch.Tensor:
    """Good's entropy (PyTorch, takes logprobs)."""
    finite_lps = logprobs[torch.isfinite(logprobs)]
    weights = (alpha * finite_lps).exp()
    if beta == 0:
        return weights.sum()
    surprise = finite_lps.abs()
    certain = surprise == 0.0
    if beta < 0 and bool(certain.any()):
        return torch.tensor(float("nan"), dtype=logprobs.dtype, device=logprobs.device)
    return (weights[~certain] * surprise[~certain].pow(beta)).sum()
