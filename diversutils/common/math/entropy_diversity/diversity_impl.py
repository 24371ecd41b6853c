"""Implementation functions for diversity calculations.

Provides native/numpy/torch implementations of:
- _q_diversity: Hill number D_q
- _q_evenness: ratio of two Hill numbers D_a / D_b
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import torch

from .core_impl import _EPS
from .entropy_impl import (
    _renyi_entropy_native,
    _renyi_entropy_numpy,
    _renyi_entropy_torch,
)


# ── q-Diversity (Hill numbers) ────────────────────────────────────────────────


def _q_diversity_native(logprobs: Sequence[float], q: float) -> float:
    """Hill number D_q (pure Python)."""
    finite_lps = [lp for lp in logprobs if math.isfinite(lp)]
    if not finite_lps:
        return 0.0

    # q = 0: richness = count of non-zero
    if q == 0:
        return float(len(finite_lps))

    H_q = _renyi_entropy_native(finite_lps, q)
    return math.exp(H_q) if math.isfinite(H_q) else float("inf")


def _q_diversity_numpy(logprobs: np.ndarray, q: float) -> np.floating:
    """Hill number D_q (NumPy)."""
    finite_mask = np.isfinite(logprobs)
    if not finite_mask.any():
        return np.float64(0.0)

    finite_lps = logprobs[finite_mask]

    if q == 0:
        return np.float64(len(finite_lps))

    H_q = _renyi_entropy_numpy(finite_lps, q)
    return np.exp(H_q)


def _q_diversity_torch(logprobs: torch.Tensor, q: float) -> torch.Tensor:
    """Hill number D_q (PyTorch)."""
    finite_mask = torch.isfinite(logprobs)
    if not finite_mask.any():
        return torch.tensor(0.0, device=logprobs.device)

    finite_lps = logprobs[finite_mask]

    if q == 0:
        return torch.tensor(
            finite_lps.numel(), dtype=logprobs.dtype, device=logprobs.device
        )

    H_q = _renyi_entropy_torch(finite_lps, q)
    return H_q.exp()


# ── Evenness (D_a / D_b) ──────────────────────────────────────────────────────


def _q_evenness_native(logprobs: Sequence[float], a: float, b: float) -> float:
    denominator = _q_diversity_native(logprobs, b)
    if denominator < _EPS:
        return float("nan")
    return _q_diversity_native(logprobs, a) / denominator


def _q_evenness_numpy(logprobs: np.ndarray, a: float, b: float) -> np.floating:
    denominator = _q_diversity_numpy(logprobs, b)
    if denominator < _EPS:
        return np.float64(float("nan"))
    return _q_diversity_numpy(logprobs, a) / denominator


def _q_evenness_torch(logprobs: torch.Tensor, a: float, b: float) -> torch.Tensor:
    denominator = _q_diversity_torch(logprobs, b)
    if float(denominator) < _EPS:
        return torch.tensor(float("nan"), device=logprobs.device)
    return _q_diversity_torch(logprobs, a) / denominator
