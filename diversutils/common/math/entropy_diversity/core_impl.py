"""Implementation functions for core entropy/diversity primitives.

Provides native/numpy/torch implementations of:
- log_sum_exp: numerically stable log-sum-exp
- probs_to_logprobs / logprobs_to_probs: conversion helpers
- normalize_counts: counts -> relative proportions
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import torch
from scipy.special import logsumexp as scipy_logsumexp

_EPS = 1e-12


# ── Conversion helpers ────────────────────────────────────────────────────────
# Zero probabilities map to -inf so that absent categories drop out of every sum.


def _probs_to_logprobs_native(probs: Sequence[float]) -> list[float]:
    """Convert probabilities to log-probabilities (pure Python)."""
    return [math.log(p) if p > 0 else float("-inf") for p in probs]


def _probs_to_logprobs_numpy(probs: np.ndarray) -> np.ndarray:
    """Convert probabilities to log-probabilities (NumPy)."""
    probs = np.asarray(probs, dtype=np.float64)
    out = np.full(probs.shape, -np.inf)
    positive = probs > 0
    out[positive] = np.log(probs[positive])
    return out


def _probs_to_logprobs_torch(probs: torch.Tensor) -> torch.Tensor:
    """Convert probabilities to log-probabilities (PyTorch)."""
    return torch.where(
        probs > 0, torch.log(probs), torch.full_like(probs, float("-inf"))
    )


def _logprobs_to_probs_native(logprobs: Sequence[float]) -> list[float]:
    """Convert log-probabilities to probabilities (pure Python)."""
    return [math.exp(lp) if math.isfinite(lp) else 0.0 for lp in logprobs]


def _logprobs_to_probs_numpy(logprobs: np.ndarray) -> np.ndarray:
    """Convert log-probabilities to probabilities (NumPy)."""
    return np.exp(logprobs)


def _logprobs_to_probs_torch(logprobs: torch.Tensor) -> torch.Tensor:
    """Convert log-probabilities to probabilities (PyTorch)."""
    return logprobs.exp()


def _normalize_counts_native(counts: Sequence[float]) -> list[float]:
    total = float(sum(counts))
    if total <= 0:
        return [0.0 for _ in counts]
    return [c / total for c in counts]


def _normalize_counts_numpy(counts: np.ndarray) -> np.ndarray:
    counts = np.asarray(counts, dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        return np.zeros_like(counts)
    return counts / total


def _normalize_counts_torch(counts: torch.Tensor) -> torch.Tensor:
    counts = counts.to(torch.float64)
    total = counts.sum()
    if total <= 0:
        return torch.zeros_like(counts)
    return counts / total


# ── Log-sum-exp ───────────────────────────────────────────────────────────────


def _log_sum_exp_native(values: Sequence[float]) -> float:
    """Compute log(Σ exp(xᵢ)) in a numerically stable way (pure Python)."""
    finite = [v for v in values if math.isfinite(v)]
    if not finite:
        return float("-inf")
    max_val = max(finite)
    return max_val + math.log(sum(math.exp(v - max_val) for v in finite))


def _log_sum_exp_numpy(values: np.ndarray) -> np.floating:
    """Compute log(Σ exp(xᵢ)) using scipy.special.logsumexp."""
    if values.size == 0:
        return np.float64(float("-inf"))
    return scipy_logsumexp(values)


def _log_sum_exp_torch(values: torch.Tensor) -> torch.Tensor:
    """Compute log(Σ exp(xᵢ)) using torch.logsumexp."""
    return torch.logsumexp(values, dim=-1)
