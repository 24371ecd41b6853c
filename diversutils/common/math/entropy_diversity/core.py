"""Primitive operations for entropy/diversity calculations.

Provides:
- _EPS: numerical stability constant
- Conversion: probs_to_logprobs, logprobs_to_probs, normalize_counts
- Log-sum-exp: log_sum_exp (numerically stable)
"""

from __future__ import annotations

from ..num_types import Num, Nums, is_numpy, is_tensor
from .core_impl import (
    _EPS,
    _log_sum_exp_native,
    _log_sum_exp_numpy,
    _log_sum_exp_torch,
    _logprobs_to_probs_native,
    _logprobs_to_probs_numpy,
    _logprobs_to_probs_torch,
    _normalize_counts_native,
    _normalize_counts_numpy,
    _normalize_counts_torch,
    _probs_to_logprobs_native,
    _probs_to_logprobs_numpy,
    _probs_to_logprobs_torch,
)


# ── Conversion helpers ────────────────────────────────────────────────────────


def probs_to_logprobs(probs: Nums) -> Nums:
    """Convert probabilities to log-probabilities (p = 0 maps to -inf)."""
    if is_tensor(probs):
        return _probs_to_logprobs_torch(probs)
    if is_numpy(probs):
        return _probs_to_logprobs_numpy(probs)
    return _probs_to_logprobs_native(probs)


def logprobs_to_probs(logprobs: Nums) -> Nums:
    """Convert log-probabilities to probabilities."""
    if is_tensor(logprobs):
        return _logprobs_to_probs_torch(logprobs)
    if is_numpy(logprobs):
        return _logprobs_to_probs_numpy(logprobs)
    return _logprobs_to_probs_native(logprobs)


def normalize_counts(counts: Nums) -> Nums:
    """Relative proportions pᵢ = nᵢ / Σn. All-zero input gives all-zero output."""
    if is_tensor(counts):
        return _normalize_counts_torch(counts)
    if is_numpy(counts):
        return _normalize_counts_numpy(counts)
    return _normalize_counts_native(counts)


# ── Log-sum-exp ───────────────────────────────────────────────────────────────


def log_sum_exp(values: Nums) -> Num:
    """Compute log(Σ exp(xᵢ)) in a numerically stable way."""
    if is_tensor(values):
        return _log_sum_exp_torch(values)
    if is_numpy(values):
        return _log_sum_exp_numpy(values)
    return _log_sum_exp_native(values)
