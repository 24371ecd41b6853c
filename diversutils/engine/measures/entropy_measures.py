"""Entropy family.

Raw value is the entropy (natural log); the transformed value is the matching
Hill number, i.e. the effective number of equally common categories.
"""

from __future__ import annotations

import math

from ...common.math.entropy_diversity import (
    _EPS,
    good_entropy,
    patil_taillie_entropy,
    renyi_entropy,
    shannon_entropy,
    tsallis_entropy,
)
from .base import UNDEFINED, MeasureInput, MeasureResult, exp_or_undefined


def _power_or_undefined(base: float, exponent: float) -> float:
    """base ** exponent, nan where it is not a real number."""
    if base <= 0 or math.isnan(base):
        return UNDEFINED
    try:
        return base**exponent
    except OverflowError:
        return float("inf")


def shannon_weaver(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """H = -Σ pᵢ ln pᵢ; transformed exp(H)."""
    h = float(shannon_entropy(inp.logprobs))
    return MeasureResult(h, exp_or_undefined(h))


def q_logarithmic(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Tsallis entropy of order q = alpha.

    transformed = (1 - (q-1)·S_q)^(1/(1-q)), exp(H) at q = 1.
    """
    q = alpha
    s = float(tsallis_entropy(inp.logprobs, q))
    if abs(q - 1.0) < _EPS:
        return MeasureResult(s, exp_or_undefined(s))
    return MeasureResult(s, _power_or_undefined(1.0 - (q - 1.0) * s, 1.0 / (1.0 - q)))


def patil_taillie(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Δ_α = (1 - Σ pᵢ^(α+1)) / α; transformed (1 - α·Δ)^(-1/α), exp(H) at α = 0."""
    delta = float(patil_taillie_entropy(inp.logprobs, alpha))
    if abs(alpha) < _EPS:
        return MeasureResult(delta, exp_or_undefined(delta))
    return MeasureResult(delta, _power_or_undefined(1.0 - alpha * delta, -1.0 / alpha))


def renyi(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Rényi entropy of order alpha; transformed exp(H_α) = Hill number."""
    h = float(renyi_entropy(inp.logprobs, alpha))
    return MeasureResult(h, exp_or_undefined(h))


def good(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Good's entropy Σ pᵢ^α (-ln pᵢ)^β; transformed exp(raw)."""
    g = float(good_entropy(inp.logprobs, alpha, beta))
    return MeasureResult(g, exp_or_undefined(g))
