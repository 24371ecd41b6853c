"""Index family: dominance, richness and evenness indices.

Indices with a natural effective-number companion (Simpson, Berger-Parker)
report it as the transformed value; all others report the raw value twice.
Indices that divide by S - 1, ln S or 1 - 1/S are undefined at richness 1.

Brillouin, McIntosh and the type-token ratio read absolute counts and are
therefore not invariant under scaling all counts.
"""

from __future__ import annotations

import math

import numpy as np
from scipy.special import gammaln

from ...common.math.entropy_diversity import _EPS, q_evenness, shannon_entropy
from .base import (
    UNDEFINED,
    MeasureInput,
    MeasureResult,
    raw_result,
    undefined_result,
)

_TWO_OVER_PI = 2.0 / math.pi


def _simpson_d(inp: MeasureInput) -> float:
    return float(np.square(inp.proportions).sum())


def _shannon(inp: MeasureInput) -> float:
    return float(shannon_entropy(inp.logprobs))


# ── Dominance ─────────────────────────────────────────────────────────────────


def simpson_dominance(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """D = Σ pᵢ²; transformed 1/D (inverse Simpson)."""
    d = _simpson_d(inp)
    return MeasureResult(d, 1.0 / d)


def simpson(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Gini-Simpson 1 - D; transformed 1/D."""
    d = _simpson_d(inp)
    return MeasureResult(1.0 - d, 1.0 / d)


def berger_parker(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """max pᵢ; transformed 1 / max pᵢ."""
    top = float(inp.proportions.max())
    return MeasureResult(top, 1.0 / top)


def junge(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Junge (1994, p. 22): 1 - √D."""
    return raw_result(1.0 - math.sqrt(_simpson_d(inp)))


# ── Richness ──────────────────────────────────────────────────────────────────


def richness(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    return raw_result(inp.richness)


def species_count(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """S - 1."""
    return raw_result(inp.richness - 1)


def type_token_ratio(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """S / N."""
    return raw_result(inp.richness / inp.total)


# ── Count-based ───────────────────────────────────────────────────────────────


def brillouin(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """HB = (ln N! - Σ ln nᵢ!) / N."""
    n = inp.counts.astype(np.float64)
    total = n.sum()
    return raw_result((gammaln(total + 1.0) - gammaln(n + 1.0).sum()) / total)


def mcintosh(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """(N - U) / (N - √N), U = √Σnᵢ²."""
    n = inp.counts.astype(np.float64)
    total = n.sum()
    denominator = total - math.sqrt(total)
    if denominator <= 0:
        return undefined_result()
    u = math.sqrt(np.square(n).sum())
    return raw_result((total - u) / denominator)


# ── Evenness ──────────────────────────────────────────────────────────────────


def hill_evenness(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Hill's ratio of Hill numbers D_α / D_β."""
    return raw_result(q_evenness(inp.logprobs, alpha, beta))


def shannon_evenness(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Pielou's J = H / ln S."""
    if inp.richness < 2:
        return undefined_result()
    return raw_result(_shannon(inp) / math.log(inp.richness))


def e_heip(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Heip (1974): (e^H - 1) / (S - 1)."""
    if inp.richness < 2:
        return undefined_result()
    return raw_result((math.exp(_shannon(inp)) - 1.0) / (inp.richness - 1))


def one_minus_d(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """(1 - D) / (1 - 1/S)."""
    if inp.richness < 2:
        return undefined_result()
    return raw_result((1.0 - _simpson_d(inp)) / (1.0 - 1.0 / inp.richness))


def one_over_d_williams(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Williams (1964): (1/D) / S."""
    return raw_result(1.0 / _simpson_d(inp) / inp.richness)


def e_minus_ln_d_pielou(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Pielou (1977): -ln D / ln S."""
    if inp.richness < 2:
        return undefined_result()
    return raw_result(-math.log(_simpson_d(inp)) / math.log(inp.richness))


def _f_2_1(inp: MeasureInput) -> float:
    denominator = math.exp(_shannon(inp)) - 1.0
    if inp.richness < 2 or denominator < _EPS:
        return UNDEFINED
    return (1.0 / _simpson_d(inp) - 1.0) / denominator


def f_2_1_alatalo(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Alatalo (1981): (1/D - 1) / (e^H - 1)."""
    return raw_result(_f_2_1(inp))


def g_2_1_molinari(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Molinari (1989): F·(2/π)·arcsin(F) if F > √½, else F³, with F = F_2,1."""
    f = _f_2_1(inp)
    if math.isnan(f):
        return undefined_result()
    f = min(f, 1.0)
    if f > math.sqrt(0.5):
        return raw_result(f * _TWO_OVER_PI * math.asin(f))
    return raw_result(f**3)


def o_bulla(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Bulla (1994) overlap O = Σ min(pᵢ, 1/S)."""
    return raw_result(np.minimum(inp.proportions, 1.0 / inp.richness).sum())


def e_bulla(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Bulla (1994): (O - 1/S) / (1 - 1/S)."""
    if inp.richness < 2:
        return undefined_result()
    s_inv = 1.0 / inp.richness
    o = float(np.minimum(inp.proportions, s_inv).sum())
    return raw_result((o - s_inv) / (1.0 - s_inv))


def e_mci_pielou(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """McIntosh evenness (Pielou 1969) on proportions: (1 - √D) / (1 - 1/√S)."""
    if inp.richness < 2:
        return undefined_result()
    return raw_result(
        (1.0 - math.sqrt(_simpson_d(inp))) / (1.0 - 1.0 / math.sqrt(inp.richness))
    )


def e_prime_camargo(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Camargo (1993): 1 - Σ_{i<j} |pᵢ - pⱼ| / S."""
    p = np.sort(inp.proportions)
    s = len(p)
    # Σ_{i<j} |pᵢ - pⱼ| over sorted values = Σ_k p_k (2k - s + 1)
    pair_sum = float((p * (2.0 * np.arange(s) - s + 1.0)).sum())
    return raw_result(1.0 - pair_sum / s)


def e_var_smith_wilson(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Smith & Wilson (1996): 1 - (2/π)·arctan(var(ln pᵢ))."""
    variance = float(np.var(inp.logprobs))
    return raw_result(1.0 - _TWO_OVER_PI * math.atan(variance))


# ── Rank/abundance ────────────────────────────────────────────────────────────


def _rank_log_abundance(inp: MeasureInput) -> tuple[np.ndarray, np.ndarray]:
    """(ranks 1..S, ln nᵢ sorted from most to least abundant)."""
    log_n = np.log(np.sort(inp.counts.astype(np.float64))[::-1])
    return np.arange(1, len(log_n) + 1, dtype=np.float64), log_n


def nhc(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Nee, Harvey & Cotgreave (1992): slope of ln nᵢ against abundance rank."""
    if inp.richness < 2:
        return undefined_result()
    ranks, log_n = _rank_log_abundance(inp)
    if np.ptp(log_n) == 0:
        return raw_result(0.0)
    slope = np.polyfit(ranks, log_n, 1)[0]
    return raw_result(slope)


def e_q(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Smith & Wilson (1996): -(2/π)·arctan(b'), b' the slope of rank/S on ln nᵢ."""
    if inp.richness < 2:
        return undefined_result()
    ranks, log_n = _rank_log_abundance(inp)
    if np.ptp(log_n) == 0:
        return raw_result(1.0)
    slope = np.polyfit(log_n, ranks / inp.richness, 1)[0]
    return raw_result(-_TWO_OVER_PI * math.atan(slope))
