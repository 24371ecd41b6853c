"""Disparity family: measures that combine abundances with pairwise distances.

Distances come from the measure input's resolver, which reads an attached
matrix as given (``d[i][j]``, possibly asymmetric) or computes them from
embeddings. Raw values use natural logarithms.
"""

from __future__ import annotations

import math

import numpy as np
from scipy.sparse.csgraph import minimum_spanning_tree
from scipy.special import gammaln

from ...common.math.entropy_diversity import (
    _EPS,
    log_sum_exp,
    q_diversity,
    renyi_entropy,
)
from ..resolver import pairwise_distances
from .base import (
    UNDEFINED,
    MeasureInput,
    MeasureResult,
    exp_or_undefined,
    raw_result,
    undefined_result,
)


def _off_diagonal(n: int) -> np.ndarray:
    return ~np.eye(n, dtype=bool)


def pairwise(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Mean of d_ij over unordered pairs i < j."""
    n = inp.richness
    if n < 2:
        return undefined_result()
    d = inp.distances()
    return raw_result(d[np.triu_indices(n, k=1)].mean())


def stirling(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Σ_{i≠j} d_ij^α (pᵢ pⱼ)^β, with d^0 = (pp)^0 = 1 at the zero orders."""
    n = inp.richness
    off = _off_diagonal(n)
    if alpha == 0 and beta == 0:
        return raw_result(n * (n - 1))
    pp = np.outer(inp.proportions, inp.proportions)[off]
    if alpha == 0:
        return raw_result((pp**beta).sum())
    d = inp.distances()[off]
    if beta == 0:
        return raw_result((d**alpha).sum())
    return raw_result(((d**alpha) * (pp**beta)).sum())


def ricotta_szeidl(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Ricotta & Szeidl (2006) entropy of order α.

    (1 - Σ pᵢ (1 - Σ_{j≠i} d_ij pⱼ)^(α-1)) / (α - 1), and the α → 1 limit
    -Σ pᵢ ln(1 - Σ_{j≠i} d_ij pⱼ). Non-finite terms (distances above 1
    make the base negative) are skipped.
    """
    p = inp.proportions
    d = np.where(_off_diagonal(inp.richness), inp.distances(), 0.0)
    base = 1.0 - d @ p
    if abs(alpha - 1.0) < _EPS:
        terms = -p * np.log(base)
        terms = terms[np.isfinite(terms)]
        return raw_result(terms.sum())
    terms = p * base ** (alpha - 1.0)
    terms = terms[np.isfinite(terms)]
    return raw_result((1.0 - terms.sum()) / (alpha - 1.0))


def chao_et_al_functional(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Chao et al. (2014) functional diversity of order q = α.

    Q = Σ d_ij pᵢ pⱼ (Rao's quadratic entropy)
    raw         = qFD = (Σ d_ij (pᵢpⱼ/Q)^q)^(1/(1-q));  exp(-Σ d_ij r ln r) at q = 1
    transformed = qD(Q) = √(qFD / Q)
    """
    q = alpha
    d = inp.distances()
    pp = np.outer(inp.proportions, inp.proportions)
    rao_q = float((d * pp).sum())
    if not 0 < rao_q < math.inf:
        return undefined_result()
    r = pp / rao_q
    active = (d != 0) & (r > 0)
    d, r = d[active], r[active]
    if abs(q - 1.0) < _EPS:
        fd = exp_or_undefined(-float((d * r * np.log(r)).sum()))
    else:
        total = float((d * r**q).sum())
        if total <= 0:
            return undefined_result()
        fd = exp_or_undefined(math.log(total) / (1.0 - q))
    return MeasureResult(fd, math.sqrt(fd / rao_q))


def leinster_cobbold(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Leinster & Cobbold (2012) similarity-sensitive diversity of order q = α.

    Z = exp(-u·d), (Zp)ᵢ = Σⱼ Z_ij pⱼ
    ᵠD^Z = (Σ pᵢ (Zp)ᵢ^(q-1))^(1/(1-q));  Π (Zp)ᵢ^(-pᵢ) at q = 1
    raw = ln ᵠD^Z, transformed = ᵠD^Z
    """
    q = alpha
    p = inp.proportions
    z = np.exp(-inp.similarity_scale * inp.distances())
    zp = z @ p
    present = p > 0
    p, zp = p[present], zp[present]
    if abs(q - 1.0) < _EPS:
        log_d = -float((p * np.log(zp)).sum())
    elif q == float("inf"):
        log_d = -float(np.log(zp.max()))
    else:
        log_d = float(log_sum_exp(np.log(p) + (q - 1.0) * np.log(zp))) / (1.0 - q)
    return MeasureResult(log_d, exp_or_undefined(log_d))


def scheiner(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Scheiner (2012)-style functional Hill number of order α.

    Each category occupies a ball whose radius is its nearest-neighbour
    distance dᵢ; its weight is nᵢ·c_m·dᵢ^m with m the embedding dimensionality
    and c_m = π^(m/2) / Γ(m/2 + 1) the unit-ball volume (m = 0 leaves the
    counts as weights). Raw is the Rényi entropy of the normalized weights;
    transformed is the Hill number.
    """
    n = inp.richness
    if n < 2:
        return undefined_result()
    d = np.where(_off_diagonal(n), inp.distances(), np.inf)
    nearest = d.min(axis=1)
    m = inp.embedding_dim
    log_w = np.log(inp.counts.astype(np.float64))
    if m > 0:
        log_unit_ball = 0.5 * m * math.log(math.pi) - gammaln(0.5 * m + 1.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            log_w = log_w + log_unit_ball + m * np.log(nearest)
        log_w = np.where(np.isnan(log_w), -np.inf, log_w)
    if not np.isfinite(log_w).any():
        return undefined_result()
    log_p = log_w - log_sum_exp(log_w[np.isfinite(log_w)])
    h = float(renyi_entropy(log_p, alpha))
    return MeasureResult(h, float(q_diversity(log_p, alpha)))


# ── Villéger et al. (2008) functional indices ─────────────────────────────────


def functional_evenness(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """FEve over the minimum spanning tree of the (symmetrized) distances.

    EWₗ = d_ij / (pᵢ + pⱼ) for each tree edge, PEWₗ = EWₗ / ΣEW,
    FEve = (Σ min(PEWₗ, 1/(S-1)) - 1/(S-1)) / (1 - 1/(S-1)).
    """
    n = inp.richness
    if n < 3:
        return undefined_result()
    d = inp.distances()
    sym = 0.5 * (d + d.T)
    # Zero entries are absent edges for csgraph; shift so ties at 0 stay edges
    weights = np.where(_off_diagonal(n), sym + _EPS, 0.0)
    tree = minimum_spanning_tree(weights).tocoo()
    lengths = np.maximum(tree.data - _EPS, 0.0)
    p = inp.proportions
    ew = lengths / (p[tree.row] + p[tree.col])
    ew_sum = float(ew.sum())
    if ew_sum <= 0:
        return undefined_result()
    threshold = 1.0 / (n - 1)
    upper = float(np.minimum(ew / ew_sum, threshold).sum())
    return raw_result((upper - threshold) / (1.0 - threshold))


def _centroid_distances(inp: MeasureInput) -> tuple[np.ndarray, np.ndarray] | None:
    """(renormalized proportions, distance to the weighted centroid) of embedded nodes."""
    vectors, mask = inp.resolver.embeddings()
    p = inp.proportions[mask]
    if p.size == 0 or p.sum() <= 0:
        return None
    p = p / p.sum()
    centroid = p @ vectors
    stacked = np.vstack([centroid[None, :], vectors])
    dist = pairwise_distances(stacked, inp.resolver.metric, inp.resolver.p)[0, 1:]
    return p, dist


def functional_dispersion(inp: MeasureInput, alpha: float, beta: float) -> MeasureResult:
    """Laliberté & Legendre (2010): FDis = Σ pᵢ·dist(xᵢ, c), c = Σ pᵢ xᵢ."""
    found = _centroid_distances(inp)
    if found is None:
        return undefined_result()
    p, dist = found
    value = float((p * dist).sum())
    return raw_result(value if math.isfinite(value) else UNDEFINED)


def functional_divergence_modified(
    inp: MeasureInput, alpha: float, beta: float
) -> MeasureResult:
    """Functional divergence around the proportion-weighted centroid of all points.

    dGᵢ = pᵢ·dist(xᵢ, c), d̄ = mean(dG),
    FDiv = (Σ pᵢ (dGᵢ - d̄) + d̄) / (Σ pᵢ |dGᵢ - d̄| + d̄)
    """
    found = _centroid_distances(inp)
    if found is None:
        return undefined_result()
    p, dist = found
    dg = p * dist
    mean = float(dg.mean())
    deviance = dg - mean
    denominator = float((p * np.abs(deviance)).sum()) + mean
    if not denominator > 0:
        return undefined_result()
    return raw_result((float((p * deviance).sum()) + mean) / denominator)
