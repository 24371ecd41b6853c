"""Shared types for measure implementations."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, NamedTuple

import numpy as np

from ...common.math.entropy_diversity import probs_to_logprobs
from ..errors import InvalidState
from ..resolver import DistanceResolver

UNDEFINED = float("nan")
"""Sentinel for a measure whose formula is undefined on the given input."""


class MeasureResult(NamedTuple):
    raw: float
    transformed: float


def raw_result(raw) -> MeasureResult:
    """Result whose transformed value is the raw value."""
    return MeasureResult(float(raw), float(raw))


def undefined_result() -> MeasureResult:
    return MeasureResult(UNDEFINED, UNDEFINED)


def exp_or_undefined(value: float) -> float:
    """e ** value, inf on overflow and nan for nan."""
    if math.isnan(value):
        return UNDEFINED
    try:
        return math.exp(value)
    except OverflowError:
        return float("inf")


@dataclass
class MeasureInput:
    """Everything a measure may read about one finalized graph.

    Attributes:
        proportions: Relative proportions, float64, insertion order
        counts: Absolute counts, int64, insertion order
        resolver: Distance source (None for measures that need no distances)
        embedding_dim: Dimensionality declared by the graph
        similarity_scale: u in Z = exp(-u·d)
    """

    proportions: np.ndarray
    counts: np.ndarray
    resolver: DistanceResolver | None = None
    embedding_dim: int = 0
    similarity_scale: float = 1.0
    _logprobs: np.ndarray | None = field(default=None, repr=False)

    @property
    def richness(self) -> int:
        return len(self.proportions)

    @property
    def total(self) -> int:
        return int(self.counts.sum())

    @property
    def logprobs(self) -> np.ndarray:
        if self._logprobs is None:
            self._logprobs = probs_to_logprobs(self.proportions)
        return self._logprobs

    def distances(self) -> np.ndarray:
        if self.resolver is None:
            raise InvalidState("measure needs a distance source")
        return self.resolver.matrix()


MeasureFn = Callable[[MeasureInput, float, float], MeasureResult]
