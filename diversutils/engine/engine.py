"""The measurement engine: registries of graphs and vector spaces plus measures.

``Engine`` is the exception-raising object API. ``diversutils.engine.api`` wraps
a process-wide instance in the status-code surface.

Graphs keep a non-owning reference (the handle) to a bound vector space. When
the space is freed, measures needing distances on those graphs fail with
``InvalidHandle`` because the stale handle no longer passes the generation
check. Nothing here is thread-safe: callers serialize every call, in particular
``free_w2v`` against disparity measures on graphs bound to that space.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Iterable

from .config import EngineConfig
from .errors import DimensionMismatch, InvalidArgument, InvalidState
from .graph import Graph
from .measures.base import MeasureInput, MeasureResult
from .measures.catalog import compute
from .measures.measure_ids import Measure, parse_measure
from .precision import Precision, parse_precision
from .registry import HandleRegistry
from .resolver import DistanceResolver
from .vector_space import VectorSpace, load_word2vec

logger = logging.getLogger(__name__)


def _check_order(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"{name} must be a real number, got {value!r}")
    if math.isnan(value):
        raise InvalidArgument(f"{name} must not be nan")
    return float(value)


class Engine:
    """Owns every graph and vector space created through it.

    Args:
        config: Engine tunables; defaults to ``EngineConfig()``
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self.config.validate()
        self._graphs: HandleRegistry[Graph] = HandleRegistry(
            "graph", self.config.max_graphs
        )
        self._spaces: HandleRegistry[VectorSpace] = HandleRegistry(
            "vector space", self.config.max_vector_spaces
        )

    def __repr__(self) -> str:
        return f"Engine(graphs={len(self._graphs)}, vector_spaces={len(self._spaces)})"

    # ── Lookup ────────────────────────────────────────────────────────────────

    def graph(self, handle: int) -> Graph:
        return self._graphs.get(handle)

    def vector_space(self, handle: int) -> VectorSpace:
        return self._spaces.get(handle)

    @property
    def graph_count(self) -> int:
        return len(self._graphs)

    @property
    def vector_space_count(self) -> int:
        return len(self._spaces)

    # ── Graph lifecycle ───────────────────────────────────────────────────────

    def create_empty_graph(self, initial_capacity: int = 0, embedding_dim: int = 0) -> int:
        return self._graphs.allocate(Graph(initial_capacity, embedding_dim))

    def add_node(self, graph: int, count: int, key: str | None = None) -> int:
        """Append a node; returns its index within the graph."""
        return self.graph(graph).add_node(count, key)

    def compute_relative_proportion(self, graph: int) -> None:
        self.graph(graph).finalize_proportions()

    def attach_distance_matrix(self, graph: int, buffer, precision=Precision.FP32) -> None:
        self.graph(graph).attach_distance_matrix(buffer, precision)

    def free_graph(self, graph: int) -> None:
        self._graphs.release(graph)

    # ── Vector spaces ─────────────────────────────────────────────────────────

    def load_w2v(self, path, precision=None, binary: bool = True) -> int:
        if precision is None:
            precision = self.config.default_precision
        space = load_word2vec(path, parse_precision(precision), binary=binary)
        return self.register_vector_space(space)

    def register_vector_space(self, space: VectorSpace) -> int:
        """Hand an already built space to the engine."""
        return self._spaces.allocate(space)

    def bind_w2v(self, graph: int, vector_space: int) -> None:
        g = self.graph(graph)
        space = self.vector_space(vector_space)
        if g.embedding_dim != space.dimensionality:
            raise DimensionMismatch(
                f"graph expects embeddings of dimensionality {g.embedding_dim}, "
                f"vector space has {space.dimensionality}"
            )
        g.bound_vector_space = vector_space

    def free_w2v(self, vector_space: int) -> None:
        self._spaces.release(vector_space)

    # ── Measures ──────────────────────────────────────────────────────────────

    def _measure_input(self, graph: int, needs_distances: bool) -> MeasureInput:
        g = self.graph(graph)
        if not g.nodes:
            raise InvalidState("graph has no nodes")
        if not g.is_finalized:
            raise InvalidState("relative proportions are not computed")
        resolver = None
        if needs_distances:
            space = None
            if g.bound_vector_space is not None:
                # Liveness check even when a matrix is attached
                space = self.vector_space(g.bound_vector_space)
            resolver = DistanceResolver(
                g,
                space,
                metric=self.config.metric,
                p=self.config.minkowski_p,
                unresolved_distance=self.config.unresolved_distance,
            )
        return MeasureInput(
            proportions=g.proportions(),
            counts=g.counts(),
            resolver=resolver,
            embedding_dim=g.embedding_dim,
            similarity_scale=self.config.similarity_scale,
        )

    def individual_measure(
        self, graph: int, measure, alpha: float = 1.0, beta: float = 1.0
    ) -> MeasureResult:
        """Compute one measure as (raw, transformed)."""
        measure = parse_measure(measure)
        alpha, beta = _check_order("alpha", alpha), _check_order("beta", beta)
        inp = self._measure_input(graph, measure.needs_distances)
        result = compute(measure, inp, alpha, beta)
        logger.debug(
            "graph %d: %s(alpha=%g, beta=%g) = %s", graph, measure.name, alpha, beta, result
        )
        return result

    def measures(
        self,
        graph: int,
        measures: Iterable | None = None,
        alpha: float = 1.0,
        beta: float = 1.0,
    ) -> dict[Measure, MeasureResult]:
        """Compute several measures sharing one resolved distance matrix.

        Defaults to every measure the graph's distance sources support.
        """
        alpha, beta = _check_order("alpha", alpha), _check_order("beta", beta)
        if measures is None:
            g = self.graph(graph)
            has_space = g.bound_vector_space is not None
            has_distances = has_space or g.distance_matrix is not None
            selected = [
                m
                for m in Measure
                if (has_distances or not m.needs_distances)
                and (has_space or not m.needs_embeddings)
            ]
        else:
            selected = [parse_measure(m) for m in measures]
        inp = self._measure_input(graph, any(m.needs_distances for m in selected))
        return {m: compute(m, inp, alpha, beta) for m in selected}

    def reset(self) -> None:
        """Release every graph and vector space."""
        self._graphs.clear()
        self._spaces.clear()
