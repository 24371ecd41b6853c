"""Distance resolution between graph nodes.

An attached distance matrix always wins. Otherwise node keys are looked up in
the bound vector space and distances are computed with scipy. A node without a
key, or whose key is absent from the space, is unresolvable: every pair that
involves it gets the default distance (configured, or the largest resolved
distance, or 1.0). The distance from a node to itself is 0 for embeddings.
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np
from scipy.spatial import distance as spatial_distance

from .errors import InvalidState
from .graph import Graph
from .vector_space import VectorSpace

logger = logging.getLogger(__name__)


class Metric(str, Enum):
    EUCLIDEAN = "euclidean"
    SQEUCLIDEAN = "sqeuclidean"
    MINKOWSKI = "minkowski"
    COSINE = "cosine"
    CHEBYSHEV = "chebyshev"
    CANBERRA = "canberra"
    BRAYCURTIS = "braycurtis"


def pairwise_distances(
    vectors: np.ndarray, metric=Metric.EUCLIDEAN, p: float = 2.0
) -> np.ndarray:
    """Full (n, n) float64 distance matrix between the rows of ``vectors``."""
    metric = Metric(metric)
    vectors = np.asarray(vectors, dtype=np.float64)
    if vectors.shape[0] == 0:
        return np.zeros((0, 0))
    kwargs = {"p": p} if metric is Metric.MINKOWSKI else {}
    with np.errstate(all="ignore"):
        return spatial_distance.cdist(vectors, vectors, metric.value, **kwargs)


class DistanceResolver:
    """Resolves pairwise node distances for one measure call.

    The full matrix is computed at most once per resolver instance.
    """

    def __init__(
        self,
        graph: Graph,
        vector_space: VectorSpace | None = None,
        metric=Metric.EUCLIDEAN,
        p: float = 2.0,
        unresolved_distance: float | None = None,
    ):
        self.graph = graph
        self.vector_space = vector_space
        self.metric = Metric(metric)
        self.p = p
        self.unresolved_distance = unresolved_distance
        self.unresolved_keys: list[str | None] = []
        self._matrix: np.ndarray | None = None
        self._rows: np.ndarray | None = None

        if graph.distance_matrix is not None:
            if graph.distance_matrix.node_count != graph.node_count:
                raise InvalidState(
                    f"attached distance matrix covers {graph.distance_matrix.node_count} "
                    f"nodes, graph has {graph.node_count}"
                )
            self.source = "matrix"
        elif vector_space is not None:
            self.source = "embeddings"
        else:
            raise InvalidState(
                "graph has neither an attached distance matrix nor a bound vector space"
            )

    def _node_rows(self) -> np.ndarray:
        """Row of each node in the vector space, -1 for nodes without one."""
        if self._rows is not None:
            return self._rows
        rows = []
        for key in self.graph.keys():
            row = None if key is None else self.vector_space.index_of(key)
            if row is None:
                self.unresolved_keys.append(key)
            rows.append(-1 if row is None else row)
        self._rows = np.asarray(rows, dtype=np.int64)
        if self.unresolved_keys:
            logger.warning(
                "%d of %d nodes have no embedding; their pairs use the default distance",
                len(self.unresolved_keys),
                self.graph.node_count,
            )
        return self._rows

    @property
    def resolvable(self) -> np.ndarray:
        """Boolean mask of nodes that have a distance source."""
        if self.source == "matrix":
            return np.ones(self.graph.node_count, dtype=bool)
        return self._node_rows() >= 0

    def default_distance(self, resolved: np.ndarray | None = None) -> float:
        if self.unresolved_distance is not None:
            return float(self.unresolved_distance)
        if resolved is not None and resolved.shape[0] > 1:
            off_diagonal = resolved[~np.eye(resolved.shape[0], dtype=bool)]
            off_diagonal = off_diagonal[np.isfinite(off_diagonal)]
            if off_diagonal.size:
                return float(off_diagonal.max())
        return 1.0

    def matrix(self) -> np.ndarray:
        """The (n, n) float64 pairwise distance matrix."""
        if self._matrix is None:
            if self.source == "matrix":
                self._matrix = self.graph.distance_matrix.values.astype(np.float64)
            else:
                self._matrix = self._embedding_matrix()
        return self._matrix

    def _embedding_matrix(self) -> np.ndarray:
        n = self.graph.node_count
        rows = self._node_rows()
        mask = rows >= 0
        resolved = pairwise_distances(
            self.vector_space.vectors[rows[mask]], self.metric, self.p
        )
        default = self.default_distance(resolved)
        # Undefined metric values (e.g. cosine of a zero vector) count as unresolved
        resolved[~np.isfinite(resolved)] = default
        out = np.full((n, n), default, dtype=np.float64)
        idx = np.flatnonzero(mask)
        out[np.ix_(idx, idx)] = resolved
        np.fill_diagonal(out, 0.0)
        return out

    def distance(self, i: int, j: int) -> float:
        return float(self.matrix()[i, j])

    def embeddings(self) -> tuple[np.ndarray, np.ndarray]:
        """(vectors of resolvable nodes as float64, resolvable mask)."""
        if self.vector_space is None:
            raise InvalidState("measure needs embeddings; graph has only a distance matrix")
        rows = self._node_rows()
        mask = rows >= 0
        return self.vector_space.vectors[rows[mask]].astype(np.float64), mask
