"""Graph store: weighted categorical populations.

A graph is a list of nodes (category count plus optional key) together with
an optional attached distance matrix and an optional, non-owning reference to
a vector space. Relative proportions exist only after ``finalize_proportions``;
adding a node invalidates them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..common.math.entropy_diversity import normalize_counts
from ..common.math.num_types import is_raw_bytes, is_tensor, to_numpy
from .errors import DimensionMismatch, InvalidArgument
from .precision import Precision, as_array, parse_precision

logger = logging.getLogger(__name__)


class GraphState(Enum):
    CREATED = "created"
    POPULATED = "populated"
    FINALIZED = "finalized"


@dataclass
class Node:
    count: int
    key: str | None = None
    proportion: float | None = None


# =============================================================================
# Distance matrix
# =============================================================================


class DistanceMatrix:
    """Read-only (n, n) pairwise distances stored at a given precision.

    Rows and columns follow node insertion order. Asymmetric matrices are kept
    as given: measures read ``values[i, j]`` exactly.
    """

    def __init__(self, values: np.ndarray, precision: Precision):
        self.values = values
        self.values.flags.writeable = False
        self.precision = precision

    @property
    def node_count(self) -> int:
        return self.values.shape[0]

    @property
    def is_symmetric(self) -> bool:
        return bool(np.array_equal(self.values, self.values.T))

    @classmethod
    def from_buffer(cls, buffer, node_count: int, precision) -> DistanceMatrix:
        """Validate and copy ``node_count²`` distances out of ``buffer``.

        ``buffer`` is raw bytes (bytes, bytearray, memoryview) holding values of
        the precision's width in native byte order, or a NumPy array / torch
        tensor, flat or shaped (n, n).

        Raises:
            InvalidArgument: unsupported buffer type, byte length not a multiple
                of the value width, non-finite values
            DimensionMismatch: value count is not node_count²
        """
        precision = parse_precision(precision)
        expected = node_count * node_count

        if is_raw_bytes(buffer):
            try:
                raw = memoryview(buffer).cast("B")
            except TypeError:
                raise InvalidArgument("distance buffer is not contiguous") from None
            if raw.nbytes % precision.itemsize:
                raise InvalidArgument(
                    f"buffer of {raw.nbytes} bytes is not a whole number of "
                    f"{precision.name} values"
                )
            found = raw.nbytes // precision.itemsize
            if found != expected:
                raise DimensionMismatch(
                    f"distance buffer holds {found} values, graph has "
                    f"{node_count} nodes ({expected} expected)"
                )
            values = np.frombuffer(raw, dtype=precision.dtype, count=expected)
        elif is_tensor(buffer) or isinstance(buffer, np.ndarray):
            values = to_numpy(buffer)
            if values.ndim == 2 and values.shape != (node_count, node_count):
                raise DimensionMismatch(
                    f"distance matrix shape {values.shape}, graph has {node_count} nodes"
                )
            if values.ndim > 2 or values.size != expected:
                raise DimensionMismatch(
                    f"distance buffer holds {values.size} values, graph has "
                    f"{node_count} nodes ({expected} expected)"
                )
            if not np.issubdtype(values.dtype, np.number) or np.iscomplexobj(values):
                raise InvalidArgument(f"distance values of dtype {values.dtype}")
        else:
            raise InvalidArgument(
                f"unsupported distance buffer type {type(buffer).__name__}"
            )

        values = as_array(values, precision).reshape(node_count, node_count)
        if not np.isfinite(values).all():
            raise InvalidArgument("distance matrix contains non-finite values")
        return cls(values, precision)


# =============================================================================
# Graph
# =============================================================================


class Graph:
    """A weighted categorical population.

    Args:
        initial_capacity: Sizing hint for the number of nodes
        embedding_dim: Dimensionality a bound vector space must have
    """

    def __init__(self, initial_capacity: int = 0, embedding_dim: int = 0):
        for name, value in (
            ("initial_capacity", initial_capacity),
            ("embedding_dim", embedding_dim),
        ):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidArgument(f"{name} must be a non-negative int, got {value!r}")
        self.initial_capacity = initial_capacity
        self.embedding_dim = embedding_dim
        self.nodes: list[Node] = []
        self.distance_matrix: DistanceMatrix | None = None
        self.bound_vector_space: int | None = None
        self._finalized = False

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return (
            f"Graph(nodes={self.node_count}, embedding_dim={self.embedding_dim}, "
            f"state={self.state.value})"
        )

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def total_count(self) -> int:
        return sum(node.count for node in self.nodes)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def state(self) -> GraphState:
        if self._finalized:
            return GraphState.FINALIZED
        return GraphState.POPULATED if self.nodes else GraphState.CREATED

    def add_node(self, count: int, key: str | None = None) -> int:
        """Append a node and return its index. Clears finalization."""
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise InvalidArgument(f"count must be an int, got {count!r}")
        if count < 1:
            raise InvalidArgument(f"count must be >= 1, got {count}")
        if key is not None and (not isinstance(key, str) or not key):
            raise InvalidArgument(f"key must be a non-empty str or None, got {key!r}")
        self.nodes.append(Node(count=int(count), key=key))
        if self._finalized:
            for node in self.nodes:
                node.proportion = None
            self._finalized = False
        return len(self.nodes) - 1

    def finalize_proportions(self) -> None:
        """Set every node's proportion to count / total. Idempotent."""
        for node, p in zip(self.nodes, normalize_counts(self.counts())):
            node.proportion = float(p)
        self._finalized = True

    def counts(self) -> np.ndarray:
        return np.fromiter((n.count for n in self.nodes), dtype=np.int64, count=len(self.nodes))

    def proportions(self) -> np.ndarray:
        """Relative proportions as float64 (requires finalization)."""
        return np.fromiter(
            (n.proportion for n in self.nodes), dtype=np.float64, count=len(self.nodes)
        )

    def keys(self) -> list[str | None]:
        return [n.key for n in self.nodes]

    def attach_distance_matrix(self, buffer, precision=Precision.FP32) -> None:
        """Replace the attached distance matrix. On error the previous one stays."""
        matrix = DistanceMatrix.from_buffer(buffer, self.node_count, precision)
        if not matrix.is_symmetric:
            logger.warning(
                "attached asymmetric distance matrix to %r; entries are read as d[i][j]",
                self,
            )
        self.distance_matrix = matrix
