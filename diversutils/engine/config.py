"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ..common.base_schema import BaseSchema
from .errors import InvalidArgument
from .precision import Precision
from .resolver import Metric

MAX_REGISTRY_CAPACITY = 2**24

METRICS = tuple(m.value for m in Metric)


@dataclass
class EngineConfig(BaseSchema):
    """Tunables of an ``Engine``.

    Attributes:
        max_graphs: Graph registry capacity
        max_vector_spaces: Vector-space registry capacity
        default_precision: Precision used by ``load_w2v`` when none is given
        metric: Distance between embeddings (scipy.spatial.distance name)
        minkowski_p: Order of the Minkowski metric
        unresolved_distance: Distance assigned to pairs involving a node that has
            no embedding. None means the largest resolved distance (1.0 if none).
        similarity_scale: u in the Leinster-Cobbold similarity Z = exp(-u·d)
    """

    max_graphs: int = 65536
    max_vector_spaces: int = 1024
    default_precision: Precision = Precision.FP32
    metric: str = "euclidean"
    minkowski_p: float = 2.0
    unresolved_distance: float | None = None
    similarity_scale: float = 1.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        for name in ("max_graphs", "max_vector_spaces"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgument(f"{name} must be an int, got {value!r}")
            if not 0 < value <= MAX_REGISTRY_CAPACITY:
                raise InvalidArgument(
                    f"{name} must be in [1, {MAX_REGISTRY_CAPACITY}], got {value}"
                )
        if not isinstance(self.default_precision, Precision):
            raise InvalidArgument(
                f"default_precision must be a Precision, got {self.default_precision!r}"
            )
        if self.metric not in METRICS:
            raise InvalidArgument(
                f"unknown metric {self.metric!r}; expected one of {', '.join(METRICS)}"
            )
        if self.minkowski_p <= 0:
            raise InvalidArgument(f"minkowski_p must be > 0, got {self.minkowski_p}")
        if self.unresolved_distance is not None and self.unresolved_distance < 0:
            raise InvalidArgument(
                f"unresolved_distance must be >= 0, got {self.unresolved_distance}"
            )
        if self.similarity_scale <= 0:
            raise InvalidArgument(
                f"similarity_scale must be > 0, got {self.similarity_scale}"
            )
