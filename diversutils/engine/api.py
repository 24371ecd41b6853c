"""Status-code surface over a process-wide ``Engine``.

Every function returns a status or sentinel instead of raising for engine
errors: handle-returning calls give -1, status-returning calls give a
``Status`` value (0 on success) and ``individual_measure`` gives None.
``last_error()`` reports the status and message of the latest call.

The default engine is shared process state without locking; multi-threaded
callers serialize all calls.
"""

from __future__ import annotations

import functools
import logging

from .config import EngineConfig
from .engine import Engine
from .errors import DiversityError, Status
from .measures.measure_ids import Measure
from .precision import FP32, FP64, Precision

logger = logging.getLogger(__name__)

_engine = Engine()
_last_error: tuple[Status, str] = (Status.OK, "")


def _guarded(failure):
    """Convert DiversityError into ``failure`` (a value, or a callable of the error)."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            global _last_error
            try:
                result = fn(*args, **kwargs)
            except DiversityError as e:
                _last_error = (e.status, str(e))
                logger.warning("%s failed with %s: %s", fn.__name__, e.status.name, e)
                return failure(e) if callable(failure) else failure
            _last_error = (Status.OK, "")
            return result

        return wrapper

    return decorator


def _status(e: DiversityError) -> int:
    return int(e.status)


def default_engine() -> Engine:
    return _engine


def configure(config: EngineConfig | None = None) -> None:
    """Replace the default engine; every existing handle becomes invalid."""
    global _engine, _last_error
    _engine.reset()
    _engine = Engine(config)
    _last_error = (Status.OK, "")


def last_error() -> tuple[Status, str]:
    return _last_error


# ── Graphs ────────────────────────────────────────────────────────────────────


@_guarded(-1)
def create_empty_graph(initial_capacity: int = 0, embedding_dim: int = 0) -> int:
    return _engine.create_empty_graph(initial_capacity, embedding_dim)


@_guarded(_status)
def add_node(graph: int, count: int, key: str | None = None) -> int:
    _engine.add_node(graph, count, key)
    return Status.OK


@_guarded(_status)
def compute_relative_proportion(graph: int) -> int:
    _engine.compute_relative_proportion(graph)
    return Status.OK


@_guarded(None)
def individual_measure(
    graph: int, measure_id, alpha: float = 1.0, beta: float = 1.0
) -> tuple[float, float] | None:
    raw, transformed = _engine.individual_measure(graph, measure_id, alpha, beta)
    return raw, transformed


@_guarded(_status)
def attach_distance_matrix(graph: int, buffer, precision=Precision.FP32) -> int:
    _engine.attach_distance_matrix(graph, buffer, precision)
    return Status.OK


@_guarded(_status)
def free_graph(graph: int) -> int:
    _engine.free_graph(graph)
    return Status.OK


# ── Vector spaces ─────────────────────────────────────────────────────────────


@_guarded(-1)
def load_w2v(path, precision=None, binary: bool = True) -> int:
    return _engine.load_w2v(path, precision, binary)


@_guarded(_status)
def bind_w2v(graph: int, vector_space: int) -> int:
    _engine.bind_w2v(graph, vector_space)
    return Status.OK


@_guarded(_status)
def free_w2v(vector_space: int) -> int:
    _engine.free_w2v(vector_space)
    return Status.OK


__all__ = [
    "FP32",
    "FP64",
    "Measure",
    "Precision",
    "Status",
    "add_node",
    "attach_distance_matrix",
    "bind_w2v",
    "compute_relative_proportion",
    "configure",
    "create_empty_graph",
    "default_engine",
    "free_graph",
    "free_w2v",
    "individual_measure",
    "last_error",
    "load_w2v",
]
