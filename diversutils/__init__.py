"""Diversity, evenness and disparity measures over weighted categorical populations."""

from .engine.api import (
    FP32,
    FP64,
    Measure,
    Precision,
    Status,
    add_node,
    attach_distance_matrix,
    bind_w2v,
    compute_relative_proportion,
    configure,
    create_empty_graph,
    default_engine,
    free_graph,
    free_w2v,
    individual_measure,
    last_error,
    load_w2v,
)
from .engine.config import EngineConfig
from .engine.engine import Engine
from .engine.errors import (
    AllocationFailure,
    DimensionMismatch,
    DiversityError,
    FileFormatError,
    InvalidArgument,
    InvalidHandle,
    InvalidState,
)
from .engine.vector_space import VectorSpace, load_word2vec, save_word2vec

__version__ = "0.1.0"

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
    "EngineConfig",
    "Engine",
    "AllocationFailure",
    "DimensionMismatch",
    "DiversityError",
    "FileFormatError",
    "InvalidArgument",
    "InvalidHandle",
    "InvalidState",
    "VectorSpace",
    "load_word2vec",
    "save_word2vec",
]
