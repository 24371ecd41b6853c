"""Pytest configuration for diversutils tests."""

import sys
from pathlib import Path

# Add project root to path so 'diversutils' imports work without installing
_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import pytest


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--skip-slow",
        action="store_true",
        default=False,
        help="Skip slow tests (large vector spaces, wide graphs)",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow (large inputs)")


def pytest_collection_modifyitems(config, items):
    """Skip tests based on markers and command-line options."""
    if config.getoption("--skip-slow"):
        skip_slow = pytest.mark.skip(reason="Skipped via --skip-slow")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


@pytest.fixture
def engine():
    """A fresh Engine with default configuration."""
    from diversutils.engine.engine import Engine

    return Engine()


@pytest.fixture
def fresh_api():
    """Reset the process-wide engine before and after a test."""
    from diversutils.engine import api

    api.configure()
    yield api
    api.configure()


@pytest.fixture
def make_input():
    """Factory for MeasureInput built from counts and an optional distance source.

    ``distances`` is attached as an FP64 matrix; ``vectors`` (one row per node)
    becomes an FP64 vector space keyed ``n0``, ``n1``, ...
    """
    import numpy as np

    from diversutils.engine.graph import Graph
    from diversutils.engine.measures.base import MeasureInput
    from diversutils.engine.precision import FP64
    from diversutils.engine.resolver import DistanceResolver
    from diversutils.engine.vector_space import VectorSpace

    def build(counts, distances=None, vectors=None, embedding_dim=0, **resolver_kwargs):
        similarity_scale = resolver_kwargs.pop("similarity_scale", 1.0)
        graph = Graph(len(counts), embedding_dim)
        for i, count in enumerate(counts):
            graph.add_node(count, f"n{i}")
        graph.finalize_proportions()
        space = None
        if vectors is not None:
            space = VectorSpace.from_vectors(
                {f"n{i}": row for i, row in enumerate(vectors)}, FP64
            )
        if distances is not None:
            graph.attach_distance_matrix(np.asarray(distances, dtype=np.float64), FP64)
        resolver = None
        if distances is not None or space is not None:
            resolver = DistanceResolver(graph, space, **resolver_kwargs)
        return MeasureInput(
            proportions=graph.proportions(),
            counts=graph.counts(),
            resolver=resolver,
            embedding_dim=embedding_dim,
            similarity_scale=similarity_scale,
        )

    return build
