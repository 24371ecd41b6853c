"""Tests for DistanceResolver and pairwise_distances."""

import logging

import numpy as np
import pytest

from diversutils.engine.errors import InvalidState
from diversutils.engine.graph import Graph
from diversutils.engine.precision import FP64
from diversutils.engine.resolver import DistanceResolver, Metric, pairwise_distances
from diversutils.engine.vector_space import VectorSpace


def make_space():
    return VectorSpace.from_vectors({"a": [0.0, 0.0], "b": [3.0, 4.0], "c": [0.0, 1.0]})


def keyed_graph(keys):
    g = Graph(embedding_dim=2)
    for key in keys:
        g.add_node(1, key)
    return g


class TestPairwiseDistances:
    def test_euclidean(self):
        d = pairwise_distances(np.array([[0.0, 0.0], [3.0, 4.0]]))
        assert d.tolist() == [[0.0, 5.0], [5.0, 0.0]]

    def test_minkowski_order(self):
        d = pairwise_distances(np.array([[0.0, 0.0], [3.0, 4.0]]), "minkowski", p=1.0)
        assert d[0, 1] == pytest.approx(7.0)

    def test_cosine(self):
        d = pairwise_distances(np.array([[1.0, 0.0], [0.0, 2.0], [3.0, 0.0]]), Metric.COSINE)
        assert d[0, 1] == pytest.approx(1.0)
        assert d[0, 2] == pytest.approx(0.0, abs=1e-12)

    def test_empty(self):
        assert pairwise_distances(np.empty((0, 3))).shape == (0, 0)


class TestSources:
    def test_attached_matrix_wins(self):
        g = keyed_graph(["a", "b"])
        g.attach_distance_matrix(np.array([[0.0, 9.0], [9.0, 0.0]]), FP64)
        resolver = DistanceResolver(g, make_space())
        assert resolver.source == "matrix"
        assert resolver.distance(0, 1) == 9.0
        assert resolver.resolvable.all()

    def test_attached_matrix_skips_key_lookup(self, caplog):
        g = keyed_graph(["a", "missing"])
        g.attach_distance_matrix(np.array([[0.0, 2.0], [2.0, 0.0]]), FP64)
        with caplog.at_level(logging.WARNING, logger="diversutils.engine.resolver"):
            resolver = DistanceResolver(g, make_space())
            resolver.matrix()
        assert "no embedding" not in caplog.text
        assert resolver.unresolved_keys == []
        with caplog.at_level(logging.WARNING, logger="diversutils.engine.resolver"):
            resolver.embeddings()
        assert resolver.unresolved_keys == ["missing"]
        assert "no embedding" in caplog.text

    def test_embeddings(self):
        resolver = DistanceResolver(keyed_graph(["a", "b", "c"]), make_space())
        assert resolver.source == "embeddings"
        m = resolver.matrix()
        assert m[0, 1] == pytest.approx(5.0)
        assert m[0, 2] == pytest.approx(1.0)
        assert m[1, 2] == pytest.approx(np.sqrt(18.0))
        assert np.diag(m).tolist() == [0.0, 0.0, 0.0]

    def test_matrix_is_cached(self):
        resolver = DistanceResolver(keyed_graph(["a", "b"]), make_space())
        assert resolver.matrix() is resolver.matrix()

    def test_no_source(self):
        with pytest.raises(InvalidState):
            DistanceResolver(keyed_graph(["a", "b"]))

    def test_matrix_from_before_more_nodes_were_added(self):
        g = keyed_graph(["a", "b"])
        g.attach_distance_matrix(np.zeros(4), FP64)
        g.add_node(1, "c")
        with pytest.raises(InvalidState):
            DistanceResolver(g)


class TestUnresolved:
    def test_default_is_largest_resolved_distance(self, caplog):
        g = keyed_graph(["a", "b", "missing"])
        with caplog.at_level(logging.WARNING, logger="diversutils.engine.resolver"):
            resolver = DistanceResolver(g, make_space())
            m = resolver.matrix()
        assert "no embedding" in caplog.text
        assert resolver.unresolved_keys == ["missing"]
        assert resolver.resolvable.tolist() == [True, True, False]
        assert m[2].tolist() == pytest.approx([5.0, 5.0, 0.0])
        assert m[0, 2] == pytest.approx(5.0)

    def test_configured_default(self):
        g = Graph()
        g.add_node(1, "a")
        g.add_node(1)
        g.add_node(1, "c")
        resolver = DistanceResolver(g, make_space(), unresolved_distance=2.5)
        m = resolver.matrix()
        assert m[0, 1] == 2.5
        assert m[1, 2] == 2.5
        assert m[0, 2] == pytest.approx(1.0)

    def test_single_resolved_node_falls_back_to_one(self):
        resolver = DistanceResolver(keyed_graph(["a", "x", "y"]), make_space())
        assert resolver.matrix()[1, 2] == 1.0

    def test_embeddings_view(self):
        g = keyed_graph(["b", "missing", "c"])
        vectors, mask = DistanceResolver(g, make_space()).embeddings()
        assert mask.tolist() == [True, False, True]
        assert vectors.tolist() == [[3.0, 4.0], [0.0, 1.0]]
        assert vectors.dtype == np.float64

    def test_embeddings_need_a_space(self):
        g = keyed_graph(["a", "b"])
        g.attach_distance_matrix(np.zeros(4), FP64)
        with pytest.raises(InvalidState):
            DistanceResolver(g).embeddings()
