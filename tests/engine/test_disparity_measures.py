"""Tests for the disparity family on small hand-computed inputs.

Run all tests:
    pytest tests/engine/test_disparity_measures.py -v
"""

import math

import numpy as np
import pytest

from diversutils.engine.errors import InvalidState
from diversutils.engine.measures import Measure, compute

PAIR = [[0.0, 0.5], [0.5, 0.0]]
LINE = [[0.0, 1.0, 3.0], [1.0, 0.0, 2.0], [3.0, 2.0, 0.0]]
FAR = [[0.0, 1e6], [1e6, 0.0]]


class TestPairwiseAndStirling:
    def test_pairwise_mean(self, make_input):
        assert compute(Measure.DISPARITY_PAIRWISE, make_input([1, 1, 1], LINE)).raw == pytest.approx(2.0)

    def test_pairwise_reads_upper_triangle(self, make_input):
        inp = make_input([1, 1], [[0.0, 1.0], [3.0, 0.0]])
        assert compute(Measure.DISPARITY_PAIRWISE, inp).raw == 1.0

    def test_pairwise_single_node(self, make_input):
        assert math.isnan(compute(Measure.DISPARITY_PAIRWISE, make_input([4], [[0.0]])).raw)

    def test_pairwise_from_embeddings(self, make_input):
        inp = make_input([1, 1], vectors=[[0.0, 0.0], [3.0, 4.0]])
        assert compute(Measure.DISPARITY_PAIRWISE, inp).raw == pytest.approx(5.0)

    @pytest.mark.parametrize(
        "alpha, beta, expected",
        [(1.0, 1.0, 0.25), (0.0, 0.0, 2.0), (0.0, 1.0, 0.5), (2.0, 0.0, 0.5)],
    )
    def test_stirling(self, make_input, alpha, beta, expected):
        raw = compute(Measure.DISPARITY_STIRLING, make_input([1, 1], PAIR), alpha=alpha, beta=beta).raw
        assert raw == pytest.approx(expected)

    def test_stirling_reads_both_directions(self, make_input):
        inp = make_input([1, 1], [[0.0, 1.0], [3.0, 0.0]])
        assert compute(Measure.DISPARITY_STIRLING, inp).raw == pytest.approx(1.0)


class TestRicottaSzeidl:
    def test_order_two_is_rao(self, make_input):
        raw = compute(Measure.DISPARITY_RICOTTA_SZEIDL, make_input([1, 1], PAIR), alpha=2.0).raw
        assert raw == pytest.approx(0.25)

    def test_order_one_limit(self, make_input):
        raw = compute(Measure.DISPARITY_RICOTTA_SZEIDL, make_input([1, 1], PAIR), alpha=1.0).raw
        assert raw == pytest.approx(-math.log(0.75))

    def test_order_one_near_limit(self, make_input):
        inp = make_input([1, 1], PAIR)
        at_one = compute(Measure.DISPARITY_RICOTTA_SZEIDL, inp, alpha=1.0).raw
        near = compute(Measure.DISPARITY_RICOTTA_SZEIDL, inp, alpha=1.0 + 1e-6).raw
        assert near == pytest.approx(at_one, rel=1e-4)


class TestChao:
    def test_two_equal_categories(self, make_input):
        raw, transformed = compute(Measure.DISPARITY_CHAO_ET_AL_FUNCTIONAL, make_input([1, 1], PAIR), alpha=2.0)
        assert raw == pytest.approx(1.0)
        assert transformed == pytest.approx(2.0)

    @pytest.mark.parametrize("q", [0.0, 2.0, 3.0])
    def test_against_direct_sum(self, make_input, q):
        counts = [2, 1, 1]
        p = np.array(counts) / 4.0
        d = np.array(LINE)
        rao = sum(d[i, j] * p[i] * p[j] for i in range(3) for j in range(3))
        total = sum(
            d[i, j] * (p[i] * p[j] / rao) ** q for i in range(3) for j in range(3) if i != j
        )
        fd = total ** (1.0 / (1.0 - q))
        raw, transformed = compute(Measure.DISPARITY_CHAO_ET_AL_FUNCTIONAL, make_input(counts, LINE), alpha=q)
        assert raw == pytest.approx(fd)
        assert transformed == pytest.approx(math.sqrt(fd / rao))

    def test_zero_distances(self, make_input):
        raw, _ = compute(Measure.DISPARITY_CHAO_ET_AL_FUNCTIONAL, make_input([1, 1], np.zeros((2, 2))))
        assert math.isnan(raw)


class TestLeinsterCobbold:
    @pytest.mark.parametrize("q, hill", [(1.0, None), (2.0, 1.6), (float("inf"), 4.0 / 3.0), (0.0, 2.0)])
    def test_dissimilar_categories_give_hill_numbers(self, make_input, q, hill):
        if hill is None:
            hill = math.exp(-(0.25 * math.log(0.25) + 0.75 * math.log(0.75)))
        raw, transformed = compute(Measure.DISPARITY_LEINSTER_COBBOLD, make_input([1, 3], FAR), alpha=q)
        assert transformed == pytest.approx(hill)
        assert raw == pytest.approx(math.log(hill))

    @pytest.mark.parametrize("q", [0.0, 1.0, 2.0])
    def test_identical_categories_count_once(self, make_input, q):
        raw, transformed = compute(Measure.DISPARITY_LEINSTER_COBBOLD, make_input([1, 3], np.zeros((2, 2))), alpha=q)
        assert transformed == pytest.approx(1.0)

    def test_similarity_scale(self, make_input):
        near = compute(Measure.DISPARITY_LEINSTER_COBBOLD, make_input([1, 1], PAIR), alpha=2.0)
        sharp = compute(
            Measure.DISPARITY_LEINSTER_COBBOLD, make_input([1, 1], PAIR, similarity_scale=100.0), alpha=2.0
        )
        # Z = [[1, e^-0.5], [e^-0.5, 1]], Zp = (1 + e^-0.5) / 2 for both nodes
        assert near.transformed == pytest.approx(2.0 / (1.0 + math.exp(-0.5)))
        assert sharp.transformed == pytest.approx(2.0, rel=1e-6)


class TestScheiner:
    def test_without_dimension_is_hill_of_counts(self, make_input):
        raw, transformed = compute(Measure.DISPARITY_SCHEINER, make_input([1, 3], PAIR), alpha=2.0)
        assert transformed == pytest.approx(1.6)
        assert raw == pytest.approx(math.log(1.6))

    def test_ball_volumes_reweight(self, make_input):
        inp = make_input([1, 1, 1], LINE, embedding_dim=1)
        # nearest-neighbour radii (1, 1, 2) -> weights (1/4, 1/4, 1/2)
        assert compute(Measure.DISPARITY_SCHEINER, inp, alpha=2.0).transformed == pytest.approx(8.0 / 3.0)

    def test_single_node(self, make_input):
        assert math.isnan(compute(Measure.DISPARITY_SCHEINER, make_input([3], [[0.0]])).raw)


class TestFunctionalIndices:
    def test_feve_regular_tree(self, make_input):
        d = [[0.0, 1.0, 2.0], [1.0, 0.0, 1.0], [2.0, 1.0, 0.0]]
        assert compute(Measure.DISPARITY_FUNCTIONAL_EVENNESS, make_input([1, 1, 1], d)).raw == pytest.approx(1.0)

    def test_feve_irregular_tree(self, make_input):
        raw = compute(Measure.DISPARITY_FUNCTIONAL_EVENNESS, make_input([1, 1, 1], LINE)).raw
        assert raw == pytest.approx(2.0 / 3.0)

    def test_feve_needs_three(self, make_input):
        assert math.isnan(compute(Measure.DISPARITY_FUNCTIONAL_EVENNESS, make_input([1, 1], PAIR)).raw)

    def test_fdis(self, make_input):
        vectors = [[0.0, 0.0], [2.0, 0.0]]
        assert compute(Measure.DISPARITY_FUNCTIONAL_DISPERSION, make_input([1, 1], vectors=vectors)).raw == pytest.approx(1.0)
        assert compute(Measure.DISPARITY_FUNCTIONAL_DISPERSION, make_input([3, 1], vectors=vectors)).raw == pytest.approx(0.75)

    def test_fdiv(self, make_input):
        vectors = [[0.0], [1.0], [3.0]]
        inp = make_input([1, 1, 1], vectors=vectors)
        assert compute(Measure.DISPARITY_FUNCTIONAL_DIVERGENCE_MODIFIED, inp).raw == pytest.approx(30.0 / 44.0)

    def test_centroid_measures_need_embeddings(self, make_input):
        inp = make_input([1, 1], PAIR)
        with pytest.raises(InvalidState):
            compute(Measure.DISPARITY_FUNCTIONAL_DISPERSION, inp)


class TestOverflow:
    def test_leinster_cobbold_large_distances(self, make_input):
        raw, transformed = compute(
            Measure.DISPARITY_LEINSTER_COBBOLD, make_input([1, 1], np.full((2, 2), 720.0)), alpha=1.0
        )
        assert raw == pytest.approx(720.0, rel=1e-3)
        assert transformed == math.inf

    def test_leinster_cobbold_underflowing_similarity(self, make_input):
        raw, transformed = compute(
            Measure.DISPARITY_LEINSTER_COBBOLD, make_input([1, 1], np.full((2, 2), 1e6)), alpha=float("inf")
        )
        assert raw == math.inf
        assert transformed == math.inf

    def test_chao_order_one_large_distances(self, make_input):
        raw, transformed = compute(
            Measure.DISPARITY_CHAO_ET_AL_FUNCTIONAL, make_input([1, 1], [[0.0, 1e308], [1e308, 0.0]]), alpha=1.0
        )
        assert raw == math.inf
        assert transformed == math.inf

    def test_chao_overflowing_power(self, make_input):
        raw, _ = compute(
            Measure.DISPARITY_CHAO_ET_AL_FUNCTIONAL, make_input([1, 1], [[0.0, 1e308], [1e308, 0.0]]), alpha=0.9
        )
        assert raw == math.inf
