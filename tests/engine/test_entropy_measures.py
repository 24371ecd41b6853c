"""Tests for the entropy family."""

import math

import pytest

from diversutils.engine.measures import Measure, compute

LN2 = math.log(2.0)


class TestEvenPair:
    """Counts [4, 4]: every order collapses to two effective categories."""

    def test_shannon(self, make_input):
        raw, transformed = compute(Measure.ENTROPY_SHANNON_WEAVER, make_input([4, 4]))
        assert raw == pytest.approx(LN2)
        assert transformed == pytest.approx(2.0)

    @pytest.mark.parametrize("alpha", [0.0, 0.5, 1.0, 2.0, 3.0, float("inf")])
    def test_renyi_is_order_free(self, make_input, alpha):
        raw, transformed = compute(Measure.ENTROPY_RENYI, make_input([4, 4]), alpha=alpha)
        assert raw == pytest.approx(LN2)
        assert transformed == pytest.approx(2.0)

    @pytest.mark.parametrize("q, raw", [(1.0, LN2), (2.0, 0.5), (3.0, 0.375)])
    def test_q_logarithmic(self, make_input, q, raw):
        result = compute(Measure.ENTROPY_Q_LOGARITHMIC, make_input([4, 4]), alpha=q)
        assert result.raw == pytest.approx(raw)
        assert result.transformed == pytest.approx(2.0)

    @pytest.mark.parametrize("alpha, raw", [(0.0, LN2), (1.0, 0.5)])
    def test_patil_taillie(self, make_input, alpha, raw):
        result = compute(Measure.ENTROPY_PATIL_TAILLIE, make_input([4, 4]), alpha=alpha)
        assert result.raw == pytest.approx(raw)
        assert result.transformed == pytest.approx(2.0)

    def test_good(self, make_input):
        raw, transformed = compute(Measure.ENTROPY_GOOD, make_input([4, 4]), alpha=1.0, beta=1.0)
        assert raw == pytest.approx(LN2)
        assert transformed == pytest.approx(2.0)

    def test_good_beta_zero_is_power_sum(self, make_input):
        raw, transformed = compute(Measure.ENTROPY_GOOD, make_input([4, 4]), alpha=2.0, beta=0.0)
        assert raw == pytest.approx(0.5)
        assert transformed == pytest.approx(math.exp(0.5))


class TestUneven:
    def test_shannon_value(self, make_input):
        raw, _ = compute(Measure.ENTROPY_SHANNON_WEAVER, make_input([1, 3]))
        assert raw == pytest.approx(-(0.25 * math.log(0.25) + 0.75 * math.log(0.75)))

    def test_renyi_two_is_log_inverse_simpson(self, make_input):
        raw, transformed = compute(Measure.ENTROPY_RENYI, make_input([1, 3]), alpha=2.0)
        assert transformed == pytest.approx(1.0 / 0.625)
        assert raw == pytest.approx(math.log(1.6))

    def test_renyi_non_increasing_in_order(self, make_input):
        inp = make_input([5, 2, 1, 1])
        values = [compute(Measure.ENTROPY_RENYI, inp, alpha=a).transformed for a in (0, 0.5, 1, 2, 5)]
        assert values == sorted(values, reverse=True)
        assert values[0] == pytest.approx(4.0)

    def test_single_category(self, make_input):
        raw, transformed = compute(Measure.ENTROPY_SHANNON_WEAVER, make_input([7]))
        assert raw == pytest.approx(0.0)
        assert transformed == pytest.approx(1.0)

    def test_good_negative_beta_with_certain_category(self, make_input):
        raw, transformed = compute(Measure.ENTROPY_GOOD, make_input([3]), alpha=1.0, beta=-1.0)
        assert math.isnan(raw)
        assert math.isnan(transformed)
