"""Tests for the index family."""

import math

import pytest

from diversutils.engine.measures import Family, Measure, compute

INDICES = [m for m in Measure if m.family is Family.INDEX]

# Indices that divide by S - 1, ln S or similar
UNDEFINED_AT_ONE = [
    Measure.INDEX_SHANNON_EVENNESS,
    Measure.INDEX_E_HEIP,
    Measure.INDEX_ONE_MINUS_D,
    Measure.INDEX_E_MINUS_LN_D_PIELOU1977,
    Measure.INDEX_F_2_1_ALATALO1981,
    Measure.INDEX_G_2_1_MOLINARI1989,
    Measure.INDEX_E_BULLA1994,
    Measure.INDEX_E_MCI_PIELOU1969,
    Measure.INDEX_NHC,
    Measure.INDEX_E_Q,
]

EVENNESS_INDICES = [
    Measure.INDEX_SHANNON_EVENNESS,
    Measure.INDEX_E_HEIP,
    Measure.INDEX_ONE_MINUS_D,
    Measure.INDEX_ONE_OVER_D_WILLIAMS1964,
    Measure.INDEX_E_MINUS_LN_D_PIELOU1977,
    Measure.INDEX_F_2_1_ALATALO1981,
    Measure.INDEX_G_2_1_MOLINARI1989,
    Measure.INDEX_O_BULLA1994,
    Measure.INDEX_E_BULLA1994,
    Measure.INDEX_E_MCI_PIELOU1969,
    Measure.INDEX_E_PRIME_CAMARGO1993,
    Measure.INDEX_E_VAR_SMITH_AND_WILSON1996,
    Measure.INDEX_E_Q,
    Measure.INDEX_HILL_EVENNESS,
]


class TestEvenPair:
    def test_no_index_is_undefined(self, make_input):
        inp = make_input([4, 4])
        for measure in INDICES:
            raw, transformed = compute(measure, inp, alpha=2.0, beta=1.0)
            assert not math.isnan(raw), measure.name
            assert not math.isnan(transformed), measure.name

    @pytest.mark.parametrize("measure", EVENNESS_INDICES)
    def test_perfect_evenness(self, make_input, measure):
        assert compute(measure, make_input([4, 4]), alpha=2.0, beta=1.0).raw == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "measure, raw, transformed",
        [
            (Measure.INDEX_SIMPSON_DOMINANCE, 0.5, 2.0),
            (Measure.INDEX_SIMPSON, 0.5, 2.0),
            (Measure.INDEX_BERGER_PARKER, 0.5, 2.0),
            (Measure.INDEX_RICHNESS, 2.0, 2.0),
            (Measure.INDEX_SPECIES_COUNT, 1.0, 1.0),
            (Measure.INDEX_TYPE_TOKEN_RATIO, 0.25, 0.25),
            (Measure.INDEX_JUNGE1994_PAGE22, 1.0 - math.sqrt(0.5), 1.0 - math.sqrt(0.5)),
            (Measure.INDEX_BRILLOUIN, math.log(70.0) / 8.0, math.log(70.0) / 8.0),
            (Measure.INDEX_NHC, 0.0, 0.0),
        ],
    )
    def test_values(self, make_input, measure, raw, transformed):
        result = compute(measure, make_input([4, 4]))
        assert result.raw == pytest.approx(raw)
        assert result.transformed == pytest.approx(transformed)

    def test_mcintosh(self, make_input):
        expected = (8.0 - math.sqrt(32.0)) / (8.0 - math.sqrt(8.0))
        assert compute(Measure.INDEX_MCINTOSH, make_input([4, 4])).raw == pytest.approx(expected)


class TestUneven:
    """Counts [1, 3]: p = (0.25, 0.75)."""

    def test_dominance(self, make_input):
        inp = make_input([1, 3])
        assert compute(Measure.INDEX_SIMPSON_DOMINANCE, inp) == pytest.approx((0.625, 1.6))
        assert compute(Measure.INDEX_BERGER_PARKER, inp) == pytest.approx((0.75, 4.0 / 3.0))

    def test_bulla(self, make_input):
        inp = make_input([1, 3])
        assert compute(Measure.INDEX_O_BULLA1994, inp).raw == pytest.approx(0.75)
        assert compute(Measure.INDEX_E_BULLA1994, inp).raw == pytest.approx(0.5)

    def test_camargo(self, make_input):
        assert compute(Measure.INDEX_E_PRIME_CAMARGO1993, make_input([1, 3])).raw == pytest.approx(0.75)

    def test_camargo_matches_pairwise_sum(self, make_input):
        counts = [5, 1, 3, 2]
        p = [c / sum(counts) for c in counts]
        pair_sum = sum(abs(p[i] - p[j]) for i in range(4) for j in range(i + 1, 4))
        raw = compute(Measure.INDEX_E_PRIME_CAMARGO1993, make_input(counts)).raw
        assert raw == pytest.approx(1.0 - pair_sum / 4)

    def test_smith_wilson_variance(self, make_input):
        variance = (math.log(3.0) / 2.0) ** 2
        expected = 1.0 - 2.0 / math.pi * math.atan(variance)
        raw = compute(Measure.INDEX_E_VAR_SMITH_AND_WILSON1996, make_input([1, 3])).raw
        assert raw == pytest.approx(expected)

    def test_rank_abundance_slopes(self, make_input):
        inp = make_input([1, 3])
        assert compute(Measure.INDEX_NHC, inp).raw == pytest.approx(-math.log(3.0))
        expected = 2.0 / math.pi * math.atan(0.5 / math.log(3.0))
        assert compute(Measure.INDEX_E_Q, inp).raw == pytest.approx(expected)

    def test_brillouin(self, make_input):
        assert compute(Measure.INDEX_BRILLOUIN, make_input([1, 3])).raw == pytest.approx(math.log(4.0) / 4.0)

    def test_mcintosh(self, make_input):
        expected = (4.0 - math.sqrt(10.0)) / 2.0
        assert compute(Measure.INDEX_MCINTOSH, make_input([1, 3])).raw == pytest.approx(expected)

    def test_alatalo(self, make_input):
        h = -(0.25 * math.log(0.25) + 0.75 * math.log(0.75))
        expected = 0.6 / (math.exp(h) - 1.0)
        assert compute(Measure.INDEX_F_2_1_ALATALO1981, make_input([1, 3])).raw == pytest.approx(expected)

    def test_hill_evenness_orders(self, make_input):
        h = -(0.25 * math.log(0.25) + 0.75 * math.log(0.75))
        raw = compute(Measure.INDEX_HILL_EVENNESS, make_input([1, 3]), alpha=2.0, beta=1.0).raw
        assert raw == pytest.approx(1.6 / math.exp(h))


class TestSingleCategory:
    @pytest.mark.parametrize("measure", UNDEFINED_AT_ONE)
    def test_undefined(self, make_input, measure):
        raw, transformed = compute(measure, make_input([5]))
        assert math.isnan(raw)
        assert math.isnan(transformed)

    def test_defined_ones(self, make_input):
        inp = make_input([5])
        assert compute(Measure.INDEX_RICHNESS, inp).raw == 1.0
        assert compute(Measure.INDEX_SPECIES_COUNT, inp).raw == 0.0
        assert compute(Measure.INDEX_SIMPSON, inp) == pytest.approx((0.0, 1.0))
        assert compute(Measure.INDEX_MCINTOSH, inp).raw == pytest.approx(0.0)

    def test_mcintosh_single_token(self, make_input):
        assert math.isnan(compute(Measure.INDEX_MCINTOSH, make_input([1])).raw)


class TestScaling:
    def test_proportion_indices_are_scale_invariant(self, make_input):
        small, large = make_input([1, 3, 2]), make_input([10, 30, 20])
        for measure in INDICES:
            if measure in (
                Measure.INDEX_BRILLOUIN,
                Measure.INDEX_MCINTOSH,
                Measure.INDEX_TYPE_TOKEN_RATIO,
            ):
                continue
            a, b = compute(measure, small), compute(measure, large)
            assert a.raw == pytest.approx(b.raw), measure.name

    def test_count_indices_are_not(self, make_input):
        small, large = make_input([1, 3, 2]), make_input([10, 30, 20])
        for measure in (Measure.INDEX_BRILLOUIN, Measure.INDEX_TYPE_TOKEN_RATIO):
            assert compute(measure, small).raw != pytest.approx(compute(measure, large).raw)
