"""Measure dispatch table."""

from __future__ import annotations

import numpy as np

from . import disparity_measures as disparity
from . import entropy_measures as entropy
from . import index_measures as index
from .base import MeasureFn, MeasureInput, MeasureResult
from .measure_ids import Measure, parse_measure

MEASURES: dict[Measure, MeasureFn] = {
    Measure.ENTROPY_SHANNON_WEAVER: entropy.shannon_weaver,
    Measure.ENTROPY_Q_LOGARITHMIC: entropy.q_logarithmic,
    Measure.ENTROPY_PATIL_TAILLIE: entropy.patil_taillie,
    Measure.ENTROPY_RENYI: entropy.renyi,
    Measure.ENTROPY_GOOD: entropy.good,
    Measure.INDEX_SIMPSON_DOMINANCE: index.simpson_dominance,
    Measure.INDEX_SIMPSON: index.simpson,
    Measure.INDEX_RICHNESS: index.richness,
    Measure.INDEX_SPECIES_COUNT: index.species_count,
    Measure.INDEX_HILL_EVENNESS: index.hill_evenness,
    Measure.INDEX_SHANNON_EVENNESS: index.shannon_evenness,
    Measure.INDEX_BERGER_PARKER: index.berger_parker,
    Measure.INDEX_JUNGE1994_PAGE22: index.junge,
    Measure.INDEX_BRILLOUIN: index.brillouin,
    Measure.INDEX_MCINTOSH: index.mcintosh,
    Measure.INDEX_E_HEIP: index.e_heip,
    Measure.INDEX_ONE_MINUS_D: index.one_minus_d,
    Measure.INDEX_ONE_OVER_D_WILLIAMS1964: index.one_over_d_williams,
    Measure.INDEX_E_MINUS_LN_D_PIELOU1977: index.e_minus_ln_d_pielou,
    Measure.INDEX_F_2_1_ALATALO1981: index.f_2_1_alatalo,
    Measure.INDEX_G_2_1_MOLINARI1989: index.g_2_1_molinari,
    Measure.INDEX_O_BULLA1994: index.o_bulla,
    Measure.INDEX_E_BULLA1994: index.e_bulla,
    Measure.INDEX_E_MCI_PIELOU1969: index.e_mci_pielou,
    Measure.INDEX_E_PRIME_CAMARGO1993: index.e_prime_camargo,
    Measure.INDEX_E_VAR_SMITH_AND_WILSON1996: index.e_var_smith_wilson,
    Measure.INDEX_TYPE_TOKEN_RATIO: index.type_token_ratio,
    Measure.INDEX_NHC: index.nhc,
    Measure.INDEX_E_Q: index.e_q,
    Measure.DISPARITY_PAIRWISE: disparity.pairwise,
    Measure.DISPARITY_CHAO_ET_AL_FUNCTIONAL: disparity.chao_et_al_functional,
    Measure.DISPARITY_LEINSTER_COBBOLD: disparity.leinster_cobbold,
    Measure.DISPARITY_SCHEINER: disparity.scheiner,
    Measure.DISPARITY_STIRLING: disparity.stirling,
    Measure.DISPARITY_RICOTTA_SZEIDL: disparity.ricotta_szeidl,
    Measure.DISPARITY_FUNCTIONAL_EVENNESS: disparity.functional_evenness,
    Measure.DISPARITY_FUNCTIONAL_DISPERSION: disparity.functional_dispersion,
    Measure.DISPARITY_FUNCTIONAL_DIVERGENCE_MODIFIED: disparity.functional_divergence_modified,
}

_missing = set(Measure) - set(MEASURES)
if _missing:
    raise RuntimeError(f"measures without an implementation: {sorted(_missing)}")


def compute(measure, inp: MeasureInput, alpha: float = 1.0, beta: float = 1.0) -> MeasureResult:
    """Evaluate one measure. Floating-point faults surface as nan/inf, never warnings."""
    measure = parse_measure(measure)
    with np.errstate(all="ignore"):
        raw, transformed = MEASURES[measure](inp, float(alpha), float(beta))
    return MeasureResult(float(raw), float(transformed))
