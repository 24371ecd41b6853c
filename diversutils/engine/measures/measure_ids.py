"""Measure identifiers.

Ids 0-31 are the long-standing public numbering; later measures are appended
after them and existing ids never move.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from ..errors import InvalidArgument


class Family(Enum):
    ENTROPY = "entropy"
    INDEX = "index"
    DISPARITY = "disparity"


class Measure(IntEnum):
    ENTROPY_SHANNON_WEAVER = 0
    ENTROPY_Q_LOGARITHMIC = 1
    ENTROPY_PATIL_TAILLIE = 2
    ENTROPY_RENYI = 3
    ENTROPY_GOOD = 4
    INDEX_SIMPSON_DOMINANCE = 5
    INDEX_SIMPSON = 6
    INDEX_RICHNESS = 7
    INDEX_SPECIES_COUNT = 8
    INDEX_HILL_EVENNESS = 9
    INDEX_SHANNON_EVENNESS = 10
    INDEX_BERGER_PARKER = 11
    INDEX_JUNGE1994_PAGE22 = 12
    INDEX_BRILLOUIN = 13
    INDEX_MCINTOSH = 14
    INDEX_E_HEIP = 15
    INDEX_ONE_MINUS_D = 16
    INDEX_ONE_OVER_D_WILLIAMS1964 = 17
    INDEX_E_MINUS_LN_D_PIELOU1977 = 18
    INDEX_F_2_1_ALATALO1981 = 19
    INDEX_G_2_1_MOLINARI1989 = 20
    INDEX_O_BULLA1994 = 21
    INDEX_E_BULLA1994 = 22
    INDEX_E_MCI_PIELOU1969 = 23
    INDEX_E_PRIME_CAMARGO1993 = 24
    INDEX_E_VAR_SMITH_AND_WILSON1996 = 25
    DISPARITY_PAIRWISE = 26
    DISPARITY_CHAO_ET_AL_FUNCTIONAL = 27
    DISPARITY_LEINSTER_COBBOLD = 28
    DISPARITY_SCHEINER = 29
    DISPARITY_STIRLING = 30
    DISPARITY_RICOTTA_SZEIDL = 31
    INDEX_TYPE_TOKEN_RATIO = 32
    INDEX_NHC = 33
    INDEX_E_Q = 34
    DISPARITY_FUNCTIONAL_EVENNESS = 35
    DISPARITY_FUNCTIONAL_DISPERSION = 36
    DISPARITY_FUNCTIONAL_DIVERGENCE_MODIFIED = 37

    @property
    def family(self) -> Family:
        return Family(self.name.split("_", 1)[0].lower())

    @property
    def needs_distances(self) -> bool:
        return self.family is Family.DISPARITY

    @property
    def needs_embeddings(self) -> bool:
        return self in (
            Measure.DISPARITY_FUNCTIONAL_DISPERSION,
            Measure.DISPARITY_FUNCTIONAL_DIVERGENCE_MODIFIED,
        )


def parse_measure(value) -> Measure:
    """Accept a Measure, its integer id, or its name (case-insensitive).

    Names may carry a ``DF_`` prefix, as in ``DF_ENTROPY_SHANNON_WEAVER``.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"unknown measure id {value!r}")
    if isinstance(value, str):
        try:
            return Measure[value.strip().upper().removeprefix("DF_")]
        except KeyError:
            raise InvalidArgument(f"unknown measure name {value!r}") from None
    try:
        return Measure(value)
    except (ValueError, TypeError):
        raise InvalidArgument(f"unknown measure id {value!r}") from None
