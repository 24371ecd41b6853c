"""Precision layer: the two storage widths for vectors and distance matrices.

Every stored numeric table goes through ``as_array`` so each algorithm is
written once over ``np.ndarray`` and instantiated at either width. Measures
accumulate in float64 regardless of storage width.
"""

from __future__ import annotations

from enum import IntEnum

import numpy as np

from ..common.math.num_types import is_tensor, to_numpy
from .errors import InvalidArgument


class Precision(IntEnum):
    FP32 = 0
    FP64 = 1

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _ALIASES.get(value.strip().lower())
        return None

    @property
    def dtype(self) -> type[np.floating]:
        return np.float32 if self is Precision.FP32 else np.float64

    @property
    def itemsize(self) -> int:
        return np.dtype(self.dtype).itemsize


_ALIASES = {
    "fp32": Precision.FP32,
    "float32": Precision.FP32,
    "single": Precision.FP32,
    "fp64": Precision.FP64,
    "float64": Precision.FP64,
    "double": Precision.FP64,
}

FP32 = Precision.FP32
FP64 = Precision.FP64


def parse_precision(value) -> Precision:
    """Accept a Precision, 0/1, or a name such as "fp32" / "float64"."""
    if isinstance(value, bool):
        raise InvalidArgument(f"malformed precision tag: {value!r}")
    try:
        return Precision(value)
    except (ValueError, TypeError):
        raise InvalidArgument(f"malformed precision tag: {value!r}") from None


def as_array(values, precision: Precision) -> np.ndarray:
    """Copy ``values`` into a C-contiguous array stored at ``precision``."""
    precision = parse_precision(precision)
    if is_tensor(values):
        values = to_numpy(values)
    return np.array(values, dtype=precision.dtype, order="C", copy=True)
