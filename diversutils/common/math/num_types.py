"""Numeric type aliases for the math module.

Functions accept Python scalars/sequences, NumPy arrays and PyTorch tensors,
dispatching to the matching implementation.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
import torch

# ── Scalar types ────────────────────────────────────────────────────────────────

Num = Union[float, np.floating, torch.Tensor]
"""A single numeric value: float | np.floating | torch.Tensor (0-d or scalar)."""

# ── Sequence types ──────────────────────────────────────────────────────────────

Nums = Union[Sequence[float], np.ndarray, torch.Tensor]
"""A sequence of numeric values: Sequence[float] | np.ndarray | torch.Tensor (1-d)."""

Buffer = Union[bytes, bytearray, memoryview, np.ndarray, torch.Tensor]
"""Anything a flat table of floats can be read from."""

# ── Type guards ─────────────────────────────────────────────────────────────────


def is_tensor(x) -> bool:
    """Check if x is a torch.Tensor."""
    return isinstance(x, torch.Tensor)


def is_numpy(x) -> bool:
    """Check if x is a numpy array or numpy scalar."""
    return isinstance(x, (np.ndarray, np.floating))


def is_raw_bytes(x) -> bool:
    """Check if x exposes raw bytes rather than typed values."""
    return isinstance(x, (bytes, bytearray, memoryview))


def to_numpy(x: Nums) -> np.ndarray:
    """Return x as a NumPy array (tensors are detached and moved to CPU)."""
    if is_tensor(x):
        return x.detach().cpu().numpy()
    return np.asarray(x)
