"""Base schema class: JSON-friendly dataclasses with typed round-trips."""

from __future__ import annotations

import json
import math
import types
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union, get_args, get_origin, get_type_hints

import numpy as np
import torch

from .io import load_json, save_json


# =============================================================================
# Schema utilities
# =============================================================================


def _canon(obj: Any):
    """Canonicalize object for JSON output. Floats are kept exact."""
    if isinstance(obj, (torch.Tensor, np.ndarray)):
        return None
    if isinstance(obj, np.generic):
        obj = obj.item()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, float):
        if math.isnan(obj):
            return "NaN"
        if math.isinf(obj):
            return "Inf" if obj > 0 else "-Inf"
        return obj
    if is_dataclass(obj):
        return {
            f.name: _canon(getattr(obj, f.name))
            for f in fields(obj)
            if not f.name.startswith("_")
        }
    if isinstance(obj, dict):
        # Filter out private fields (starting with _) during serialization
        return {
            k: _canon(v)
            for k, v in obj.items()
            if not (isinstance(k, str) and k.startswith("_"))
        }
    if isinstance(obj, (list, tuple)):
        return [_canon(v) for v in obj]
    return obj


# =============================================================================
# Base schema dataclass
# =============================================================================


@dataclass
class BaseSchema:
    """Base class for schema dataclasses that round-trip through JSON."""

    def to_dict(self) -> dict:
        return _canon(self)

    def to_string(self) -> str:
        return json.dumps(self.to_dict(), indent=4, sort_keys=True)

    # For logging ease
    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def _convert_value(cls, val, field_type):
        """Convert a value to the expected field type."""
        # Unwrap Optional[X] / X | None to get X
        origin = get_origin(field_type)
        if origin is Union or isinstance(field_type, types.UnionType):
            args = [a for a in get_args(field_type) if a is not type(None)]
            if len(args) == 1:
                field_type = args[0]

        if val is None:
            return None

        # "NaN" / "Inf" / "-Inf" as written by to_dict
        if field_type is float and isinstance(val, str):
            return float(val)

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            return field_type(val) if not isinstance(val, field_type) else val

        if is_dataclass(field_type) and hasattr(field_type, "from_dict"):
            if isinstance(val, dict):
                return field_type.from_dict(val)

        if get_origin(field_type) is list:
            item_type = get_args(field_type)[0] if get_args(field_type) else None
            if item_type:
                return [cls._convert_value(item, item_type) for item in val]

        if get_origin(field_type) is tuple:
            item_types = get_args(field_type)
            if item_types:
                return tuple(
                    cls._convert_value(
                        item, item_types[i] if i < len(item_types) else item_types[-1]
                    )
                    for i, item in enumerate(val)
                )
            return tuple(val)

        return val

    @classmethod
    def from_dict(cls, d: dict):
        """Recursively construct a dataclass instance from a nested dict.

        Unknown keys are ignored; missing keys fall back to the field defaults.
        """
        hints = get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            if f.name not in d:
                continue
            val = d[f.name]
            field_type = hints.get(f.name)
            kwargs[f.name] = cls._convert_value(val, field_type) if field_type else val
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: Path):
        """Load from JSON file. Override from_dict for custom parsing."""
        data = load_json(path)
        return cls.from_dict(data)

    def save(self, path: Path) -> None:
        save_json(self.to_dict(), path)
