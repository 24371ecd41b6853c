"""
Base I/O utilities for saving and loading JSON configuration and results.
"""

from __future__ import annotations

import json
import re
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_json(data, path: Path) -> None:
    """Save dictionary as pretty JSON, creating the parent directory."""
    path = Path(path)
    ensure_dir(path.parent)
    with open(path, "w") as f:
        json.dump(data, f, indent=4, default=str, ensure_ascii=False)


def load_json(path: Path) -> dict:
    """Load JSON file. Robust to trailing commas."""
    with open(path) as f:
        s = f.read()
    s = re.sub(r",\s*([}\]])", r"\1", s)
    return json.loads(s)
