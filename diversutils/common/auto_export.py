"""Auto-export utilities for package __init__.py files.

Provides automatic re-exporting of public names from submodules and subpackages,
reducing boilerplate in __init__.py files.

IMPORT PATTERNS
===============

Given this folder structure:
    diversutils/
      engine/
        __init__.py      <- auto_export
        graph.py         <- defines Graph, Node
        measures/
          __init__.py    <- auto_export
          measure_ids.py <- defines Measure, Family

This enables these import styles:

1. FLAT IMPORTS - Import classes/functions directly from package:

   from diversutils.engine import Graph, Measure

2. SUBPACKAGE IMPORTS - Import subpackages as modules:

   from diversutils.engine import measures
   measures.MEASURES[...]

3. EXPLICIT MODULE IMPORTS - Still work as normal:

   from diversutils.engine.graph import Graph

USAGE IN __init__.py
====================

    from diversutils.common.auto_export import auto_export
    __all__ = auto_export(__file__, __name__, globals())

WHAT GETS EXPORTED
==================

- Public names (not starting with _) defined inside the diversutils package
- All subpackages (directories with __init__.py)
- Excludes: module objects, loggers, and names re-exported from third-party
  or standard-library modules
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# =============================================================================
# Exclusion Configuration
# =============================================================================

ROOT_PACKAGE = __name__.split(".")[0]

TYPING_NAMES = frozenset(
    {
        "annotations",
        "Any",
        "Callable",
        "Iterable",
        "Iterator",
        "Mapping",
        "NamedTuple",
        "Optional",
        "Sequence",
        "Union",
        "TYPE_CHECKING",
        "TypeVar",
    }
)

HELPER_NAMES = frozenset(
    {
        "logger",
        "dataclass",
        "field",
        "fields",
    }
)

EXCLUDED_NAMES = TYPING_NAMES | HELPER_NAMES


# =============================================================================
# Helpers
# =============================================================================


def _is_module(obj: Any) -> bool:
    return isinstance(obj, type(sys))


def _is_foreign(obj: Any) -> bool:
    """True for classes and functions defined outside the root package."""
    if not (isinstance(obj, type) or callable(obj)):
        return False
    module = getattr(obj, "__module__", None)
    return not isinstance(module, str) or module.split(".")[0] != ROOT_PACKAGE


def _should_export(name: str, obj: Any) -> bool:
    """Determine if a name should be exported."""
    if name.startswith("_"):
        return False
    if name in EXCLUDED_NAMES:
        return False
    if _is_module(obj):
        return False
    if _is_foreign(obj):
        return False
    return True


def _import(name: str, package: str) -> Any:
    """Import a submodule of ``package``, logging the failure before re-raising."""
    try:
        return importlib.import_module(f".{name}", package=package)
    except ImportError:
        logger.error("auto_export could not import %s.%s", package, name)
        raise


def _get_public_names(module: Any) -> list[str]:
    """Get public names from a module."""
    if hasattr(module, "__all__"):
        return list(module.__all__)
    return [n for n in dir(module) if not n.startswith("_")]


# =============================================================================
# Core Export Functions
# =============================================================================


def _export_module_contents(
    module: Any,
    into: dict[str, Any],
) -> list[str]:
    """Export public names from a module into a dict.

    Names already present in the dict are kept as they are but still listed
    for __all__.
    """
    exported = []
    for name in _get_public_names(module):
        obj = getattr(module, name)
        if _should_export(name, obj):
            if name not in into:
                into[name] = obj
            exported.append(name)
    return exported


def _find_modules(directory: Path) -> list[str]:
    """Find Python module names in a directory."""
    return [p.stem for p in sorted(directory.glob("*.py")) if p.name != "__init__.py"]


def _find_packages(directory: Path) -> list[str]:
    """Find subpackage names in a directory."""
    return [
        p.name
        for p in sorted(directory.iterdir())
        if p.is_dir() and (p / "__init__.py").exists() and not p.name.startswith("_")
    ]


# =============================================================================
# Main API
# =============================================================================


def auto_export(
    init_file: str,
    package_name: str,
    globals_dict: dict[str, Any],
) -> list[str]:
    """Auto-import modules and subpackages, exporting their public names.

    Args:
        init_file: __file__ from the calling __init__.py
        package_name: __name__ from the calling __init__.py
        globals_dict: globals() from the calling __init__.py

    Returns:
        List of exported names for __all__ (deduplicated, in discovery order)
    """
    directory = Path(init_file).parent
    all_names: list[str] = []

    for module_name in _find_modules(directory):
        module = _import(module_name, package_name)
        all_names.extend(_export_module_contents(module, globals_dict))

    for pkg_name in _find_packages(directory):
        pkg = _import(pkg_name, package_name)
        if pkg_name not in globals_dict or globals_dict[pkg_name] is pkg:
            globals_dict[pkg_name] = pkg
            all_names.append(pkg_name)
        all_names.extend(_export_module_contents(pkg, globals_dict))

    return list(dict.fromkeys(all_names))
