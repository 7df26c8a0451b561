"""Retro film filters for captured photographs.

This package separates the filter stack into:
- color_matrix: immutable affine colour transforms and their JIT kernel
- artifacts: procedural grain, vignette, light leak, scan noise and scratches
- catalog: the static preset table and the executor that runs it
"""

from __future__ import annotations

from .artifacts import add_grain, add_light_leak, add_scan_noise, add_scratches, add_vignette
from .catalog import (
    CATALOG,
    FILTER_IDS,
    FILTER_NAMES,
    PRESETS,
    FilterCatalog,
    FilterPreset,
    apply_filter,
    apply_filter_by_name,
    filter_name,
)
from .color_matrix import ColorMatrix, apply_color_matrix, apply_color_matrix_inplace

__all__ = [
    "CATALOG",
    "ColorMatrix",
    "FILTER_IDS",
    "FILTER_NAMES",
    "FilterCatalog",
    "FilterPreset",
    "PRESETS",
    "add_grain",
    "add_light_leak",
    "add_scan_noise",
    "add_scratches",
    "add_vignette",
    "apply_color_matrix",
    "apply_color_matrix_inplace",
    "apply_filter",
    "apply_filter_by_name",
    "filter_name",
]
