"""Pixel processing core: background blur and retro filters."""

from __future__ import annotations

from .background_blur import MODE_AUTO, MODE_MANUAL, BackgroundBlurTool, composite_gradual
from .backend import initialise
from .blur import BlurCompositor, composite
from .filters import FILTER_NAMES, FilterCatalog, apply_filter
from .pixels import invert_mask

__all__ = [
    "BackgroundBlurTool",
    "BlurCompositor",
    "FILTER_NAMES",
    "FilterCatalog",
    "MODE_AUTO",
    "MODE_MANUAL",
    "apply_filter",
    "composite",
    "composite_gradual",
    "initialise",
    "invert_mask",
]
