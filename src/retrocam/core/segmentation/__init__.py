"""Mask producers for the background blur pipeline.

- :mod:`.edge_mask`: automatic subject estimation from edges and contours
- :mod:`.stroke_mask`: manual selection painted from touch strokes
- :mod:`.refiner`: GrabCut refinement of a coarse mask
- :mod:`.gradual`: distance based falloff for gradual blur
"""

from __future__ import annotations

from .edge_mask import EdgeMaskEstimator, estimate_foreground
from .gradual import GradualMaskGenerator, gradualize
from .refiner import MaskRefiner, refine_mask
from .stroke_mask import StrokeMaskPainter, paint_strokes

__all__ = [
    "EdgeMaskEstimator",
    "GradualMaskGenerator",
    "MaskRefiner",
    "StrokeMaskPainter",
    "estimate_foreground",
    "gradualize",
    "paint_strokes",
    "refine_mask",
]
