"""Rasterise touch strokes into a selection mask."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
from PIL import Image, ImageDraw

from ...config import DEFAULT_SETTINGS
from ...errors import InvalidParameter
from ..pixels import clamp_to_uint8, new_mask

Point = tuple[float, float]


def _to_canvas(point: Sequence[float], scale: int) -> Point:
    """Map continuous image coordinates onto the supersampled canvas.

    Pillow addresses pixel centres with integer coordinates whereas touch
    points treat pixel ``i`` as covering ``[i, i + 1)``, hence the half-pixel
    shift.
    """

    return float(point[0]) * scale - 0.5, float(point[1]) * scale - 0.5


def paint_strokes(
    width: int,
    height: int,
    points: Iterable[Sequence[float]],
    brush_diameter: float,
    *,
    supersampling: int | None = None,
) -> np.ndarray:
    """Return a mask with the stroke through *points* painted at 255.

    A single point becomes a filled disc of ``brush_diameter``; two or more
    points become a polyline with round caps and joins.  The stroke is drawn
    on a canvas ``supersampling`` times larger than the mask and box-filtered
    down, which yields anti-aliased edges without any shared state.
    """

    mask = new_mask(width, height)
    diameter = float(brush_diameter)
    if not diameter > 0.0:
        raise InvalidParameter(f"brush diameter must be positive, got {brush_diameter!r}")

    scale = int(supersampling or DEFAULT_SETTINGS.segmentation.brush_supersampling)
    if scale < 1:
        raise InvalidParameter(f"supersampling must be at least 1, got {scale}")

    scaled = [_to_canvas(point, scale) for point in points]
    if not scaled:
        return mask

    canvas = Image.new("L", (mask.shape[1] * scale, mask.shape[0] * scale), 0)
    draw = ImageDraw.Draw(canvas)
    radius = diameter * scale / 2.0

    if len(scaled) > 1:
        draw.line(scaled, fill=255, width=max(1, int(round(diameter * scale))), joint="curve")
    # Discs at every vertex give the round caps and fill the outer side of joins.
    for x, y in scaled:
        draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=255)

    coverage = np.asarray(canvas, dtype=np.float32)
    coverage = coverage.reshape(mask.shape[0], scale, mask.shape[1], scale).mean(axis=(1, 3))
    return clamp_to_uint8(coverage)


class StrokeMaskPainter:
    """Object wrapper for hosts that keep a painter per editing session."""

    def __init__(self, supersampling: int | None = None) -> None:
        self._supersampling = supersampling

    def paint(
        self,
        width: int,
        height: int,
        points: Iterable[Sequence[float]],
        brush_diameter: float,
    ) -> np.ndarray:
        return paint_strokes(
            width, height, points, brush_diameter, supersampling=self._supersampling
        )
