"""Background blur tool tying the mask producers to the compositor."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import numpy as np

from ..config import DEFAULT_SETTINGS, Settings
from ..errors import InvalidParameter
from .blur import composite, validate_intensity
from .pixels import ensure_image, ensure_mask, invert_mask, resample_mask
from .segmentation import EdgeMaskEstimator, MaskRefiner, gradualize, paint_strokes

_LOGGER = logging.getLogger(__name__)

MODE_AUTO = 0
"""Detect the subject automatically from edges."""

MODE_MANUAL = 1
"""Use the region painted by the user's strokes as the subject."""


def composite_gradual(
    original: np.ndarray,
    mask: np.ndarray,
    max_intensity: int,
    *,
    settings: Settings | None = None,
) -> np.ndarray:
    """Blur the background progressively stronger away from the subject.

    The subject mask is turned into a distance map with :func:`gradualize`.
    That map encodes blur strength, so it is inverted before compositing,
    where 255 means "keep sharp".
    """

    cfg = settings or DEFAULT_SETTINGS
    original = ensure_image(original)
    max_intensity = validate_intensity(max_intensity, cfg.blur)
    mask = ensure_mask(mask)
    height, width = original.shape[:2]
    mask = resample_mask(mask, width, height)
    strength = gradualize(mask)
    return composite(original, invert_mask(strength), max_intensity, settings=cfg.blur)


class BackgroundBlurTool:
    """Separate the subject from the background and blur the latter."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._estimator = EdgeMaskEstimator(self._settings.segmentation)
        self._refiner = MaskRefiner(self._settings.segmentation)

    @property
    def settings(self) -> Settings:
        return self._settings

    def detect_foreground(self, image: np.ndarray) -> np.ndarray:
        """Return a mask where white marks the detected subject."""

        return self._estimator.estimate(image)

    def create_manual_mask(
        self,
        image: np.ndarray,
        points: Iterable[Sequence[float]],
        brush_size: float,
    ) -> np.ndarray:
        """Return a mask covering the stroke painted over *image*."""

        image = ensure_image(image)
        height, width = image.shape[:2]
        return paint_strokes(
            width,
            height,
            points,
            brush_size,
            supersampling=self._settings.segmentation.brush_supersampling,
        )

    def refine_mask(self, image: np.ndarray, mask: np.ndarray) -> np.ndarray:
        return self._refiner.refine(image, mask)

    def invert_mask(self, mask: np.ndarray) -> np.ndarray:
        return invert_mask(mask)

    def apply_background_blur(
        self, image: np.ndarray, mask: np.ndarray, intensity: int
    ) -> np.ndarray:
        return composite(image, mask, intensity, settings=self._settings.blur)

    def apply_gradual_blur(
        self, image: np.ndarray, mask: np.ndarray, max_intensity: int
    ) -> np.ndarray:
        return composite_gradual(image, mask, max_intensity, settings=self._settings)

    def process(
        self,
        image: np.ndarray,
        intensity: int,
        *,
        mode: int = MODE_AUTO,
        points: Iterable[Sequence[float]] = (),
        brush_size: float = 1.0,
        refine: bool = False,
        gradual: bool = False,
    ) -> np.ndarray:
        """Run the full pipeline: mask source, optional refinement, blur."""

        image = ensure_image(image)
        validate_intensity(intensity, self._settings.blur)

        if mode == MODE_AUTO:
            mask = self.detect_foreground(image)
        elif mode == MODE_MANUAL:
            mask = self.create_manual_mask(image, points, brush_size)
        else:
            raise InvalidParameter(f"mode must be MODE_AUTO or MODE_MANUAL, got {mode!r}")
        _LOGGER.debug("Mask source %s, refine=%s, gradual=%s", mode, refine, gradual)

        if refine:
            mask = self.refine_mask(image, mask)
        if gradual:
            return self.apply_gradual_blur(image, mask, intensity)
        return self.apply_background_blur(image, mask, intensity)


__all__ = ["BackgroundBlurTool", "MODE_AUTO", "MODE_MANUAL", "composite_gradual"]
