"""Refine a coarse subject mask with OpenCV's GrabCut."""

from __future__ import annotations

import logging

import cv2
import numpy as np

from ...config import DEFAULT_SETTINGS, SegmentationSettings
from ..pixels import ensure_image, ensure_mask, resample_mask

_LOGGER = logging.getLogger(__name__)

_FOREGROUND_LABELS = (cv2.GC_FGD, cv2.GC_PR_FGD)
_BACKGROUND_LABELS = (cv2.GC_BGD, cv2.GC_PR_BGD)


class MaskRefiner:
    """Snap a coarse mask to the colour boundaries of the photograph.

    Mask values above ``definite_foreground`` and below
    ``definite_background`` become hard GrabCut constraints.  Everything in
    between is "probable" and starts on the side of 128 it already leans to,
    so the colour models have samples on both sides even when the coarse mask
    carries no definite pixels at all.

    Two edge cases skip the graph cut entirely:

    * a fully seeded mask (every value definite) is returned as its seeds,
      which makes refining an already binary mask a no-op;
    * a mask whose labels all fall on one side has nothing to separate, so
      every pixel keeps that side.

    When no pixel is definite the cut still runs, just without hard
    constraints.  The output can differ a lot from the seeded case because
    GrabCut is then free to relabel any pixel.
    """

    def __init__(self, settings: SegmentationSettings | None = None) -> None:
        self._settings = (settings or DEFAULT_SETTINGS.segmentation).validate()

    @property
    def settings(self) -> SegmentationSettings:
        return self._settings

    def seed_labels(self, coarse_mask: np.ndarray) -> np.ndarray:
        """Return the GrabCut label map seeded from *coarse_mask*."""

        cfg = self._settings
        labels = np.where(coarse_mask >= 128, cv2.GC_PR_FGD, cv2.GC_PR_BGD).astype(np.uint8)
        labels[coarse_mask > cfg.definite_foreground] = cv2.GC_FGD
        labels[coarse_mask < cfg.definite_background] = cv2.GC_BGD
        return labels

    def refine(self, image: np.ndarray, coarse_mask: np.ndarray) -> np.ndarray:
        """Return a refined mask with the resolution of *image*."""

        image = ensure_image(image)
        coarse = ensure_mask(coarse_mask, name="coarse_mask")
        height, width = image.shape[:2]
        if coarse.shape != (height, width):
            _LOGGER.debug(
                "Resampling coarse mask from %dx%d to %dx%d",
                coarse.shape[1],
                coarse.shape[0],
                width,
                height,
            )
            coarse = resample_mask(coarse, width, height)

        cfg = self._settings
        labels = self.seed_labels(coarse)
        definite_fg = labels == cv2.GC_FGD
        definite_bg = labels == cv2.GC_BGD
        probable = ~(definite_fg | definite_bg)

        if probable.any():
            if not (definite_fg.any() or definite_bg.any()):
                _LOGGER.info("Coarse mask has no definite pixels; running unconstrained cut")
            has_fg = np.isin(labels, _FOREGROUND_LABELS).any()
            has_bg = np.isin(labels, _BACKGROUND_LABELS).any()
            if has_fg and has_bg:
                rgb = cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
                bgd_model = np.zeros((1, 65), np.float64)
                fgd_model = np.zeros((1, 65), np.float64)
                cv2.grabCut(
                    rgb,
                    labels,
                    None,
                    bgd_model,
                    fgd_model,
                    cfg.grabcut_iterations,
                    cv2.GC_INIT_WITH_MASK,
                )
            else:
                _LOGGER.debug("Coarse mask only holds one class; skipping graph cut")
        else:
            _LOGGER.debug("Coarse mask is fully seeded; skipping graph cut")

        binary = np.where(np.isin(labels, _FOREGROUND_LABELS), 255, 0).astype(np.uint8)
        smoothed = cv2.GaussianBlur(binary, (cfg.refine_blur_kernel, cfg.refine_blur_kernel), 0)
        # Hard constraints survive the smoothing pass.
        smoothed[definite_fg] = 255
        smoothed[definite_bg] = 0
        return smoothed


def refine_mask(
    image: np.ndarray,
    coarse_mask: np.ndarray,
    *,
    settings: SegmentationSettings | None = None,
) -> np.ndarray:
    """Convenience wrapper around :meth:`MaskRefiner.refine`."""

    return MaskRefiner(settings).refine(image, coarse_mask)
