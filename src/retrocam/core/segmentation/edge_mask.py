"""Automatic foreground detection from edges and filled contours."""

from __future__ import annotations

import logging

import cv2
import numpy as np

from ...config import DEFAULT_SETTINGS, SegmentationSettings
from ..pixels import ensure_image, luminance

_LOGGER = logging.getLogger(__name__)


class EdgeMaskEstimator:
    """Estimate the salient subject of a photograph.

    The estimator smooths the luminance, runs Canny, closes small gaps in the
    edge map with a dilation and fills every external contour.  A final wide
    Gaussian pass softens the filled silhouette so it blends without a seam.
    Images without edges produce an all-zero mask, which callers should read
    as "no subject found" rather than as an error.
    """

    def __init__(self, settings: SegmentationSettings | None = None) -> None:
        self._settings = (settings or DEFAULT_SETTINGS.segmentation).validate()

    @property
    def settings(self) -> SegmentationSettings:
        return self._settings

    def estimate(self, image: np.ndarray) -> np.ndarray:
        """Return a foreground mask with the same resolution as *image*."""

        image = ensure_image(image)
        cfg = self._settings

        gray = luminance(image)
        gray = cv2.GaussianBlur(gray, (cfg.pre_blur_kernel, cfg.pre_blur_kernel), 0)

        edges = cv2.Canny(gray, cfg.canny_low, cfg.canny_high)
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (cfg.dilate_kernel, cfg.dilate_kernel))
        dilated = cv2.dilate(edges, kernel)

        contours, _hierarchy = cv2.findContours(
            dilated, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
        )

        mask = np.zeros(gray.shape, dtype=np.uint8)
        if contours:
            cv2.drawContours(mask, contours, -1, 255, thickness=cv2.FILLED)
        _LOGGER.debug("Filled %d external contour(s)", len(contours))

        return cv2.GaussianBlur(mask, (cfg.mask_blur_kernel, cfg.mask_blur_kernel), 0)


def estimate_foreground(
    image: np.ndarray, *, settings: SegmentationSettings | None = None
) -> np.ndarray:
    """Convenience wrapper around :meth:`EdgeMaskEstimator.estimate`."""

    return EdgeMaskEstimator(settings).estimate(image)
