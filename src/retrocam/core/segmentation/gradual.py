"""Turn a binary subject mask into a smooth blur-strength map."""

from __future__ import annotations

import cv2
import numpy as np

from ..pixels import clamp_to_uint8, ensure_mask


def gradualize(mask: np.ndarray) -> np.ndarray:
    """Return the normalised distance of every pixel to the subject.

    Pixels at or above 128 count as subject.  Subject pixels map to 0 and the
    farthest background pixel maps to 255, so the value grows with the blur a
    pixel should receive.  A mask without any subject pixel yields 255
    everywhere.
    """

    mask = ensure_mask(mask)
    foreground = mask >= 128
    if not foreground.any():
        return np.full(mask.shape, 255, dtype=np.uint8)
    if foreground.all():
        return np.zeros(mask.shape, dtype=np.uint8)

    background = np.where(foreground, 0, 255).astype(np.uint8)
    distances = cv2.distanceTransform(background, cv2.DIST_L2, cv2.DIST_MASK_PRECISE)
    normalised = cv2.normalize(distances, None, 0.0, 1.0, cv2.NORM_MINMAX)
    return clamp_to_uint8(normalised * 255.0)


class GradualMaskGenerator:
    """Object form of :func:`gradualize` for symmetry with the other producers.

    The strength map does not depend on how strong the blur will be, so
    ``gradualize`` takes no maximum intensity.  The maximum is passed to
    :func:`retrocam.core.background_blur.composite_gradual`, which inverts the
    map and hands it to the compositor together with that intensity.
    """

    def gradualize(self, mask: np.ndarray) -> np.ndarray:
        return gradualize(mask)
