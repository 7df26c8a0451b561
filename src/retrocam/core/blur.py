"""Composite a blurred copy of a photograph with the original through a mask."""

from __future__ import annotations

import logging
import numbers

import cv2
import numpy as np

from ..config import DEFAULT_SETTINGS, BlurSettings
from ..errors import InvalidParameter
from .pixels import clamp_to_uint8, ensure_image, ensure_mask, resample_mask

_LOGGER = logging.getLogger(__name__)


def validate_intensity(intensity: int, settings: BlurSettings | None = None) -> int:
    """Return *intensity* as ``int`` or raise :class:`InvalidParameter`."""

    cfg = settings or DEFAULT_SETTINGS.blur
    if isinstance(intensity, bool) or not isinstance(intensity, numbers.Integral):
        raise InvalidParameter(f"blur intensity must be an integer, got {intensity!r}")
    value = int(intensity)
    if not cfg.min_intensity <= value <= cfg.max_intensity:
        raise InvalidParameter(
            f"blur intensity must be within {cfg.min_intensity}..{cfg.max_intensity}, got {value}"
        )
    return value


def gaussian_blur(
    image: np.ndarray, intensity: int, *, settings: BlurSettings | None = None
) -> np.ndarray:
    """Return a uniformly blurred copy of *image* for a blur of radius *intensity*."""

    cfg = settings or DEFAULT_SETTINGS.blur
    image = ensure_image(image)
    radius = validate_intensity(intensity, cfg)
    sigma = cfg.sigma_for(radius)
    return cv2.GaussianBlur(np.ascontiguousarray(image), (0, 0), sigmaX=sigma, sigmaY=sigma)


def blend_with_mask(original: np.ndarray, blurred: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Return ``original * m + blurred * (1 - m)`` with ``m = mask / 255``.

    The result is a new opaque buffer; none of the three inputs is written.
    """

    weight = mask.astype(np.float32)[:, :, None] / np.float32(255.0)
    sharp = original[:, :, :3].astype(np.float32)
    soft = blurred[:, :, :3].astype(np.float32)

    result = np.empty_like(original)
    result[:, :, :3] = clamp_to_uint8(sharp * weight + soft * (1.0 - weight))
    result[:, :, 3] = 255
    return result


def composite(
    original: np.ndarray,
    mask: np.ndarray,
    intensity: int,
    *,
    settings: BlurSettings | None = None,
) -> np.ndarray:
    """Blur *original* where *mask* is dark and keep it sharp where it is bright.

    Masks of a different size are resampled bilinearly to the image.  The
    returned image always has the resolution of *original*.
    """

    original = ensure_image(original)
    mask = ensure_mask(mask)
    blurred = gaussian_blur(original, intensity, settings=settings)

    height, width = original.shape[:2]
    if mask.shape != (height, width):
        _LOGGER.debug(
            "Resampling mask from %dx%d to %dx%d",
            mask.shape[1],
            mask.shape[0],
            width,
            height,
        )
        mask = resample_mask(mask, width, height)

    return blend_with_mask(original, blurred, mask)


class BlurCompositor:
    """Hold blur settings for repeated compositing calls."""

    def __init__(self, settings: BlurSettings | None = None) -> None:
        self._settings = (settings or DEFAULT_SETTINGS.blur).validate()

    @property
    def settings(self) -> BlurSettings:
        return self._settings

    def composite(self, original: np.ndarray, mask: np.ndarray, intensity: int) -> np.ndarray:
        return composite(original, mask, intensity, settings=self._settings)


__all__ = [
    "BlurCompositor",
    "blend_with_mask",
    "composite",
    "gaussian_blur",
    "validate_intensity",
]
