"""Validation and conversion helpers for RGBA pixel buffers and masks.

Images are ``(height, width, 4)`` ``uint8`` arrays in RGBA order and masks are
``(height, width)`` ``uint8`` arrays where 255 marks the sharp foreground and
0 the background.  Every public operation in :mod:`retrocam.core` funnels its
arguments through :func:`ensure_image` / :func:`ensure_mask` so shape problems
surface as :class:`~retrocam.errors.InvalidDimensions` before any numeric work
starts.
"""

from __future__ import annotations

import cv2
import numpy as np

from ..errors import InvalidDimensions

CHANNELS = 4


def ensure_image(image: np.ndarray, *, name: str = "image") -> np.ndarray:
    """Return *image* after checking it is a non-empty RGBA ``uint8`` buffer."""

    if not isinstance(image, np.ndarray):
        raise InvalidDimensions(f"{name} must be a numpy array, got {type(image).__name__}")
    if image.dtype != np.uint8:
        raise InvalidDimensions(f"{name} must have dtype uint8, got {image.dtype}")
    if image.ndim != 3 or image.shape[2] != CHANNELS:
        raise InvalidDimensions(f"{name} must have shape (height, width, 4), got {image.shape}")
    if image.shape[0] <= 0 or image.shape[1] <= 0:
        raise InvalidDimensions(f"{name} has an empty extent {image.shape[:2]}")
    return image


def ensure_mask(mask: np.ndarray, *, name: str = "mask") -> np.ndarray:
    """Return *mask* as a single-channel ``uint8`` array.

    RGBA masks (as produced by hosts that store masks in ordinary bitmaps) are
    accepted and collapsed onto their first colour channel; mask producers
    always write the same value into R, G and B.
    """

    if not isinstance(mask, np.ndarray):
        raise InvalidDimensions(f"{name} must be a numpy array, got {type(mask).__name__}")
    if mask.dtype != np.uint8:
        raise InvalidDimensions(f"{name} must have dtype uint8, got {mask.dtype}")
    if mask.ndim == 3 and mask.shape[2] in (1, 3, CHANNELS):
        mask = np.ascontiguousarray(mask[:, :, 0])
    if mask.ndim != 2:
        raise InvalidDimensions(f"{name} must be 2-D or an RGBA image, got shape {mask.shape}")
    if mask.shape[0] <= 0 or mask.shape[1] <= 0:
        raise InvalidDimensions(f"{name} has an empty extent {mask.shape}")
    return mask


def ensure_same_size(image: np.ndarray, mask: np.ndarray) -> None:
    """Raise :class:`InvalidDimensions` unless *mask* covers *image* exactly."""

    if image.shape[:2] != mask.shape[:2]:
        raise InvalidDimensions(
            f"mask size {mask.shape[1]}x{mask.shape[0]} does not match "
            f"image size {image.shape[1]}x{image.shape[0]}"
        )


def new_mask(width: int, height: int) -> np.ndarray:
    """Return an all-zero mask of ``width`` x ``height``."""

    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"mask size must be positive, got {width}x{height}")
    return np.zeros((int(height), int(width)), dtype=np.uint8)


def luminance(image: np.ndarray) -> np.ndarray:
    """Return the single-channel luminance of an RGBA *image*."""

    return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)


def resample_mask(mask: np.ndarray, width: int, height: int) -> np.ndarray:
    """Return *mask* resized to ``width`` x ``height`` with bilinear filtering."""

    if mask.shape[1] == width and mask.shape[0] == height:
        return mask
    return cv2.resize(mask, (int(width), int(height)), interpolation=cv2.INTER_LINEAR)


def mask_to_image(mask: np.ndarray) -> np.ndarray:
    """Expand a single-channel *mask* into an opaque grey RGBA image."""

    mask = ensure_mask(mask)
    rgba = cv2.cvtColor(mask, cv2.COLOR_GRAY2RGBA)
    rgba[:, :, 3] = 255
    return rgba


def invert_mask(mask: np.ndarray) -> np.ndarray:
    """Swap the sharp and blurred regions of *mask*."""

    mask = ensure_mask(mask)
    return 255 - mask


def clamp_to_uint8(values: np.ndarray) -> np.ndarray:
    """Round float *values* and clamp them into the ``uint8`` range."""

    return np.clip(np.rint(values), 0.0, 255.0).astype(np.uint8)
